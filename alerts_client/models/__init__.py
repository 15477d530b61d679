from pydantic import BaseModel as _BaseModel, ConfigDict


class BaseModel(_BaseModel):
    """
    Custom base class for pydantic models
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)
