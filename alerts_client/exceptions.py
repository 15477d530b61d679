from enum import Enum


class ErrorCode(str, Enum):
    """
    An enumeration of error codes.
    """

    NOT_FOUND = "not_found"
    MALFORMED_RESPONSE = "malformed_response"


class AlertsClientError(Exception):
    def __init__(self, code: ErrorCode, detail: str):
        super().__init__(detail)
        self.code = code
        self.detail = detail


class ChannelNotFoundError(AlertsClientError):
    def __init__(self, channel_id: int):
        self.channel_id = channel_id
        detail = f"No channel found for id {channel_id}"
        super().__init__(code=ErrorCode.NOT_FOUND, detail=detail)


class MalformedResponseError(AlertsClientError):
    """The service answered successfully but the body is not the expected envelope."""

    def __init__(self, detail: str):
        super().__init__(code=ErrorCode.MALFORMED_RESPONSE, detail=detail)
