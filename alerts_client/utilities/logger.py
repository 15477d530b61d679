import logging
import sys

from alerts_client.models.enums import Environment

LOGGER_NAME = "alerts_client"
# identifies the handler installed here among the ones the host application adds
HANDLER_NAME = "alerts_client"

DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def build_handler(env: str = Environment.DEV) -> logging.Handler:
    """
    Console handler for the client's records: rich output while developing,
    plain single line records on stdout in production.
    """
    handler: logging.Handler
    if env != Environment.PROD:
        from rich.logging import RichHandler

        handler = RichHandler(rich_tracebacks=True, show_path=False, log_time_format=DATE_FORMAT)
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.set_name(HANDLER_NAME)
    return handler


def configure_logger(settings) -> logging.Logger:
    """
    Sends the records of the `alerts_client` loggers to the console at
    `settings.LOGGING_LEVEL`.

    Calling it again replaces the handler installed by the previous call. The root
    logger and handlers added by the host application are not touched, records stop
    propagating so they are not printed twice.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            logger.removeHandler(handler)
            handler.close()

    logger.addHandler(build_handler(env=settings.ENV))
    logger.setLevel(settings.LOGGING_LEVEL)
    logger.propagate = False
    return logger
