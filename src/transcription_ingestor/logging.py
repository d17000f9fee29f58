import logging
import sys

from pythonjsonlogger import jsonlogger


def setup_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Configures structured JSON logging for the ingestor.

    Call once at startup; modules log through `logging.getLogger(__name__)`
    and propagate to the root handler installed here. The JSON records carry
    timestamp, level, logger name, message, trace_id and span_id. Uvicorn's
    loggers get the same handler so access logs share the format.

    Calling it again replaces the handlers rather than stacking them.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [stream_handler]

    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        u_logger = logging.getLogger(logger_name)
        u_logger.setLevel(level)
        u_logger.handlers = [stream_handler]
        u_logger.propagate = False

    return root_logger
