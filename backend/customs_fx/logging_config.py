"""Logging setup shared by the API and the scripts."""
import logging
import sys
import threading

LOG_NAME = "customs_fx"
PLAIN_FORMAT = "%(asctime)s [%(levelname)s] - (%(name)s).%(funcName)s(%(lineno)d) - %(message)s"

_lock = threading.Lock()
_configured = False


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a console handler to the application logger once."""
    global _configured
    logger = logging.getLogger(LOG_NAME)
    with _lock:
        if _configured:
            logger.setLevel(level.upper())
            return logger
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(level.upper())
        logger.propagate = False
        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)
        _configured = True
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOG_NAME}.{name}")
