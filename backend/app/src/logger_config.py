import logging
import os

import uvicorn

FORMAT = "%(levelprefix)s %(asctime)s [%(name)s] %(message)s"


def get_logger(name: str = __name__) -> logging.Logger:
    """Return a logger printing in uvicorn's style at LOG_LEVEL (INFO by default)."""
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = uvicorn.logging.DefaultFormatter(
            FORMAT, datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
