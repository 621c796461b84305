import logging
import os

LOG_LEVEL = os.getenv("VENDING_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Return a configured logger. Initializes basicConfig once.
    """
    if not logging.getLogger().handlers:
        logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    return logging.getLogger(name)


def set_log_level(level: str) -> None:
    """Aplica el nivel configurado en Settings a los loggers de la app."""
    logging.getLogger("app").setLevel(level.upper())
