import logging
import os
from dotenv import load_dotenv

# charge immédiatement le .env
load_dotenv()

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _resolve_level() -> str:
    """
    Niveau de log : TETRIO_LOG_LEVEL prime sur LOG_LEVEL.
    Un niveau inconnu retombe sur INFO.
    """
    level = (os.getenv("TETRIO_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        return "INFO"
    return level


def get_logger(name: str) -> logging.Logger:
    """Logger du client Tetra Channel, handler console unique par nom."""
    level = _resolve_level()

    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.debug("Logger '%s' prêt (level=%s)", name, level)
    return logger
