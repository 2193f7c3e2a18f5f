import logging

from bladeleague.config import config


def create_logger(level: int) -> logging.Logger:
    logger = logging.getLogger("bladeleague")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
        logger.addHandler(handler)

    return logger


logger = create_logger(logging.getLevelName(config.log_level.upper()))
