from alembic.config import Config

from alembic import command
from bladeleague.utils.logging import logger


def get_alembic_config() -> Config:
    alembic_config = Config("alembic.ini")
    alembic_config.attributes["configure_logger"] = False
    return alembic_config


def alembic_run_migrations() -> None:
    logger.info("Running migrations")
    command.upgrade(get_alembic_config(), "head")
