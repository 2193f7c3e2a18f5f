from enum import auto

from pydantic_settings import BaseSettings, SettingsConfigDict

from bladeleague.utils.types import EnumAutoStr


class Environment(EnumAutoStr):
    DEVELOPMENT = auto()
    PRODUCTION = auto()
    CI = auto()


class StoreBackend(EnumAutoStr):
    MEMORY = auto()
    DATABASE = auto()


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BLADELEAGUE_", env_file=".env", extra="ignore")

    environment: Environment = Environment.DEVELOPMENT
    api_prefix: str = ""
    store_backend: StoreBackend = StoreBackend.MEMORY
    database_url: str = "sqlite:///./bladeleague.db"
    auto_run_migrations: bool = False
    log_level: str = "INFO"
    default_scoring_win: float = 2
    default_scoring_loss: float = 1
    cors_origins: str = "*"

    def is_production(self) -> bool:
        return self.environment is Environment.PRODUCTION


config = Config()
