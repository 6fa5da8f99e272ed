# filmorate_api/core/config.py
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "filmorate"
    env: str = Field(default="local")

    # memory | mongo
    storage_backend: Literal["memory", "mongo"] = Field(
        default="memory",
        alias="STORAGE_BACKEND"
    )

    mongo_dsn: str = Field(
        default="mongodb://mongo:27017/filmorate?replicaSet=rs0",
        alias="MONGO_DSN"
    )
    mongo_db: str = "filmorate"
    # multi-document transactions need a replica set
    mongo_transactions: bool = Field(default=True,
                                     alias="MONGO_TRANSACTIONS")

    sentry_dsn: str = Field(default="", alias="SENTRY_DSN")

    popular_default_count: int = 10

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
