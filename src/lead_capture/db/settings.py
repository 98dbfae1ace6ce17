from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from lead_capture.app.core.env import Env, get_env
from lead_capture.exceptions import ConfigurationError

LOCAL_MONGODB_URI = "mongodb://localhost:27017"


class MongoSettings(BaseSettings):
    """
    MongoDB settings.

    Env support:
      MONGODB_URI, MONGODB_DB_NAME, MONGODB_COLLECTION,
      MONGODB_CONNECT_TIMEOUT_SECONDS, MONGODB_MAX_POOL_SIZE,
      MONGODB_UNIQUE_EMAIL, MONGODB_CONNECT_ON_STARTUP

    A database named in the URI path wins over ``db_name``.
    """

    uri: Optional[str] = Field(default=None)
    db_name: str = Field(default="lead_capture")
    collection: str = Field(default="users")
    connect_timeout_seconds: float = Field(default=10.0, gt=0)
    max_pool_size: int = Field(default=10, ge=1)
    unique_email: bool = Field(default=True)
    connect_on_startup: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix="MONGODB_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def uri_configured(self) -> bool:
        return bool(self.uri)

    def resolved_uri(self, env: Env | None = None) -> str:
        if self.uri:
            return self.uri
        if (env or get_env()) is Env.PROD:
            raise ConfigurationError("MONGODB_URI must be set in production")
        return LOCAL_MONGODB_URI


@lru_cache
def get_mongo_settings(**kwargs) -> MongoSettings:
    # Only include kwargs that are not None, so defaults in MongoSettings are used
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return MongoSettings(**filtered)
