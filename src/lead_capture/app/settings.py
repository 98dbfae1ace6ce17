from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    # flat = easy env overrides
    name: str = "Lead Capture API"
    version: str = "0.1.0"

    # Label stored when a submission carries no product
    default_product: str = Field(default="General")

    # "*" reflects any Origin back (credentials allowed); otherwise comma separated
    cors_origins: str = Field(default="*")
    cors_allow_credentials: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="APP_",            # APP_NAME, APP_DEFAULT_PRODUCT, ...
        env_file=".env",
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def cors_allow_all(self) -> bool:
        return self.cors_origins_list == ["*"]


@lru_cache
def get_app_settings(**kwargs) -> AppSettings:
    # Only include kwargs that are not None, so defaults in AppSettings are used
    filtered_kwargs = {k: v for k, v in kwargs.items() if v is not None}
    return AppSettings(**filtered_kwargs)
