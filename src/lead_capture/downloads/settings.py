from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DownloadSettings(BaseSettings):
    """
    File-proxy settings.

    Env support:
      DOWNLOAD_URL, DOWNLOAD_DEFAULT_NAME, DOWNLOAD_FILENAME_TEMPLATE,
      DOWNLOAD_USER_AGENT, DOWNLOAD_MAX_BYTES
    """

    url: Optional[str] = Field(default=None)
    default_name: str = Field(default="download")
    # "{name}" is replaced by the sanitized logical name
    filename_template: str = Field(default="{name}.bin")
    user_agent: str = Field(default="lead-capture/0.1 (+file-proxy)")
    max_bytes: int = Field(default=50 * 1024 * 1024, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="DOWNLOAD_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("filename_template")
    @classmethod
    def _template_has_name(cls, v: str) -> str:
        if "{name}" not in v:
            raise ValueError("filename_template must contain '{name}'")
        return v


@lru_cache
def get_download_settings(**kwargs) -> DownloadSettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return DownloadSettings(**filtered)
