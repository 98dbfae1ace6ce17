from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

import httpx

from lead_capture.exceptions import UpstreamFetchError
from lead_capture.http import new_async_httpx_client

from .settings import DownloadSettings

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
MAX_NAME_LENGTH = 100
MAX_FILENAME_LENGTH = 200


def sanitize_filename(raw: Optional[str], *, fallback: str = "download", max_length: int = MAX_NAME_LENGTH) -> str:
    """Reduce ``raw`` to ``[A-Za-z0-9._-]`` so it can sit inside a quoted header value."""
    cleaned = _clean(raw, max_length)
    return cleaned or _clean(fallback, max_length) or "download"


def _clean(raw: Optional[str], max_length: int) -> str:
    return _UNSAFE_CHARS.sub("_", raw or "").lstrip("._").rstrip("_")[:max_length]


def content_disposition(filename: str) -> str:
    return f'attachment; filename="{filename}"'


@dataclass(frozen=True)
class DownloadedFile:
    filename: str
    content: bytes
    media_type: str = "application/octet-stream"

    @property
    def headers(self) -> dict[str, str]:
        return {"Content-Disposition": content_disposition(self.filename)}


class DownloadProxy:
    """Fetches the configured upstream file and names it for the client."""

    def __init__(self, settings: DownloadSettings, *, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def filename_for(self, name: Optional[str]) -> str:
        default = sanitize_filename(self.settings.default_name)
        safe_name = sanitize_filename(name, fallback=default)
        filename = self.settings.filename_template.replace("{name}", safe_name)
        return sanitize_filename(filename, fallback=safe_name, max_length=MAX_FILENAME_LENGTH)

    async def download(self, name: Optional[str] = None) -> DownloadedFile:
        filename = self.filename_for(name)
        content = await self.fetch()
        logger.info("Download served", extra={"download_filename": filename, "size": len(content)})
        return DownloadedFile(filename=filename, content=content)

    async def fetch(self) -> bytes:
        url = self.settings.url
        if not url:
            raise UpstreamFetchError("Download source is not configured")

        limit = self.settings.max_bytes
        try:
            async with new_async_httpx_client(
                transport=self._transport,
                follow_redirects=True,
                headers={"User-Agent": self.settings.user_agent},
            ) as client:
                async with client.stream("GET", url) as resp:
                    if not resp.is_success:
                        logger.warning("Upstream download failed", extra={"upstream_status": resp.status_code})
                        raise UpstreamFetchError(f"Failed to fetch file: {resp.status_code}")
                    if _declared_length(resp) > limit:
                        raise UpstreamFetchError("Remote file is too large")
                    # whole body is buffered; fine for the small files this serves
                    body = bytearray()
                    async for chunk in resp.aiter_bytes():
                        body.extend(chunk)
                        if len(body) > limit:
                            raise UpstreamFetchError("Remote file is too large")
        except httpx.HTTPError as exc:
            logger.warning("Upstream download errored: %s", exc)
            raise UpstreamFetchError(f"Failed to fetch file: {exc}") from exc
        return bytes(body)


def _declared_length(resp: httpx.Response) -> int:
    raw = resp.headers.get("content-length")
    if raw is None:
        return 0
    try:
        return int(raw)
    except ValueError:
        return 0
