from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query
from starlette.responses import Response

from ..dependencies import DownloadProxyDep

router = APIRouter(prefix="/api", tags=["downloads"])


@router.get("/download", response_class=Response)
async def download(proxy: DownloadProxyDep, movie: Optional[str] = Query(default=None)):
    file = await proxy.download(movie)
    return Response(content=file.content, media_type=file.media_type, headers=file.headers)
