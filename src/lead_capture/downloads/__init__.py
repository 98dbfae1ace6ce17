from .proxy import DownloadedFile, DownloadProxy, content_disposition, sanitize_filename
from .settings import DownloadSettings, get_download_settings

__all__ = [
    "DownloadedFile",
    "DownloadProxy",
    "DownloadSettings",
    "content_disposition",
    "get_download_settings",
    "sanitize_filename",
]
