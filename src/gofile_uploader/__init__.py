"""Gofile Uploader - A Python client for the Gofile file-hosting API.

Example usage:
    from gofile_uploader import GofileClient, TempBuffer

    with GofileClient("my-token") as client:
        server = client.get_server()
        with open("video.mp4", "rb") as f:
            upload = client.upload_file(
                server,
                "folder-id",
                "video.mp4",
                f,
                temp_buffer=TempBuffer.temp_file("/var/tmp"),
                on_send=lambda total, sent: print(f"{sent}/{total}"),
            )
        print(upload.download_page)
"""

from gofile_uploader._internal.staging import TempBuffer, TempBufferType
from gofile_uploader.client import GofileClient
from gofile_uploader.config import Settings, get_settings
from gofile_uploader.exceptions import (
    ApiStatusError,
    DecodeError,
    GofileError,
    MissingTokenError,
    StagingError,
    StagingInitError,
    StagingIOError,
    StagingSealError,
    TransportError,
)
from gofile_uploader.models import (
    AccountDetails,
    ContentInfo,
    ContentResult,
    FileUpload,
    FolderCreated,
    FolderOption,
    Limit,
)

__version__ = "0.1.0"

__all__ = [
    # Main client
    "GofileClient",
    # Configuration
    "Settings",
    "get_settings",
    "TempBuffer",
    "TempBufferType",
    # Models
    "AccountDetails",
    "ContentInfo",
    "ContentResult",
    "FileUpload",
    "FolderCreated",
    "FolderOption",
    "Limit",
    # Exceptions
    "GofileError",
    "TransportError",
    "DecodeError",
    "ApiStatusError",
    "MissingTokenError",
    "StagingError",
    "StagingInitError",
    "StagingSealError",
    "StagingIOError",
]
