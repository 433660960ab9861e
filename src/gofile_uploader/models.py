"""Data models for the gofile_uploader library."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FolderOption(str, Enum):
    """Options accepted by the setFolderOption endpoint."""

    PUBLIC = "public"
    PASSWORD = "password"
    DESCRIPTION = "description"
    EXPIRE = "expire"
    TAGS = "tags"


@dataclass(frozen=True)
class Limit:
    """An account quota that is either a number or unlimited.

    The service reports quotas as a number, or as ``false`` when the
    account tier has no limit.
    """

    value: int | None = None

    @classmethod
    def from_api(cls, raw: Any) -> Limit:
        """Build a Limit from the raw JSON value."""
        if raw is None or raw is False:
            return cls(None)
        if isinstance(raw, bool):
            raise ValueError(f"Unexpected limit value: {raw!r}")
        if isinstance(raw, (int, float)):
            return cls(int(raw))
        if isinstance(raw, str) and raw.strip().isdigit():
            return cls(int(raw))
        raise ValueError(f"Unexpected limit value: {raw!r}")

    @property
    def is_unlimited(self) -> bool:
        return self.value is None

    def allows(self, amount: int) -> bool:
        """Check whether amount stays within the limit."""
        return self.value is None or amount <= self.value

    def __str__(self) -> str:
        return "unlimited" if self.value is None else str(self.value)


@dataclass(frozen=True)
class AccountDetails:
    """Account metadata returned by getAccountDetails."""

    token: str
    email: str
    tier: str
    root_folder: str
    files_count: int = 0
    files_count_limit: Limit = field(default_factory=Limit)
    total_size: int = 0
    total_size_limit: Limit = field(default_factory=Limit)
    total_30d_ddl_traffic: int = 0
    total_30d_ddl_traffic_limit: Limit = field(default_factory=Limit)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AccountDetails:
        return cls(
            token=data.get("token", ""),
            email=data.get("email", ""),
            tier=data.get("tier", ""),
            root_folder=data.get("rootFolder", ""),
            files_count=int(data.get("filesCount", 0)),
            files_count_limit=Limit.from_api(data.get("filesCountLimit")),
            total_size=int(data.get("totalSize", 0)),
            total_size_limit=Limit.from_api(data.get("totalSizeLimit")),
            total_30d_ddl_traffic=int(data.get("total30DDLTraffic", 0)),
            total_30d_ddl_traffic_limit=Limit.from_api(data.get("total30DDLTrafficLimit")),
        )


@dataclass(frozen=True)
class FolderCreated:
    """Information about a newly created folder."""

    id: str
    name: str
    parent_folder: str
    type: str = "folder"
    code: str = ""
    create_time: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FolderCreated:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            parent_folder=data.get("parentFolder", ""),
            type=data.get("type", "folder"),
            code=data.get("code", ""),
            create_time=int(data.get("createTime", 0)),
        )


@dataclass(frozen=True)
class FileUpload:
    """Result of a successful file upload."""

    download_page: str
    code: str
    parent_folder: str
    file_id: str
    file_name: str
    md5: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileUpload:
        return cls(
            download_page=data.get("downloadPage", ""),
            code=data.get("code", ""),
            parent_folder=data.get("parentFolder", ""),
            file_id=data.get("fileId", ""),
            file_name=data.get("fileName", ""),
            md5=data.get("md5", ""),
        )


@dataclass(frozen=True)
class ContentInfo:
    """A child entry of a folder."""

    id: str
    type: str
    name: str
    parent_folder: str = ""
    create_time: int = 0
    size: int = 0
    download_count: int = 0
    md5: str = ""
    mimetype: str = ""
    server_choosen: str = ""
    direct_link: str = ""
    link: str = ""

    @property
    def is_folder(self) -> bool:
        return self.type == "folder"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContentInfo:
        return cls(
            id=data.get("id", ""),
            type=data.get("type", ""),
            name=data.get("name", ""),
            parent_folder=data.get("parentFolder", ""),
            create_time=int(data.get("createTime", 0)),
            size=int(data.get("size", 0)),
            download_count=int(data.get("downloadCount", 0)),
            md5=data.get("md5", ""),
            mimetype=data.get("mimetype", ""),
            server_choosen=data.get("serverChoosen", ""),
            direct_link=data.get("directLink", ""),
            link=data.get("link", ""),
        )


@dataclass(frozen=True)
class ContentResult:
    """A content entry together with its children."""

    id: str
    type: str
    name: str
    is_owner: bool = False
    parent_folder: str = ""
    code: str = ""
    create_time: int = 0
    public: bool = False
    childs: list[str] = field(default_factory=list)
    total_download_count: int = 0
    total_size: int = 0
    contents: dict[str, ContentInfo] = field(default_factory=dict)

    def files(self) -> list[ContentInfo]:
        """Return the children that are files."""
        return [item for item in self.contents.values() if not item.is_folder]

    def folders(self) -> list[ContentInfo]:
        """Return the children that are folders."""
        return [item for item in self.contents.values() if item.is_folder]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContentResult:
        contents = data.get("contents") or {}
        return cls(
            id=data.get("id", ""),
            type=data.get("type", ""),
            name=data.get("name", ""),
            is_owner=bool(data.get("isOwner", False)),
            parent_folder=data.get("parentFolder", ""),
            code=data.get("code", ""),
            create_time=int(data.get("createTime", 0)),
            public=bool(data.get("public", False)),
            childs=list(data.get("childs") or []),
            total_download_count=int(data.get("totalDownloadCount", 0)),
            total_size=int(data.get("totalSize", 0)),
            contents={
                key: ContentInfo.from_dict(value) for key, value in contents.items()
            },
        )
