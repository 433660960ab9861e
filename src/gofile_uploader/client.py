"""Main GofileClient class for interacting with the Gofile API."""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, BinaryIO, Callable, TypeVar

import httpx

from gofile_uploader._internal.staging import (
    ProgressCallback,
    ProgressReader,
    StagingBuffer,
    TempBuffer,
)
from gofile_uploader.config import DEFAULT_HOST, DEFAULT_TIMEOUT, get_settings
from gofile_uploader.exceptions import (
    ApiStatusError,
    DecodeError,
    MissingTokenError,
    TransportError,
)
from gofile_uploader.models import (
    AccountDetails,
    ContentResult,
    FileUpload,
    FolderCreated,
    FolderOption,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _ignore(data: Any) -> None:
    return None


def _server_name(data: Any) -> str:
    return str(data["server"])


def _join_ids(contents_id: Sequence[str]) -> str:
    if isinstance(contents_id, str):
        contents_id = [contents_id]
    if not contents_id:
        raise ValueError("At least one content id is required")
    return ",".join(contents_id)


def _option_value(value: Any) -> str:
    """Render a folder option value the way the API expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, str)):
        return str(value)
    if isinstance(value, Sequence):
        return ",".join(str(item) for item in value)
    raise TypeError(f"Unsupported option value: {value!r}")


class GofileClient:
    """Client for the Gofile HTTP API.

    Example:
        with GofileClient("my-token") as client:
            server = client.get_server()
            with open("report.pdf", "rb") as f:
                upload = client.upload_file(server, folder_id, "report.pdf", f)
            print(upload.download_page)
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        host: str = DEFAULT_HOST,
        timeout: float = DEFAULT_TIMEOUT,
        temp_buffer: TempBuffer | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: Account token, required by every endpoint except get_server
            host: Service host; the API lives at api.<host>
            timeout: Request timeout in seconds
            temp_buffer: Default upload staging strategy (in memory if omitted)
            transport: Optional httpx transport, mainly for testing
        """
        self.token = token
        self.host = host
        self.api_url = f"https://api.{host}"
        self._temp_buffer = temp_buffer or TempBuffer.memory()
        self._http = httpx.Client(timeout=timeout, transport=transport)

    @classmethod
    def from_env(cls, **kwargs: Any) -> GofileClient:
        """Create a client from GOFILE_* environment variables."""
        settings = get_settings()
        kwargs.setdefault("token", settings.token)
        kwargs.setdefault("host", settings.host)
        kwargs.setdefault("timeout", settings.timeout)
        kwargs.setdefault("temp_buffer", settings.temp_buffer)
        return cls(**kwargs)

    def __enter__(self) -> GofileClient:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit context manager."""
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def _require_token(self) -> str:
        if not self.token:
            raise MissingTokenError("A Gofile account token is required for this call")
        return self.token

    def _execute(self, request: httpx.Request, parse: Callable[[Any], T]) -> T:
        """Send a request and unwrap the {status, data} envelope.

        Raises:
            TransportError: If the request could not be completed
            DecodeError: If the body is not a well-formed envelope
            ApiStatusError: If the envelope status is not "ok"
        """
        logger.debug(f"{request.method} {request.url.host}{request.url.path}")
        try:
            response = self._http.send(request)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {request.url.host} failed: {e}") from e

        try:
            envelope = response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON in response: {e}") from e
        if not isinstance(envelope, dict) or not isinstance(envelope.get("status"), str):
            raise DecodeError("Response is not a status envelope")

        status = envelope["status"]
        if status != "ok":
            raise ApiStatusError(status)

        try:
            return parse(envelope.get("data"))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DecodeError(f"Unexpected response payload: {e}") from e

    def _request(
        self,
        method: str,
        path: str,
        parse: Callable[[Any], T],
        query: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> T:
        """Call an API endpoint, form-encoding params into the body."""
        headers = {"Content-Type": FORM_CONTENT_TYPE} if params is not None else None
        request = self._http.build_request(
            method,
            f"{self.api_url}/{path}",
            params=query,
            data=params,
            headers=headers,
        )
        return self._execute(request, parse)

    def get_server(self) -> str:
        """Get the name of the server to upload to (e.g. "store3")."""
        return self._request("GET", "getServer", _server_name)

    def get_account_details(self) -> AccountDetails:
        """Get details and quotas of the token's account."""
        return self._request(
            "GET",
            "getAccountDetails",
            AccountDetails.from_dict,
            query={"allDetails": "true", "token": self._require_token()},
        )

    def create_folder(self, parent_folder_id: str, folder_name: str) -> FolderCreated:
        """Create a folder inside parent_folder_id."""
        folder = self._request(
            "PUT",
            "createFolder",
            FolderCreated.from_dict,
            params={
                "parentFolderId": parent_folder_id,
                "folderName": folder_name,
                "token": self._require_token(),
            },
        )
        logger.info(f"Created folder {folder_name} ({folder.id})")
        return folder

    def copy_content(self, folder_id_dest: str, contents_id: Sequence[str]) -> None:
        """Copy files or folders into folder_id_dest."""
        self._request(
            "PUT",
            "copyContent",
            _ignore,
            params={
                "folderIdDest": folder_id_dest,
                "contentsId": _join_ids(contents_id),
                "token": self._require_token(),
            },
        )

    def delete_content(self, contents_id: Sequence[str]) -> None:
        """Delete files or folders."""
        self._request(
            "DELETE",
            "deleteContent",
            _ignore,
            params={
                "contentsId": _join_ids(contents_id),
                "token": self._require_token(),
            },
        )

    def set_folder_option(
        self, folder_id: str, option: FolderOption | str, value: Any
    ) -> None:
        """Set an option on a folder.

        Args:
            folder_id: The folder ID
            option: One of "public", "password", "description", "expire", "tags"
            value: For "public" a bool, for "expire" a unix timestamp, for
                "tags" a list of tags, otherwise a string

        Raises:
            ValueError: If option is not a known folder option
        """
        option = FolderOption(option)
        self._request(
            "PUT",
            "setFolderOption",
            _ignore,
            params={
                "folderId": folder_id,
                "option": option.value,
                "value": _option_value(value),
                "token": self._require_token(),
            },
        )

    def get_content(self, content_id: str) -> ContentResult:
        """Get a content entry and the metadata of its children."""
        return self._request(
            "GET",
            "getContent",
            ContentResult.from_dict,
            query={"contentId": content_id, "token": self._require_token()},
        )

    def upload_file(
        self,
        server: str,
        folder_id: str,
        file_name: str,
        file_obj: BinaryIO | bytes,
        temp_buffer: TempBuffer | None = None,
        on_send: ProgressCallback | None = None,
    ) -> FileUpload:
        """Upload one file to a folder.

        The multipart body is staged first (in memory or in a temp file,
        see TempBuffer) and then streamed to the upload server. The staging
        buffer is released whether or not the upload succeeds.

        Args:
            server: Upload server name from get_server()
            folder_id: Destination folder ID
            file_name: Name the file gets on Gofile
            file_obj: Binary file object (or bytes) with the content
            temp_buffer: Staging strategy, defaults to the client's
            on_send: Optional callback receiving (total, sent) byte counts

        Returns:
            FileUpload describing the stored file
        """
        token = self._require_token()
        if isinstance(file_obj, (bytes, bytearray)):
            file_obj = io.BytesIO(file_obj)

        url = f"https://{server}.{self.host}/uploadFile"
        form = httpx.Request(
            "POST",
            url,
            files=[
                ("file", (file_name, file_obj, "application/octet-stream")),
                ("folderId", (None, folder_id)),
                ("token", (None, token)),
            ],
        )
        with StagingBuffer(temp_buffer or self._temp_buffer) as staging:
            staging.write_stream(form.stream)
            total = staging.seal()

            request = self._http.build_request(
                "POST",
                url,
                content=ProgressReader(staging, on_send),
                headers={
                    "Content-Type": form.headers["Content-Type"],
                    "Content-Length": str(total),
                },
            )
            upload = self._execute(request, FileUpload.from_dict)

        logger.info(f"Uploaded {file_name} to {server} ({upload.file_id})")
        return upload

    def upload_path(
        self,
        path: str | Path,
        folder_id: str,
        *,
        server: str | None = None,
        temp_buffer: TempBuffer | None = None,
        on_send: ProgressCallback | None = None,
    ) -> FileUpload:
        """Upload a local file, discovering the upload server if needed."""
        path = Path(path)
        server = server or self.get_server()
        with path.open("rb") as f:
            return self.upload_file(
                server, folder_id, path.name, f, temp_buffer=temp_buffer, on_send=on_send
            )
