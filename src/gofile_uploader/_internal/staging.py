"""Upload staging: holds an encoded multipart body before it is sent.

A staging buffer moves through a fixed lifecycle::

    UNINITIALIZED -> WRITABLE -> SEALED -> DISPOSED

open() allocates the backing store (memory or a temp file), the encoded
body is copied in with write() or write_stream(), seal() rewinds it and
records its size, and close() releases the store. close() is safe to call
from any state, so the buffer is normally driven with a ``with`` block.
"""

from __future__ import annotations

import io
import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Iterator

from gofile_uploader.exceptions import (
    StagingError,
    StagingInitError,
    StagingIOError,
    StagingSealError,
)

logger = logging.getLogger(__name__)

TEMP_FILE_PREFIX = "GO_FILE_TMP_"
READ_CHUNK_SIZE = 64 * 1024

ProgressCallback = Callable[[int, int], None]


class TempBufferType(Enum):
    MEMORY = "memory"
    TEMP_FILE = "temp_file"


@dataclass(frozen=True)
class TempBuffer:
    """Where an upload body is staged before sending.

    Use TempBuffer.memory() to keep the body in RAM, or
    TempBuffer.temp_file() to spool it to a temporary file, optionally in
    a specific directory.
    """

    kind: TempBufferType = TempBufferType.MEMORY
    directory: Path | None = None

    @classmethod
    def memory(cls) -> TempBuffer:
        return cls(TempBufferType.MEMORY)

    @classmethod
    def temp_file(cls, directory: str | Path | None = None) -> TempBuffer:
        return cls(TempBufferType.TEMP_FILE, Path(directory) if directory else None)


class StagingState(Enum):
    UNINITIALIZED = "uninitialized"
    WRITABLE = "writable"
    SEALED = "sealed"
    DISPOSED = "disposed"


class StagingBuffer:
    """Write-then-read store for a single multipart upload body."""

    def __init__(self, temp_buffer: TempBuffer | None = None) -> None:
        self.temp_buffer = temp_buffer or TempBuffer.memory()
        self.state = StagingState.UNINITIALIZED
        self.path: Path | None = None
        self._stream: BinaryIO | None = None
        self._total = 0

    def __enter__(self) -> StagingBuffer:
        if self.state is StagingState.UNINITIALIZED:
            self.open()
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()

    def _require(self, state: StagingState) -> BinaryIO:
        if self.state is not state or self._stream is None:
            raise StagingError(
                f"Staging buffer is {self.state.value}, expected {state.value}"
            )
        return self._stream

    @property
    def total(self) -> int:
        """Size of the sealed body in bytes."""
        self._require(StagingState.SEALED)
        return self._total

    def open(self) -> None:
        """Allocate the backing store."""
        if self.state is not StagingState.UNINITIALIZED:
            raise StagingError(f"Staging buffer is already {self.state.value}")
        if self.temp_buffer.kind is TempBufferType.MEMORY:
            self._stream = io.BytesIO()
        else:
            directory = self.temp_buffer.directory
            try:
                fd, name = tempfile.mkstemp(prefix=TEMP_FILE_PREFIX, dir=directory)
            except OSError as e:
                raise StagingInitError(
                    f"Cannot create temp file in {directory or tempfile.gettempdir()}: {e}"
                ) from e
            self.path = Path(name)
            self._stream = os.fdopen(fd, "w+b")
            logger.debug(f"Staging upload body in {self.path}")
        self.state = StagingState.WRITABLE

    def write(self, data: bytes) -> int:
        stream = self._require(StagingState.WRITABLE)
        try:
            return stream.write(data)
        except OSError as e:
            raise StagingIOError(f"Failed to write staging buffer: {e}") from e

    def write_stream(self, chunks: Iterable[bytes]) -> int:
        """Copy an encoded body into the buffer chunk by chunk.

        Args:
            chunks: Byte chunks, e.g. the stream of an httpx multipart request

        Returns:
            Number of bytes copied

        Raises:
            StagingIOError: The chunk source or the backing store failed
        """
        copied = 0
        try:
            for chunk in chunks:
                copied += self.write(chunk)
        except OSError as e:
            raise StagingIOError(f"Failed to read upload source: {e}") from e
        return copied

    def seal(self) -> int:
        """Rewind the staged body for reading.

        Returns:
            Total size of the body in bytes
        """
        stream = self._require(StagingState.WRITABLE)
        try:
            if self.temp_buffer.kind is TempBufferType.MEMORY:
                self._total = stream.tell()
                stream.seek(0)
            else:
                stream.flush()
                os.fsync(stream.fileno())
                stream.seek(0)
                self._total = os.fstat(stream.fileno()).st_size
        except OSError as e:
            raise StagingSealError(f"Failed to seal staging buffer: {e}") from e
        self.state = StagingState.SEALED
        return self._total

    def read(self, size: int = -1) -> bytes:
        stream = self._require(StagingState.SEALED)
        try:
            return stream.read(size)
        except OSError as e:
            raise StagingIOError(f"Failed to read staging buffer: {e}") from e

    def close(self) -> None:
        """Release the backing store. Safe to call more than once."""
        if self.state is StagingState.DISPOSED:
            return
        self.state = StagingState.DISPOSED
        stream, self._stream = self._stream, None
        if stream is None:
            return
        try:
            stream.close()
        except OSError as e:
            logger.warning(f"Failed to close staging buffer: {e}")
        if self.path is not None:
            try:
                os.remove(self.path)
            except OSError as e:
                logger.warning(f"Failed to remove temp file {self.path}: {e}")


class ProgressReader:
    """Read-through wrapper reporting (total, sent) after every read."""

    def __init__(
        self,
        source: StagingBuffer,
        on_send: ProgressCallback | None = None,
        chunk_size: int = READ_CHUNK_SIZE,
    ) -> None:
        self._source = source
        self._on_send = on_send
        self._chunk_size = chunk_size
        self.total = source.total
        self.sent = 0

    def read(self, size: int = -1) -> bytes:
        data = self._source.read(size)
        self.sent += len(data)
        if self._on_send is not None and data:
            self._on_send(self.total, self.sent)
        return data

    def __iter__(self) -> Iterator[bytes]:
        while True:
            chunk = self.read(self._chunk_size)
            if not chunk:
                return
            yield chunk
