"""
Configuration management for gofile_uploader.
Loads settings from environment variables (and an optional .env file).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from gofile_uploader._internal.staging import TempBuffer

DEFAULT_HOST = "gofile.io"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    """Resolved client settings."""

    token: str | None = None
    host: str = DEFAULT_HOST
    timeout: float = DEFAULT_TIMEOUT
    temp_dir: Path | None = None

    @property
    def temp_buffer(self) -> TempBuffer:
        """Default staging strategy: a temp file when GOFILE_TEMP_DIR is set."""
        if self.temp_dir is not None:
            return TempBuffer.temp_file(self.temp_dir)
        return TempBuffer.memory()


def get_settings(dotenv_path: str | Path | None = None) -> Settings:
    """
    Load settings from the environment.

    Values already present in the environment take precedence over the
    .env file. Raises ValueError if GOFILE_TIMEOUT is not a positive number.
    """
    load_dotenv(dotenv_path)

    raw_timeout = os.getenv("GOFILE_TIMEOUT")
    timeout = DEFAULT_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"GOFILE_TIMEOUT must be a number, got {raw_timeout!r}") from None
        if timeout <= 0:
            raise ValueError(f"GOFILE_TIMEOUT must be positive, got {raw_timeout!r}")

    temp_dir = os.getenv("GOFILE_TEMP_DIR")
    return Settings(
        token=os.getenv("GOFILE_TOKEN") or None,
        host=os.getenv("GOFILE_HOST") or DEFAULT_HOST,
        timeout=timeout,
        temp_dir=Path(temp_dir) if temp_dir else None,
    )
