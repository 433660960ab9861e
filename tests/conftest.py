"""Pytest fixtures for gofile_uploader tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import httpx
import pytest
from helpers import MockApi

from gofile_uploader import GofileClient


@pytest.fixture
def api() -> MockApi:
    """Create an empty mock Gofile API."""
    return MockApi()


@pytest.fixture
def client(api: MockApi) -> Iterator[GofileClient]:
    """Create a GofileClient talking to the mock API."""
    with GofileClient("test_token", transport=httpx.MockTransport(api)) as client:
        yield client


@pytest.fixture
def staging_dir(tmp_path: Path) -> Path:
    """Create an empty directory for temp-file staging."""
    path = tmp_path / "staging"
    path.mkdir()
    return path


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Create a small file to upload."""
    path = tmp_path / "notes.txt"
    path.write_bytes(b"0123456789")
    return path
