"""Pytest fixtures for drive_upload_action tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from helpers import FakeDrive

from drive_upload_action import RetryExecutor


@pytest.fixture
def drive() -> FakeDrive:
    """Create an empty in-memory Drive."""
    return FakeDrive()


@pytest.fixture
def sleeps() -> list[float]:
    """Collect the backoff delays requested by the retry executor."""
    return []


@pytest.fixture
def retry(sleeps: list[float]) -> RetryExecutor:
    """Create a RetryExecutor that records delays instead of sleeping."""

    async def fake_sleep(delay: float) -> None:
        sleeps.append(delay)

    return RetryExecutor(sleep=fake_sleep)


@pytest.fixture
def report_file(tmp_path: Path) -> Path:
    """Create a temporary file to upload."""
    path = tmp_path / "report.pdf"
    path.write_bytes(b"%PDF-1.4 report")
    return path


@pytest.fixture
def notes_file(tmp_path: Path) -> Path:
    """Create a second temporary file to upload."""
    path = tmp_path / "notes.txt"
    path.write_bytes(b"release notes")
    return path
