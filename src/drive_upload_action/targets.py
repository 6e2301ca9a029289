"""Expansion of the local upload target into individual files."""

from __future__ import annotations

import glob
import logging
from pathlib import Path

from drive_upload_action.exceptions import TargetError
from drive_upload_action.models import LocalFile

logger = logging.getLogger(__name__)

GLOB_CHARS = ("*", "?", "[")


def is_glob(target: str) -> bool:
    """Return True if ``target`` is a glob pattern rather than a path."""
    return any(char in target for char in GLOB_CHARS)


def expand_target(target: str, name: str | None = None) -> list[LocalFile]:
    """Turn the ``target`` input into the list of files to upload.

    Args:
        target: Local file path or glob pattern (``**`` is recursive)
        name: Remote name override, honoured for single-file targets only

    Returns:
        Files in upload order; glob matches are sorted and directories skipped

    Raises:
        TargetError: If a glob matches no file, or a single target is
            missing or is a directory
    """
    path = Path(target)
    # An existing path is taken literally even if it contains "[" or "?"
    if not path.exists() and is_glob(target):
        return _expand_glob(target, name)

    if not path.exists():
        raise TargetError(f"Target file not found: {target}")
    if path.is_dir():
        raise TargetError(f"Target is a directory: {target}")
    return [LocalFile(path=path.resolve(), name=name or path.name)]


def _expand_glob(pattern: str, name: str | None) -> list[LocalFile]:
    if name:
        logger.warning(f"Ignoring name '{name}': target '{pattern}' is a glob pattern")

    files: list[LocalFile] = []
    for match in sorted(glob.glob(pattern, recursive=True)):
        path = Path(match)
        if path.is_dir():
            logger.debug(f"Skipping directory {match}")
            continue
        files.append(LocalFile(path=path.resolve(), name=path.name))

    if not files:
        raise TargetError(f"No files match target pattern: {pattern}")
    logger.debug(f"Target '{pattern}' matched {len(files)} file(s)")
    return files
