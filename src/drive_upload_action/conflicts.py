"""Handling of existing files that share the uploaded file's name."""

from __future__ import annotations

import logging
from pathlib import Path

from drive_upload_action.client import DriveClient
from drive_upload_action.models import RemoteEntry, ReplacementPolicy, Resolution
from drive_upload_action.retry import RetryExecutor

logger = logging.getLogger(__name__)


class ConflictResolver:
    """Finds same-named files in a folder and applies a replacement policy."""

    def __init__(self, client: DriveClient, retry: RetryExecutor) -> None:
        self._client = client
        self._retry = retry

    async def find_existing(self, folder_id: str, file_name: str) -> list[RemoteEntry]:
        """Return every non-trashed file named ``file_name`` in ``folder_id``.

        Drive allows duplicate names, so any number of matches may come back.
        """
        return await self._retry.run(
            f"Look up existing '{file_name}' in {folder_id}",
            lambda: self._client.list_entries(folder_id, file_name, files_only=True),
        )

    async def apply(
        self,
        policy: ReplacementPolicy,
        matches: list[RemoteEntry],
        file_name: str,
        file_path: Path,
    ) -> Resolution:
        """Apply ``policy`` to ``matches`` before ``file_path`` is uploaded.

        Args:
            policy: Active replacement policy
            matches: Existing entries from ``find_existing``
            file_name: Remote name of the file being uploaded
            file_path: Local file providing the new content

        Returns:
            Resolution telling the caller to create a file, or the updated entry

        Raises:
            RetriesExhaustedError: If a delete or update keeps failing; the
                remaining deletions are not attempted
        """
        if not matches or policy is ReplacementPolicy.ADD_NEW:
            return Resolution()

        if policy is ReplacementPolicy.DELETE_FIRST:
            for entry in matches:
                logger.info(f"Removing existing '{entry.name}' ({entry.id})")
                await self._retry.run(
                    f"Delete '{entry.name}' ({entry.id})",
                    lambda entry_id=entry.id: self._client.delete_entry(entry_id),
                )
            return Resolution()

        if len(matches) > 1:
            logger.warning(
                f"{len(matches)} files named '{file_name}' exist; "
                f"updating the first one ({matches[0].id})"
            )
        target = matches[0]
        logger.info(f"Updating existing '{target.name}' ({target.id})")
        updated = await self._retry.run(
            f"Update '{file_name}' ({target.id})",
            lambda: self._client.update_file(target.id, file_path),
        )
        return Resolution(updated=updated)
