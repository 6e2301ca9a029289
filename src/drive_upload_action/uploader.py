"""Upload of local files into a Drive folder."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

from drive_upload_action.client import DriveClient
from drive_upload_action.conflicts import ConflictResolver
from drive_upload_action.exceptions import UploadError
from drive_upload_action.models import (
    BatchResult,
    LocalFile,
    ReplacementPolicy,
    UploadOutcome,
)
from drive_upload_action.retry import RetryExecutor

logger = logging.getLogger(__name__)


class Uploader:
    """Uploads files one after another, isolating per-file failures.

    Example:
        uploader = Uploader(client, retry, ReplacementPolicy.UPDATE_IN_PLACE)
        result = await uploader.upload(folder_id, files)
        print(f"{result.success_count} uploaded, {result.failure_count} failed")
    """

    def __init__(
        self,
        client: DriveClient,
        retry: RetryExecutor,
        policy: ReplacementPolicy = ReplacementPolicy.ADD_NEW,
        *,
        conflicts: ConflictResolver | None = None,
    ) -> None:
        self._client = client
        self._retry = retry
        self.policy = policy
        self._conflicts = conflicts or ConflictResolver(client, retry)

    async def upload(self, folder_id: str, files: Iterable[LocalFile]) -> BatchResult:
        """Upload ``files`` into ``folder_id`` in order.

        A failing file is recorded and does not stop the remaining ones.

        Args:
            folder_id: Destination folder id
            files: Files to upload, in processing order

        Returns:
            BatchResult with one outcome per file
        """
        result = BatchResult()
        for local_file in files:
            outcome = await self.upload_file(folder_id, local_file)
            result.outcomes.append(outcome)

        logger.info(
            f"Upload complete: {result.success_count} succeeded, "
            f"{result.failure_count} failed"
        )
        return result

    async def upload_file(self, folder_id: str, local_file: LocalFile) -> UploadOutcome:
        """Upload a single file, returning its outcome instead of raising."""
        logger.info(f"Uploading {local_file.name} ...")
        try:
            _check_readable(local_file)
            matches = await self._conflicts.find_existing(folder_id, local_file.name)
            resolution = await self._conflicts.apply(
                self.policy, matches, local_file.name, local_file.path
            )
            if resolution.updated is not None:
                entry = resolution.updated
            else:
                entry = await self._retry.run(
                    f"Upload '{local_file.name}' to {folder_id}",
                    lambda: self._client.create_file(
                        folder_id, local_file.name, local_file.path
                    ),
                )
        except Exception as e:
            error_msg = f"Upload of {local_file.name} failed: {e}"
            logger.error(error_msg)
            return UploadOutcome(
                success=False,
                path=local_file.path,
                name=local_file.name,
                error=error_msg,
            )

        logger.info(f"Uploaded {local_file.name} ({entry.id})")
        return UploadOutcome(
            success=True,
            path=local_file.path,
            name=local_file.name,
            id=entry.id,
            view_link=entry.view_link,
        )


def _check_readable(local_file: LocalFile) -> None:
    """Fail fast when the local file cannot be read."""
    path = local_file.path
    if not path.exists():
        raise UploadError(f"File not found: {path}")
    if not path.is_file():
        raise UploadError(f"Path is not a file: {path}")
    if not os.access(path, os.R_OK):
        raise UploadError(f"File is not readable: {path}")
