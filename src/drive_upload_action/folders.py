"""Resolution of slash-delimited folder paths to Drive folder ids."""

from __future__ import annotations

import logging

from drive_upload_action.client import DriveClient
from drive_upload_action.exceptions import AmbiguousFolderError
from drive_upload_action.models import FolderPath
from drive_upload_action.retry import RetryExecutor

logger = logging.getLogger(__name__)


class PathResolver:
    """Walks a folder path below a root, creating missing folders on the way."""

    def __init__(self, client: DriveClient, retry: RetryExecutor) -> None:
        self._client = client
        self._retry = retry

    async def resolve(self, root_id: str, path: FolderPath | str | None) -> str:
        """Return the id of the folder ``path`` below ``root_id``.

        Missing segments are created. An empty path returns ``root_id``.

        Args:
            root_id: Id of the folder the path is relative to
            path: Parsed ``FolderPath`` or slash-delimited string

        Returns:
            Id of the deepest folder of the path

        Raises:
            AmbiguousFolderError: If a segment matches more than one folder
            RetriesExhaustedError: If a query or create keeps failing
        """
        if not isinstance(path, FolderPath):
            path = FolderPath.parse(path)

        current_id = root_id
        for segment in path.segments:
            current_id = await self.resolve_segment(current_id, segment)
        logger.debug(f"Resolved '{path}' under {root_id} to {current_id}")
        return current_id

    async def resolve_segment(self, parent_id: str, name: str) -> str:
        """Return the id of the folder ``name`` in ``parent_id``, creating it if absent."""
        matches = await self._retry.run(
            f"Look up folder '{name}' in {parent_id}",
            lambda: self._client.list_entries(parent_id, name, folders_only=True),
        )
        if len(matches) > 1:
            raise AmbiguousFolderError(name, parent_id)
        if matches:
            return matches[0].id

        logger.info(f"Creating folder '{name}' in {parent_id}")
        folder = await self._retry.run(
            f"Create folder '{name}' in {parent_id}",
            lambda: self._client.create_folder(parent_id, name),
        )
        return folder.id
