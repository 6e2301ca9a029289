"""DriveClient: the Google Drive operations the upload action relies on."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from googleapiclient.http import MediaFileUpload

from drive_upload_action._internal.drive_service import (
    build_service,
    execute,
    load_credentials,
)
from drive_upload_action.exceptions import AuthenticationError, DriveApiError
from drive_upload_action.models import FOLDER_MIME_TYPE, RemoteEntry

logger = logging.getLogger(__name__)

ENTRY_FIELDS = "id, name, mimeType, parents, webViewLink"
PAGE_SIZE = 1000


def quote(value: str) -> str:
    """Quote a string literal for the Drive query language."""
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


class DriveClient:
    """Client for the subset of Drive v3 used to upload files.

    Wraps a googleapiclient Drive resource; each request runs in a worker
    thread so callers can await it. One instance is created per run and
    handed to every component that talks to Drive. Supports the async
    context manager protocol.

    Example:
        async with DriveClient.from_service_account(info) as client:
            entries = await client.list_entries(parent_id, "report.pdf")
    """

    def __init__(self, service: Any) -> None:
        """Initialize the client.

        Args:
            service: Drive v3 resource from ``googleapiclient.discovery.build``
        """
        self._service = service

    @classmethod
    def from_service_account(
        cls, info: dict[str, Any], subject: str | None = None
    ) -> DriveClient:
        """Create a client from decoded service-account JSON.

        Args:
            info: Service account key (``client_email``, ``private_key``, ...)
            subject: Optional user to impersonate

        Raises:
            AuthenticationError: If the key material cannot be loaded
        """
        return cls(build_service(load_credentials(info, subject)))

    async def __aenter__(self) -> DriveClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        self._service.close()

    async def whoami(self) -> str:
        """Return the email address Drive sees for these credentials.

        Raises:
            AuthenticationError: If Drive rejects the credentials
        """
        request = self._service.about().get(fields="user(emailAddress)")
        try:
            data = await execute(request)
        except DriveApiError as e:
            if e.status_code in (401, 403):
                raise AuthenticationError(f"Drive rejected the credentials: {e}") from e
            raise
        return str(data.get("user", {}).get("emailAddress", ""))

    async def list_entries(
        self,
        parent_id: str,
        name: str,
        *,
        folders_only: bool = False,
        files_only: bool = False,
    ) -> list[RemoteEntry]:
        """List non-trashed entries named exactly ``name`` inside ``parent_id``.

        Args:
            parent_id: Id of the containing folder
            name: Exact entry name to match
            folders_only: Only match folders
            files_only: Only match non-folders

        Returns:
            Matching entries in the order Drive returns them
        """
        query = f"name = {quote(name)} and {quote(parent_id)} in parents and trashed = false"
        if folders_only:
            query += f" and mimeType = '{FOLDER_MIME_TYPE}'"
        elif files_only:
            query += f" and mimeType != '{FOLDER_MIME_TYPE}'"

        files = self._service.files()
        entries: list[RemoteEntry] = []
        request = files.list(
            q=query,
            fields=f"nextPageToken, files({ENTRY_FIELDS})",
            pageSize=PAGE_SIZE,
            supportsAllDrives=True,
            includeItemsFromAllDrives=True,
        )
        while request is not None:
            data = await execute(request)
            entries.extend(RemoteEntry.from_api(item) for item in data.get("files", []))
            request = files.list_next(request, data)
        return entries

    async def create_folder(self, parent_id: str, name: str) -> RemoteEntry:
        """Create a folder named ``name`` inside ``parent_id``."""
        request = self._service.files().create(
            body={"name": name, "mimeType": FOLDER_MIME_TYPE, "parents": [parent_id]},
            fields=ENTRY_FIELDS,
            supportsAllDrives=True,
        )
        data = await execute(request)
        logger.debug(f"Created folder '{name}' ({data.get('id')}) in {parent_id}")
        return RemoteEntry.from_api(data)

    async def create_file(self, parent_id: str, name: str, path: Path) -> RemoteEntry:
        """Upload ``path`` as a new file named ``name`` inside ``parent_id``."""
        request = self._service.files().create(
            body={"name": name, "parents": [parent_id]},
            media_body=MediaFileUpload(str(path), resumable=True),
            fields=ENTRY_FIELDS,
            supportsAllDrives=True,
        )
        data = await execute(request)
        logger.debug(f"Created file '{name}' ({data.get('id')}) in {parent_id}")
        return RemoteEntry.from_api(data)

    async def update_file(self, file_id: str, path: Path) -> RemoteEntry:
        """Replace the content of an existing file, keeping its id and name."""
        request = self._service.files().update(
            fileId=file_id,
            media_body=MediaFileUpload(str(path), resumable=True),
            fields=ENTRY_FIELDS,
            supportsAllDrives=True,
        )
        data = await execute(request)
        logger.debug(f"Updated content of {file_id} from {path}")
        return RemoteEntry.from_api(data)

    async def delete_entry(self, entry_id: str) -> None:
        """Permanently delete an entry."""
        request = self._service.files().delete(fileId=entry_id, supportsAllDrives=True)
        await execute(request)
        logger.debug(f"Deleted {entry_id}")
