"""Data models for the drive_upload_action package."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


class ReplacementPolicy(str, enum.Enum):
    """What to do with existing files that share the uploaded file's name."""

    DELETE_FIRST = "delete_first"
    UPDATE_IN_PLACE = "update_in_place"
    ADD_NEW = "add_new"

    @classmethod
    def default(cls) -> ReplacementPolicy:
        return cls.ADD_NEW


@dataclass(frozen=True)
class RemoteEntry:
    """A file or folder stored in Drive."""

    id: str
    name: str
    parent_id: str | None = None
    is_folder: bool = False
    view_link: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> RemoteEntry:
        """Build an entry from a Drive ``files`` resource."""
        parents = data.get("parents") or []
        is_folder = data.get("mimeType") == FOLDER_MIME_TYPE
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            parent_id=parents[0] if parents else None,
            is_folder=is_folder,
            view_link=None if is_folder else data.get("webViewLink"),
        )


@dataclass(frozen=True)
class FolderPath:
    """Slash-delimited folder path split into its segments.

    Empty segments are dropped, so ``"a//b/"`` and ``"a/b"`` are the same
    path and ``""`` is the empty path.
    """

    segments: tuple[str, ...] = ()

    @classmethod
    def parse(cls, path: str | None) -> FolderPath:
        if not path:
            return cls()
        return cls(tuple(segment for segment in path.split("/") if segment))

    def __bool__(self) -> bool:
        return bool(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return "/".join(self.segments)


@dataclass(frozen=True)
class LocalFile:
    """A local file queued for upload under a remote name."""

    path: Path
    name: str


@dataclass(frozen=True)
class Resolution:
    """Outcome of applying a replacement policy to existing entries.

    ``updated`` is None when the caller should create a new file, otherwise
    it holds the existing entry whose content was replaced.
    """

    updated: RemoteEntry | None = None

    @property
    def proceed_to_create(self) -> bool:
        return self.updated is None


@dataclass(frozen=True)
class UploadOutcome:
    """Result of uploading one local file."""

    success: bool
    path: Path
    name: str
    id: str | None = None
    view_link: str | None = None
    error: str | None = None


@dataclass
class BatchResult:
    """Aggregated outcomes of an upload batch, in processing order."""

    outcomes: list[UploadOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[UploadOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> list[UploadOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def ids(self) -> str:
        return ",".join(o.id for o in self.succeeded if o.id)

    @property
    def names(self) -> str:
        return ",".join(o.name for o in self.succeeded)

    @property
    def view_links(self) -> str:
        return ",".join(o.view_link for o in self.succeeded if o.view_link)
