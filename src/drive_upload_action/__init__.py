"""drive_upload_action - upload files from a CI pipeline to Google Drive.

Example usage:
    from drive_upload_action import (
        DriveClient,
        PathResolver,
        ReplacementPolicy,
        RetryExecutor,
        Uploader,
        expand_target,
    )

    async with DriveClient.from_service_account(info) as client:
        retry = RetryExecutor()
        folder_id = await PathResolver(client, retry).resolve(parent_id, "builds/nightly")
        uploader = Uploader(client, retry, ReplacementPolicy.UPDATE_IN_PLACE)
        result = await uploader.upload(folder_id, expand_target("dist/*.zip"))
"""

from drive_upload_action.client import DriveClient
from drive_upload_action.config import ActionConfig
from drive_upload_action.conflicts import ConflictResolver
from drive_upload_action.exceptions import (
    AmbiguousFolderError,
    AuthenticationError,
    ConfigurationError,
    DriveApiError,
    DriveUploadError,
    RetriesExhaustedError,
    TargetError,
    UploadError,
)
from drive_upload_action.folders import PathResolver
from drive_upload_action.models import (
    BatchResult,
    FolderPath,
    LocalFile,
    RemoteEntry,
    ReplacementPolicy,
    Resolution,
    UploadOutcome,
)
from drive_upload_action.retry import RetryExecutor
from drive_upload_action.targets import expand_target
from drive_upload_action.uploader import Uploader

__version__ = "0.1.0"

__all__ = [
    # Components
    "ActionConfig",
    "ConflictResolver",
    "DriveClient",
    "PathResolver",
    "RetryExecutor",
    "Uploader",
    "expand_target",
    # Models
    "BatchResult",
    "FolderPath",
    "LocalFile",
    "RemoteEntry",
    "ReplacementPolicy",
    "Resolution",
    "UploadOutcome",
    # Exceptions
    "DriveUploadError",
    "AmbiguousFolderError",
    "AuthenticationError",
    "ConfigurationError",
    "DriveApiError",
    "RetriesExhaustedError",
    "TargetError",
    "UploadError",
]
