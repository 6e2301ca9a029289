"""Exception hierarchy for the drive_upload_action package."""

from __future__ import annotations


class DriveUploadError(Exception):
    """Base exception for all drive_upload_action errors."""

    pass


class ConfigurationError(DriveUploadError):
    """Raised when an action input is missing or malformed."""

    pass


class AuthenticationError(DriveUploadError):
    """Raised when the service account cannot be used to talk to Drive."""

    pass


class TargetError(DriveUploadError):
    """Raised when the local upload target cannot be used."""

    pass


class UploadError(DriveUploadError):
    """Raised when a single file cannot be uploaded."""

    pass


class DriveApiError(DriveUploadError):
    """Raised when the Drive API answers with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AmbiguousFolderError(DriveUploadError):
    """Raised when more than one folder with the same name shares a parent.

    This points at duplicated folders in the destination, so it is never
    retried.
    """

    def __init__(self, name: str, parent_id: str) -> None:
        super().__init__(
            f"More than one folder named '{name}' exists in parent '{parent_id}'"
        )
        self.name = name
        self.parent_id = parent_id


class RetriesExhaustedError(DriveUploadError):
    """Raised when a remote operation keeps failing after every attempt."""

    def __init__(self, label: str, attempts: int, last_error: BaseException) -> None:
        super().__init__(f"{label} failed after {attempts} attempt(s): {last_error}")
        self.label = label
        self.attempts = attempts
        self.last_error = last_error
