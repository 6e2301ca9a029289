"""Drive v3 service construction and request execution on top of googleapiclient."""

from __future__ import annotations

import asyncio
from typing import Any

import google.auth.exceptions
import httplib2
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from drive_upload_action.exceptions import AuthenticationError, DriveApiError

TOKEN_URI = "https://oauth2.googleapis.com/token"
SCOPES = [
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/drive.file",
]


def load_credentials(
    info: dict[str, Any], subject: str | None = None
) -> service_account.Credentials:
    """Build service-account credentials, optionally impersonating ``subject``.

    Raises:
        AuthenticationError: If the key material cannot be loaded
    """
    info = dict(info)
    info.setdefault("token_uri", TOKEN_URI)
    try:
        return service_account.Credentials.from_service_account_info(
            info, scopes=SCOPES, subject=subject or None
        )
    except (ValueError, google.auth.exceptions.GoogleAuthError) as e:
        raise AuthenticationError(f"Invalid service account credentials: {e}") from e


def build_service(credentials: Any) -> Any:
    """Create a Drive v3 resource from the bundled discovery document."""
    return build("drive", "v3", credentials=credentials, cache_discovery=False)


def _reason(error: HttpError) -> str:
    return str(getattr(error, "reason", "") or error)


async def execute(request: Any) -> Any:
    """Execute a googleapiclient request in a worker thread.

    Resumable media uploads are driven to completion by ``execute`` itself.

    Raises:
        AuthenticationError: If the access token cannot be refreshed
        DriveApiError: On error responses and transport failures
    """
    try:
        return await asyncio.to_thread(request.execute)
    except HttpError as e:
        raise DriveApiError(
            f"{request.method} {request.uri} returned {e.resp.status}: {_reason(e)}",
            status_code=e.resp.status,
        ) from e
    except google.auth.exceptions.RefreshError as e:
        raise AuthenticationError(f"Failed to obtain access token: {e}") from e
    except (httplib2.HttpLib2Error, OSError) as e:
        raise DriveApiError(f"{request.method} {request.uri} failed: {e}") from e
