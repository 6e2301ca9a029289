"""Command-line entry point used by the GitHub Action."""

from __future__ import annotations

import asyncio
import logging
import sys

import click
from dotenv import load_dotenv

from drive_upload_action.actions import add_mask, set_failed, set_output, setup_logging
from drive_upload_action.client import DriveClient
from drive_upload_action.config import ActionConfig
from drive_upload_action.exceptions import AuthenticationError, DriveUploadError
from drive_upload_action.folders import PathResolver
from drive_upload_action.models import BatchResult
from drive_upload_action.retry import RetryExecutor
from drive_upload_action.targets import expand_target
from drive_upload_action.uploader import Uploader

logger = logging.getLogger(__name__)

# Local runs can keep INPUT_* variables in a .env file
load_dotenv()


async def run_action(
    config: ActionConfig,
    *,
    client: DriveClient | None = None,
    retry: RetryExecutor | None = None,
) -> BatchResult:
    """Upload the configured target and return the batch result.

    Args:
        config: Validated action inputs
        client: Drive client to use (built from the credentials if omitted)
        retry: Retry policy for remote calls

    Raises:
        DriveUploadError: On any fatal condition (bad target, failed
            authentication, ambiguous folder, exhausted retries while
            resolving the folder)
    """
    files = expand_target(config.target, config.name)
    retry = retry or RetryExecutor()
    if client is None:
        client = DriveClient.from_service_account(config.credentials, config.owner)

    async with client:
        try:
            identity = await client.whoami()
        except AuthenticationError:
            raise
        except DriveUploadError as e:
            raise AuthenticationError(f"Authentication check failed: {e}") from e
        logger.info(f"Authenticated as {identity or config.client_email}")

        logger.info("Getting folder id...")
        folder_id = await PathResolver(client, retry).resolve(
            config.parent_folder_id, config.child_folder
        )
        logger.debug(f"uploadFolderId: {folder_id}")

        uploader = Uploader(client, retry, config.policy)
        return await uploader.upload(folder_id, files)


def emit_outputs(result: BatchResult) -> None:
    """Publish the batch summary as step outputs."""
    set_output("uploaded_count", str(result.success_count))
    set_output("failed_count", str(result.failure_count))
    set_output("file_ids", result.ids)
    set_output("file_names", result.names)
    set_output("web_view_links", result.view_links)


def _print_results(result: BatchResult) -> None:
    for outcome in result.outcomes:
        if outcome.success:
            click.echo(click.style("✓ ", fg="green") + f"{outcome.name} -> {outcome.id}")
        else:
            click.echo(click.style("✗ ", fg="red") + f"{outcome.name}: {outcome.error}")


@click.command()
@click.version_option(package_name="drive-upload-action")
@click.option(
    "--credentials",
    envvar="INPUT_CREDENTIALS",
    help="Base64-encoded service account JSON",
)
@click.option(
    "--parent-folder-id",
    envvar="INPUT_PARENT_FOLDER_ID",
    help="Id of the Drive folder to upload into",
)
@click.option(
    "--target",
    envvar="INPUT_TARGET",
    help="Local file or glob pattern to upload",
)
@click.option(
    "--owner",
    envvar="INPUT_OWNER",
    help="Email of the user the service account acts as",
)
@click.option(
    "--child-folder",
    envvar="INPUT_CHILD_FOLDER",
    help="Slash-delimited folder path under the parent, created if missing",
)
@click.option(
    "--override",
    envvar="INPUT_OVERRIDE",
    help="Legacy flag: replace existing files (same as --replace-mode delete_first)",
)
@click.option(
    "--name",
    envvar="INPUT_NAME",
    help="Remote file name (single-file targets only)",
)
@click.option(
    "--replace-mode",
    envvar="INPUT_REPLACE_MODE",
    help="delete_first, update_in_place or add_new (default: add_new)",
)
@click.option(
    "--debug",
    is_flag=True,
    envvar="RUNNER_DEBUG",
    help="Emit debug messages",
)
def main(
    credentials: str | None,
    parent_folder_id: str | None,
    target: str | None,
    owner: str | None,
    child_folder: str | None,
    override: str | None,
    name: str | None,
    replace_mode: str | None,
    debug: bool,
) -> None:
    """Upload files to Google Drive.

    Every option defaults to the INPUT_<NAME> environment variable that
    GitHub Actions sets for the corresponding action input.

    Examples:

        drive-upload --target dist/app.zip --parent-folder-id 1AbC --child-folder builds/nightly

        drive-upload --target 'reports/*.pdf' --replace-mode update_in_place
    """
    setup_logging(debug)
    if credentials:
        add_mask(credentials)

    try:
        config = ActionConfig.from_inputs(
            credentials=credentials,
            parent_folder_id=parent_folder_id,
            target=target,
            owner=owner,
            child_folder=child_folder,
            override=override,
            name=name,
            replace_mode=replace_mode,
        )
        result = asyncio.run(run_action(config))
    except DriveUploadError as e:
        set_failed(str(e))
        sys.exit(1)
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        set_failed(f"Unexpected error: {e}")
        sys.exit(1)

    _print_results(result)
    emit_outputs(result)

    if not result.ok:
        set_failed(
            f"{result.failure_count} of {len(result.outcomes)} file(s) failed to upload"
        )
        sys.exit(1)
    click.echo(click.style(f"All {result.success_count} file(s) uploaded", fg="green"))


if __name__ == "__main__":
    main()
