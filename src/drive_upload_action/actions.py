"""GitHub Actions runner integration: workflow commands, outputs and logging."""

from __future__ import annotations

import logging
import os
import sys
import uuid
from typing import TextIO

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "drive_upload_action"


def escape_data(value: str) -> str:
    """Escape a message for use in a workflow command."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def issue_command(command: str, message: str = "", stream: TextIO | None = None) -> None:
    """Write ``::command::message`` to the runner."""
    stream = stream or sys.stdout
    stream.write(f"::{command}::{escape_data(message)}\n")
    stream.flush()


def add_mask(value: str) -> None:
    """Ask the runner to redact ``value`` from all further log output."""
    if value:
        issue_command("add-mask", value)


def set_output(name: str, value: str) -> None:
    """Publish a step output.

    Outputs are appended to the file named by ``GITHUB_OUTPUT``; outside a
    runner they are only logged.
    """
    output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        logger.info(f"Output {name}={value}")
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(output_file, "a", encoding="utf-8") as fh:
        fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def set_failed(message: str) -> None:
    """Report the step as failed. The caller is responsible for the exit status."""
    issue_command("error", message)


class WorkflowCommandHandler(logging.Handler):
    """Logging handler that renders records as workflow commands.

    DEBUG records become ``::debug::`` lines (only shown when step debug is
    enabled on the runner), WARNING becomes ``::warning::``, ERROR and above
    become ``::error::`` and everything else is printed as is.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            stream = self.stream or sys.stdout
            if record.levelno >= logging.ERROR:
                issue_command("error", message, stream)
            elif record.levelno >= logging.WARNING:
                issue_command("warning", message, stream)
            elif record.levelno >= logging.INFO:
                stream.write(f"{message}\n")
                stream.flush()
            else:
                issue_command("debug", message, stream)
        except Exception:
            self.handleError(record)


def setup_logging(debug: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Route the package's log records to the runner as workflow commands."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if isinstance(handler, WorkflowCommandHandler):
            package_logger.removeHandler(handler)

    handler = WorkflowCommandHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    return package_logger
