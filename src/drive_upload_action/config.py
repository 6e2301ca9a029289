"""Validation of the action inputs."""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Any

from drive_upload_action.exceptions import ConfigurationError
from drive_upload_action.models import FolderPath, ReplacementPolicy

logger = logging.getLogger(__name__)

REQUIRED_CREDENTIAL_FIELDS = ("client_email", "private_key")
TRUE_VALUES = ("true", "True", "TRUE")
FALSE_VALUES = ("false", "False", "FALSE")


def require(name: str, value: str | None) -> str:
    """Return ``value`` stripped, or raise if the input was not supplied."""
    if value is None or not value.strip():
        raise ConfigurationError(f"Input required and not supplied: {name}")
    return value.strip()


def decode_credentials(raw: str) -> dict[str, Any]:
    """Decode the base64-encoded service account JSON.

    Raises:
        ConfigurationError: If the value is not base64 JSON with an email
            and a private key
    """
    try:
        decoded = base64.b64decode(raw.strip(), validate=False).decode("utf-8")
        info = json.loads(decoded)
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise ConfigurationError(
            "Input 'credentials' must be base64-encoded service account JSON"
        ) from e

    if not isinstance(info, dict):
        raise ConfigurationError("Input 'credentials' must decode to a JSON object")
    missing = [key for key in REQUIRED_CREDENTIAL_FIELDS if not info.get(key)]
    if missing:
        raise ConfigurationError(
            f"Input 'credentials' is missing required field(s): {', '.join(missing)}"
        )
    return info


def parse_bool(name: str, raw: str | None) -> bool:
    """Parse a boolean input the way the Actions toolkit does; empty is False."""
    if raw is None or raw.strip() == "":
        return False
    value = raw.strip()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"Input '{name}' must be one of: true | True | TRUE | false | False | FALSE"
    )


def resolve_policy(replace_mode: str | None, override: bool) -> ReplacementPolicy:
    """Work out the effective replacement policy.

    ``override`` is the legacy flag. It upgrades the policy to
    ``delete_first`` only while the policy is still the default ``add_new``,
    so any other explicit ``replace_mode`` wins.

    Raises:
        ConfigurationError: If ``replace_mode`` is not a known policy
    """
    if replace_mode is None or not replace_mode.strip():
        policy = ReplacementPolicy.default()
    else:
        try:
            policy = ReplacementPolicy(replace_mode.strip())
        except ValueError:
            choices = ", ".join(p.value for p in ReplacementPolicy)
            raise ConfigurationError(
                f"Invalid replace_mode '{replace_mode.strip()}'. Expected one of: {choices}"
            ) from None

    if override and policy is ReplacementPolicy.default():
        logger.debug("override is set; using replace_mode delete_first")
        return ReplacementPolicy.DELETE_FIRST
    return policy


def _optional(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class ActionConfig:
    """Validated inputs for one run of the action."""

    credentials: dict[str, Any]
    parent_folder_id: str
    target: str
    owner: str | None = None
    child_folder: FolderPath = FolderPath()
    name: str | None = None
    policy: ReplacementPolicy = ReplacementPolicy.ADD_NEW

    @classmethod
    def from_inputs(
        cls,
        *,
        credentials: str | None,
        parent_folder_id: str | None,
        target: str | None,
        owner: str | None = None,
        child_folder: str | None = None,
        override: str | None = None,
        name: str | None = None,
        replace_mode: str | None = None,
    ) -> ActionConfig:
        """Validate raw input strings and build the configuration.

        Raises:
            ConfigurationError: On the first missing or malformed input
        """
        info = decode_credentials(require("credentials", credentials))
        config = cls(
            credentials=info,
            parent_folder_id=require("parent_folder_id", parent_folder_id),
            target=require("target", target),
            owner=_optional(owner),
            child_folder=FolderPath.parse(_optional(child_folder)),
            name=_optional(name),
            policy=resolve_policy(replace_mode, parse_bool("override", override)),
        )
        config.log_inputs()
        return config

    @property
    def client_email(self) -> str:
        return str(self.credentials["client_email"])

    def log_inputs(self) -> None:
        """Log every input at debug level, keeping the key material out of the log."""
        logger.debug(f"credentials: <service account {self.client_email}>")
        logger.debug(f"parent_folder_id: {self.parent_folder_id}")
        logger.debug(f"target: {self.target}")
        logger.debug(f"owner: {self.owner or ''}")
        logger.debug(f"child_folder: {self.child_folder}")
        logger.debug(f"name: {self.name or ''}")
        logger.debug(f"replace_mode: {self.policy.value}")
