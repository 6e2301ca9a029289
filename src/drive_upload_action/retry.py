"""Bounded exponential-backoff retry for remote Drive operations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from drive_upload_action.exceptions import RetriesExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY = 1.0
DEFAULT_MULTIPLIER = 2.0


class RetryExecutor:
    """Runs a remote operation, retrying every failure with exponential backoff.

    The delay before attempt ``k`` (``k >= 2``) is
    ``base_delay * multiplier ** (k - 2)`` seconds. All failures are treated
    as transient; there is no jitter and no error classification.

    Example:
        retry = RetryExecutor()
        entries = await retry.run(
            "List folder 'reports'",
            lambda: client.list_entries(parent_id, "reports", folders_only=True),
        )
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_delay: float = DEFAULT_BASE_DELAY,
        multiplier: float = DEFAULT_MULTIPLIER,
        *,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.multiplier = multiplier
        self._sleep = sleep

    def delay_before(self, attempt: int) -> float:
        """Return the backoff delay preceding ``attempt`` (1-based)."""
        if attempt <= 1:
            return 0.0
        return self.base_delay * self.multiplier ** (attempt - 2)

    async def run(self, label: str, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation`` until it succeeds or attempts run out.

        Args:
            label: Human-readable description used in warnings and errors
            operation: Zero-argument callable returning a fresh awaitable

        Returns:
            The result of the first successful attempt

        Raises:
            RetriesExhaustedError: If every attempt failed
        """
        attempt = 1
        while True:
            try:
                return await operation()
            except Exception as e:
                if attempt >= self.max_attempts:
                    raise RetriesExhaustedError(label, attempt, e) from e
                delay = self.delay_before(attempt + 1)
                logger.warning(
                    f"{label} failed (attempt {attempt}/{self.max_attempts}), "
                    f"retrying in {delay:g}s: {e}"
                )
            attempt += 1
            await self._sleep(delay)
