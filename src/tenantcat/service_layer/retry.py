"""Bounded exponential-backoff retry for catalog store calls.

Every catalog read and write is a remote call to the catalog database and may
fail transiently (timeouts, dropped connections, failovers). Operations handed
to `execute_with_retry` must be idempotent: they may run more than once.

The default policy makes 5 attempts with 2, 4, 8 and 16 seconds between them
and no jitter. When the last attempt fails, its exception propagates unchanged.
Which errors are worth retrying is decided by a predicate. The default retries
everything; `is_transient_error` leaves deterministic catalog and statement
errors alone.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TypeVar

from sqlalchemy import exc as sa_exc

from tenantcat.domain.errors import CatalogError

__all__ = [
    "DEFAULT_RETRY_POLICY",
    "RetryPolicy",
    "always_retry",
    "execute_with_retry",
    "is_transient_error",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")

# raised for the statement or its parameters, not for the connection
DETERMINISTIC_DB_ERRORS = (
    sa_exc.DataError,
    sa_exc.IntegrityError,
    sa_exc.ProgrammingError,
    sa_exc.NotSupportedError,
)


@dataclass(frozen=True)
class RetryPolicy:
    """How many attempts to make and how long to wait between them.

    Attributes:
        max_attempts: Total attempts, including the first.
        initial_delay: Seconds to wait after the first failure.
        backoff_factor: Multiplier applied to the delay after each failure.
    """

    max_attempts: int = 5
    initial_delay: float = 2.0
    backoff_factor: float = 2.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay < 0:
            raise ValueError("initial_delay must not be negative")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be at least 1")

    def delays(self) -> Iterator[float]:
        """Yield the wait before each retry (``max_attempts - 1`` values)."""
        delay = self.initial_delay
        for _ in range(self.max_attempts - 1):
            yield delay
            delay *= self.backoff_factor


DEFAULT_RETRY_POLICY = RetryPolicy()


def always_retry(exc: Exception) -> bool:  # pylint: disable=unused-argument
    """Retry predicate that treats every error as transient."""
    return True


def is_transient_error(exc: Exception) -> bool:
    """Retry predicate that skips errors bound to fail the same way again.

    Catalog faults (validation, mapping conflicts, bootstrap) and database
    errors caused by the statement or its data (`DataError`,
    `IntegrityError`, `ProgrammingError`, `NotSupportedError`) are not
    retried, unless the driver reports that the connection was invalidated
    underneath them. Connection, timeout and other I/O errors are.
    """
    if isinstance(exc, CatalogError):
        return False
    if isinstance(exc, sa_exc.DBAPIError) and exc.connection_invalidated:
        return True
    return not isinstance(exc, DETERMINISTIC_DB_ERRORS)


def execute_with_retry(
    operation: Callable[[], T],
    *,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    should_retry: Callable[[Exception], bool] = always_retry,
    sleep: Callable[[float], None] = time.sleep,
    description: str | None = None,
) -> T:
    """Run `operation`, retrying failures with exponential backoff.

    Args:
        operation: Zero-argument idempotent callable.
        policy: Attempt limit and delays.
        should_retry: Predicate deciding whether an error is worth retrying.
            Errors it rejects propagate immediately.
        sleep: Function used to wait between attempts.
        description: Name of the operation for log messages.

    Returns:
        Whatever `operation` returns on its first successful attempt.

    Raises:
        Exception: The error of the last attempt, unchanged, once the attempts
            are exhausted; or the first error `should_retry` rejects.
    """
    name = description or getattr(operation, "__name__", repr(operation))
    delays = policy.delays()
    attempt = 1
    while True:
        try:
            return operation()
        except Exception as exc:  # pylint: disable=broad-except
            if not should_retry(exc):
                raise
            if (delay := next(delays, None)) is None:
                logger.error(
                    "%s failed on attempt %d/%d; giving up: %s",
                    name,
                    attempt,
                    policy.max_attempts,
                    exc,
                )
                raise
            logger.warning(
                "%s failed on attempt %d/%d (%s); retrying in %.1fs",
                name,
                attempt,
                policy.max_attempts,
                exc,
                delay,
            )
        sleep(delay)
        attempt += 1
