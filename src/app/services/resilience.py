"""
Collaborator call policies.

Every call into the ledger, the proof verifier or the ownership oracle is
bounded by a timeout. Only ledger anchoring is retried, because an anchor
record is deterministic from its inputs.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from config import ApplicationConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CollaboratorError(Exception):
    """An external collaborator failed or could not be reached"""


class CollaboratorTimeout(CollaboratorError):
    pass


async def call_with_timeout(
    name: str,
    func: Callable[..., Awaitable[T]],
    *args,
    timeout: Optional[float] = None,
) -> T:
    """
    Await a collaborator call, converting a timeout into CollaboratorTimeout.

    Args:
        name: Collaborator name used in errors and logs
        func: Coroutine function to call
        timeout: Seconds to wait (defaults to COLLABORATOR_TIMEOUT_SECONDS)

    Raises:
        CollaboratorTimeout: the call did not finish in time
    """
    if timeout is None:
        timeout = ApplicationConfig.COLLABORATOR_TIMEOUT_SECONDS
    try:
        return await asyncio.wait_for(func(*args), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"{name} call timed out after {timeout}s")
        raise CollaboratorTimeout(f"{name} timed out after {timeout}s")


async def retry_with_backoff(
    name: str,
    func: Callable[..., Awaitable[T]],
    *args,
    attempts: Optional[int] = None,
    base_delay: Optional[float] = None,
    timeout: Optional[float] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Call a collaborator with a per-attempt timeout and exponential backoff.

    The delay doubles after every failed attempt (base, 2*base, ...). Only
    CollaboratorError is retried; anything else propagates immediately.

    Raises:
        CollaboratorError: the last failure once all attempts are used
    """
    if attempts is None:
        attempts = ApplicationConfig.ANCHOR_MAX_ATTEMPTS
    if base_delay is None:
        base_delay = ApplicationConfig.ANCHOR_BACKOFF_SECONDS

    last_error: Optional[CollaboratorError] = None
    for attempt in range(1, attempts + 1):
        try:
            return await call_with_timeout(name, func, *args, timeout=timeout)
        except CollaboratorError as e:
            last_error = e
            if attempt == attempts:
                break
            delay = base_delay * (2 ** (attempt - 1))
            logger.warning(
                f"{name} attempt {attempt}/{attempts} failed: {e}; retrying in {delay:.2f}s"
            )
            await sleep(delay)

    logger.error(f"{name} failed after {attempts} attempts: {last_error}")
    raise last_error
