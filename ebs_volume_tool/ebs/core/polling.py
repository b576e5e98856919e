"""
Bounded waiting on asynchronous remote state changes.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import TypeVar

from ..constants import POLL_INTERVAL, POLL_TIMEOUT
from ..exceptions import WaitTimeoutError
from ..logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class PollSettings:
    """Interval and deadline for a status wait, in seconds."""

    interval: float = POLL_INTERVAL
    timeout: float = POLL_TIMEOUT


def wait_until(
    fetch: Callable[[], T],
    is_done: Callable[[T], bool],
    description: str,
    settings: PollSettings = PollSettings(),
) -> T:
    """
    Poll until a condition holds or the deadline passes.

    The fetch runs on a worker thread, first after one interval and then once
    per interval. The caller waits on the worker's future for at most
    ``settings.timeout``. On timeout the worker is told to stop and exits at
    its next wake-up instead of polling forever.

    A fetch already in flight at the deadline is not interrupted. The caller
    gets WaitTimeoutError immediately, but the worker thread is not a daemon
    and is joined at interpreter exit, so process exit can lag by up to the
    gateway's request timeout (``HTTP_TIMEOUT`` by default).

    Args:
        fetch: Fetches the current state (e.g. a describe call)
        is_done: Returns True when the state is final; may raise to abort
        description: What is being waited for, used in messages
        settings: Interval and timeout

    Returns:
        The last fetched state

    Raises:
        WaitTimeoutError: If the condition does not hold before the deadline
        Exception: Anything raised by fetch or is_done
    """
    stop = threading.Event()

    def poll() -> T:
        while not stop.wait(settings.interval):
            state = fetch()
            if is_done(state):
                return state
        raise WaitTimeoutError(f"Cancelled waiting for {description}")

    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ebs-poll")
    try:
        future = executor.submit(poll)
        try:
            return future.result(timeout=settings.timeout)
        except FutureTimeoutError:
            stop.set()
            future.cancel()
            logger.debug(f"Gave up waiting for {description} after {settings.timeout}s")
            raise WaitTimeoutError(
                f"Timed out waiting for {description} after {settings.timeout:g}s"
            ) from None
    finally:
        # Do not block on an in-flight fetch; the worker exits once it sees stop.
        executor.shutdown(wait=False)
