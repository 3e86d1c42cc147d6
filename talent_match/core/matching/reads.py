"""
Bounded collaborator reads.

Every read the engine issues goes through call_with_timeout so that a
slow or failing collaborator surfaces as DataUnavailable instead of a
hang or a partial result.
"""

from concurrent.futures import Executor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Any, Callable, TypeVar

from talent_match.core.exceptions import DataUnavailable
from talent_match.utils.logger import get_logger

logger = get_logger(__name__)

R = TypeVar("R")


def call_with_timeout(
    executor: Executor,
    timeout: float,
    operation: str,
    func: Callable[..., R],
    *args: Any,
) -> R:
    """
    Run a read on the executor and wait at most ``timeout`` seconds.

    Raises:
        DataUnavailable: the read raised or did not finish in time.
            No retry is attempted.
    """
    future = executor.submit(func, *args)
    try:
        return future.result(timeout=timeout)
    except FuturesTimeoutError as e:
        future.cancel()
        logger.error(f"Read '{operation}' timed out after {timeout}s")
        raise DataUnavailable(operation, f"timed out after {timeout}s") from e
    except Exception as e:
        logger.error(f"Read '{operation}' failed: {e}")
        raise DataUnavailable(operation, str(e)) from e
