"""
Fan-out/join and bounded-wait helpers for API calls.

Calls run on worker threads; results are joined and reported per call so
that one failure never hides the outcome of the others.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from .exceptions import RequestTimeoutError

logger = logging.getLogger(__name__)


@dataclass
class CallOutcome:
    """Result of one call dispatched by fan_out()."""
    index: int
    response: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self):
        """Return the response, re-raising the captured error if there was one."""
        if self.error is not None:
            raise self.error
        return self.response


def fan_out(calls: Sequence[Callable[[], Any]], max_workers: Optional[int] = None) -> List[CallOutcome]:
    """Dispatch all calls concurrently and wait for every one to finish.

    Outcomes are listed in submission order. Completion order on the server
    is not observable here and must not be assumed.
    """
    if not calls:
        return []

    outcomes = [CallOutcome(index=i) for i in range(len(calls))]
    with ThreadPoolExecutor(max_workers=max_workers or len(calls)) as pool:
        futures = [pool.submit(call) for call in calls]
        for outcome, future in zip(outcomes, futures):
            try:
                outcome.response = future.result()
            except Exception as e:
                logger.debug(f"Fan-out call {outcome.index} failed: {e}")
                outcome.error = e
    return outcomes


def wait_for_response(call: Callable[[], Any], timeout: float = 5.0):
    """Run a call and give up on it once ``timeout`` seconds have passed.

    On timeout the request is abandoned client-side only; it may still reach
    the server.

    Raises:
        RequestTimeoutError: if the call did not return in time
    """
    pool = ThreadPoolExecutor(max_workers=1)
    future = pool.submit(call)
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError:
        logger.warning(f"Request abandoned after {timeout}s")
        raise RequestTimeoutError(timeout)
    finally:
        pool.shutdown(wait=False)
