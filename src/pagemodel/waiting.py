"""
Polling wait primitive.

Repeatedly evaluates a block until its value is ready (truthy by default)
or a timeout elapses. Used by content declared with ``wait=...``.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .errors import WaitTimeoutError

logger = logging.getLogger(__name__)


@dataclass
class Wait:
    """
    Bounded polling wait.

    Exceptions raised by the polled block are treated as "not yet" and the
    block is retried; the last one is chained onto the timeout error.
    """
    timeout: float = 5.0
    retry_interval: float = 0.1

    # Injectable for tests
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def wait_for(
        self,
        block: Callable[[], Any],
        description: Optional[str] = None,
        until: Callable[[Any], bool] = bool,
    ) -> Any:
        """
        Poll ``block`` until its value is ready.

        Args:
            block: Zero-argument callable to evaluate
            description: What is being waited for, used in the error message
            until: Predicate deciding whether a value is ready (truthiness
                by default)

        Returns:
            The first ready value returned by ``block``

        Raises:
            WaitTimeoutError: If no ready value was produced within the
                timeout. Never raised before the timeout has elapsed.
        """
        start = self.clock()
        attempts = 0
        last_value: Any = None
        last_error: Optional[Exception] = None

        while True:
            attempts += 1
            try:
                last_value = block()
                last_error = None
                if until(last_value):
                    logger.debug(
                        f"Wait for {description or 'condition'} passed "
                        f"after {attempts} attempt(s)"
                    )
                    return last_value
            except Exception as e:
                last_error = e

            elapsed = self.clock() - start
            if elapsed >= self.timeout:
                break
            self.sleep(min(self.retry_interval, self.timeout - elapsed))

        logger.debug(
            f"Wait for {description or 'condition'} timed out after "
            f"{attempts} attempt(s)"
        )
        raise WaitTimeoutError(
            timeout=self.timeout,
            elapsed=elapsed,
            last_value=last_value,
            description=description,
        ) from last_error
