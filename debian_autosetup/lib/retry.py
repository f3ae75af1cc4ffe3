from __future__ import annotations

import logging
import time
from typing import Callable

from ..errors import FailureKind, fatal

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_DELAY_S = 5.0


def run_with_retry(
    action: Callable[[], bool],
    *,
    description: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    delay_s: float = DEFAULT_DELAY_S,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Run ``action`` until it reports success, at most ``max_attempts`` times.

    The delay between attempts is fixed. Running out of attempts is always
    fatal (RETRY_EXHAUSTED); it is never handed back to the caller as a soft
    error.

    Callers must only pass actions that are safe to repeat: nothing is rolled
    back between attempts.
    """

    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
    if delay_s < 0:
        raise ValueError(f"delay_s must be >= 0, got {delay_s}")

    count = 0
    while not action():
        count += 1
        if count >= max_attempts:
            fatal(
                f"Command failed after {count} attempts: {description}",
                FailureKind.RETRY_EXHAUSTED,
                log=logger,
            )
        logger.warning("Retry %d/%d: %s", count, max_attempts, description)
        sleep(delay_s)

