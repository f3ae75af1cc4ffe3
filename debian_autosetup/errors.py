from __future__ import annotations

import enum
import logging
from typing import NoReturn, Optional

logger = logging.getLogger(__name__)


class FailureKind(enum.Enum):
    PRECONDITION_FAILED = "precondition_failed"
    STEP_FAILED = "step_failed"
    RETRY_EXHAUSTED = "retry_exhausted"
    USER_ABORTED = "user_aborted"


EXIT_CODES = {
    FailureKind.PRECONDITION_FAILED: 2,
    FailureKind.STEP_FAILED: 3,
    FailureKind.RETRY_EXHAUSTED: 4,
    FailureKind.USER_ABORTED: 130,
}


class ProvisionError(RuntimeError):
    """Unrecoverable failure. Aborts the whole run; nothing is rolled back."""

    def __init__(self, message: str, kind: FailureKind = FailureKind.STEP_FAILED) -> None:
        super().__init__(message)
        self.kind = kind

    @property
    def exit_code(self) -> int:
        return EXIT_CODES[self.kind]


def fatal(
    message: str,
    kind: FailureKind = FailureKind.STEP_FAILED,
    *,
    log: Optional[logging.Logger] = None,
) -> NoReturn:
    """Log at CRITICAL and raise. Never returns control to the caller."""

    (log or logger).critical(message)
    raise ProvisionError(message, kind)


def require(ok: bool, message: str, kind: FailureKind = FailureKind.STEP_FAILED) -> None:
    if not ok:
        fatal(message, kind)
