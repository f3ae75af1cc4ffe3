from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from .capabilities import Host
from .config import ProvisionConfig
from .lib.accounts import Operator
from .lib.retry import run_with_retry
from .lib.workspace import TempWorkspace


@dataclass(frozen=True)
class ProvisionCtx:
    cfg: ProvisionConfig
    host: Host
    workspace: TempWorkspace
    operator: Optional[Operator] = None
    dry_run: bool = False
    sleep: Callable[[float], None] = field(default=time.sleep)

    def retry(self, action: Callable[[], bool], description: str) -> None:
        run_with_retry(
            action,
            description=description,
            max_attempts=self.cfg.retry_attempts,
            delay_s=self.cfg.retry_delay_s,
            sleep=self.sleep,
        )

    def operator_path(self, rel: str) -> Optional[Path]:
        if self.operator is None:
            return None
        return self.operator.home / rel
