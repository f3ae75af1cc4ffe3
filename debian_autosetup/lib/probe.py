from __future__ import annotations

import logging
import re
from typing import List, Sequence

from .command import command_exists, run_cmd, run_ok

logger = logging.getLogger(__name__)


class HostProbe:
    """Read-only queries against the running host."""

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def tool_available(self, name: str) -> bool:
        return command_exists(name)

    def boot_log(self, pattern: str) -> List[str]:
        r = run_cmd(["dmesg"], check=False)
        if not r.ok:
            logger.debug("dmesg unavailable (rc=%s)", r.returncode)
            return []
        rx = re.compile(pattern, re.IGNORECASE)
        return [ln for ln in r.stdout.splitlines() if rx.search(ln)]

    def smoke_test(self, argv: Sequence[str]) -> bool:
        return run_ok(argv, dry_run=self.dry_run)
