from __future__ import annotations

import logging
from typing import Sequence

from .command import run_ok

logger = logging.getLogger(__name__)

_APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


class AptPackageManager:
    """apt-get on the running host."""

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def _apt(self, *args: str) -> bool:
        return run_ok(["apt-get", *args], env=_APT_ENV, dry_run=self.dry_run)

    def sync(self) -> bool:
        return self._apt("update")

    def upgrade(self) -> bool:
        return self._apt("full-upgrade", "-y")

    def install(self, packages: Sequence[str], *, recommends: bool = False) -> bool:
        """Install packages; recommends=False adds --no-install-recommends."""

        if not packages:
            return True
        argv = ["install", "-y"]
        if not recommends:
            argv.append("--no-install-recommends")
        return self._apt(*argv, *packages)

    def autoremove(self) -> bool:
        return self._apt("autoremove", "-y")
