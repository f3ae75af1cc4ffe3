from __future__ import annotations

import logging
import pwd
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .command import run_ok

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Operator:
    """The human who invoked the tool through sudo."""

    name: str
    home: Path
    uid: int
    gid: int


def discover_operator(env: Mapping[str, str]) -> Optional[Operator]:
    """Resolve SUDO_USER through the password database.

    Returns None when unset, root, or unknown; steps that target the
    operator then degrade to warnings.
    """

    name = (env.get("SUDO_USER") or "").strip()
    if not name or name == "root":
        return None
    try:
        pw = pwd.getpwnam(name)
    except KeyError:
        logger.warning("SUDO_USER=%s is not a known user", name)
        return None
    return Operator(name=pw.pw_name, home=Path(pw.pw_dir), uid=pw.pw_uid, gid=pw.pw_gid)


class SystemAccounts:
    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def add_to_group(self, user: str, group: str) -> bool:
        return run_ok(["adduser", user, group], dry_run=self.dry_run)

    def chown(self, path: Path, user: str, group: int, *, recursive: bool = False) -> bool:
        # The primary group is passed as a gid; its name need not match the user.
        argv = ["chown"]
        if recursive:
            argv.append("-R")
        return run_ok([*argv, f"{user}:{group}", str(path)], dry_run=self.dry_run)

    def change_shell(self, user: str, shell: str) -> bool:
        return run_ok(["chsh", "-s", shell, user], dry_run=self.dry_run)

    def source_profile(self, user: str, shell: str, profile: Path) -> bool:
        """Load the profile in a shell as the operator; True if it exits cleanly."""

        return run_ok(
            ["runuser", "-u", user, "--", shell, "-c", f"source {shlex.quote(str(profile))}"],
            dry_run=self.dry_run,
        )
