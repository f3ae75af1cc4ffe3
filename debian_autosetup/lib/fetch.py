from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .command import run_ok

logger = logging.getLogger(__name__)


class NetFetcher:
    """git / wget / tar for the static configuration payload."""

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def shallow_clone(self, url: str, dest: Path) -> bool:
        # Each attempt clones into an empty destination, so retries are safe.
        if dest.exists() and not self.dry_run:
            shutil.rmtree(dest)
        return run_ok(["git", "clone", "--depth=1", url, str(dest)], dry_run=self.dry_run)

    def download(self, url: str, dest: Path) -> bool:
        return run_ok(["wget", "-qO", str(dest), url], dry_run=self.dry_run)

    def extract(self, archive: Path, dest: Path, *, member: str, strip_components: int) -> bool:
        if not self.dry_run:
            dest.mkdir(parents=True, exist_ok=True)
        return run_ok(
            [
                "tar",
                "-xf",
                str(archive),
                f"--strip-components={strip_components}",
                "--wildcards",
                "--no-anchored",
                "-C",
                str(dest),
                member,
            ],
            dry_run=self.dry_run,
        )
