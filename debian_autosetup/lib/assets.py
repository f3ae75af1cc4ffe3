from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def install_file(src: str | Path, dst: str | Path, *, mode: Optional[int] = None, dry_run: bool = False) -> None:
    """Copy one file into place, creating parent dirs. Raises OSError on failure."""

    s = Path(src)
    d = Path(dst)
    # In a dry run the source checkout was never made.
    if dry_run:
        logger.info("Would copy %s -> %s", str(s), str(d))
        return

    if not s.is_file():
        raise FileNotFoundError(str(s))

    d.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(s, d)
    if mode is not None:
        os.chmod(d, mode)
    logger.debug("Installed %s", str(d))


def make_executable(path: str | Path, *, dry_run: bool = False) -> None:
    p = Path(path)
    if dry_run:
        logger.info("Would chmod +x %s", str(p))
        return
    os.chmod(p, p.stat().st_mode | 0o111)
