from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TempWorkspace:
    clone_dir: Path
    download_dir: Path


@contextmanager
def scoped_workspace(*, prefix: str = "autosetup-", base_dir: Optional[str] = None) -> Iterator[TempWorkspace]:
    """Two private temp dirs, removed on every way out of the block."""

    clone_dir = Path(tempfile.mkdtemp(prefix=f"{prefix}repo-", dir=base_dir))
    try:
        download_dir = Path(tempfile.mkdtemp(prefix=f"{prefix}dl-", dir=base_dir))
    except BaseException:
        shutil.rmtree(clone_dir, ignore_errors=True)
        raise

    logger.debug("Workspace: clone=%s download=%s", clone_dir, download_dir)
    try:
        yield TempWorkspace(clone_dir=clone_dir, download_dir=download_dir)
    finally:
        for d in (clone_dir, download_dir):
            shutil.rmtree(d, ignore_errors=True)
        logger.debug("Workspace removed")
