from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from ...context import ProvisionCtx
from ...logging_utils import log_section

logger = logging.getLogger(__name__)


def _read_head(path: Path, lines: Optional[int] = None) -> Optional[str]:
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Cannot read %s: %s", str(path), e)
        return None
    if lines is not None:
        text = "\n".join(text.splitlines()[:lines])
    return text.rstrip("\n")


def _entries(path: Path) -> Optional[List[Path]]:
    try:
        return sorted(path.iterdir())
    except OSError as e:
        logger.warning("Cannot list %s: %s", str(path), e)
        return None


def _list_dir(path: Path) -> str:
    if not path.is_dir():
        logger.warning("%s missing!", str(path))
        return ""
    entries = _entries(path)
    return " ".join(p.name for p in entries or [])


class VerifyStep:
    """Diagnostic read-back of what Stage 1 changed. Never fails the run."""

    step_id = "80_verify"

    def run(self, ctx: ProvisionCtx) -> None:
        cfg = ctx.cfg
        log_section(logger, "Verifying Key Configurations")

        logger.info("%s: %s", cfg.mok_dir, " ".join(ctx.host.enrollment.files()) or "(empty)")

        dest_dirs = []
        for dst in cfg.system_files.values():
            p = Path(dst)
            if p.name == "sources.list":
                head = _read_head(p, lines=10)
                if head is not None:
                    logger.info("%s (head):\n%s", str(p), head)
                continue
            if p.parent not in dest_dirs:
                dest_dirs.append(p.parent)

        for d in dest_dirs:
            if not d.is_dir():
                logger.warning("%s missing!", str(d))
                continue
            entries = _entries(d) or []
            logger.info("%s: %s", str(d), " ".join(p.name for p in entries))
            for f in entries:
                if f.is_file():
                    body = _read_head(f)
                    if body is not None:
                        logger.info("%s:\n%s", str(f), body)

        dns = ctx.host.network.dns_report()
        if dns:
            logger.info("DNS:\n%s", "\n".join(dns))
        else:
            logger.warning("No DNS entries reported by nmcli")

        resolv = _read_head(Path("/etc/resolv.conf"))
        if resolv is not None:
            logger.info("/etc/resolv.conf:\n%s", resolv)

        theme = ctx.operator_path(cfg.theme_target)
        if theme is not None:
            logger.info("%s: %s", str(theme), _list_dir(theme))

        profile = ctx.operator_path(cfg.shell_profile)
        if profile is None or not profile.is_file():
            logger.warning("~/%s missing!", cfg.shell_profile)
