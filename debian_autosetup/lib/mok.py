from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .command import run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MokPaths:
    directory: Path

    @property
    def private_key(self) -> Path:
        return self.directory / "MOK.priv"

    @property
    def der(self) -> Path:
        return self.directory / "MOK.der"

    @property
    def pem(self) -> Path:
        return self.directory / "MOK.pem"


def discard_artifacts(directory: Path) -> List[str]:
    """Remove every file in the artifact directory. Returns removed names."""

    removed: List[str] = []
    if not directory.is_dir():
        return removed
    for p in sorted(directory.iterdir()):
        if p.is_file() or p.is_symlink():
            p.unlink()
            removed.append(p.name)
    return removed


def parse_test_key(output: str) -> bool:
    """Interpret ``mokutil --test-key`` output.

    mokutil's exit status for --test-key has not been stable across releases,
    so the message is authoritative: "<file> is already enrolled".
    """

    text = output.lower()
    if "not enrolled" in text:
        return False
    return "already enrolled" in text


class MokEnrollment:
    """DKMS signing key (MOK) managed through openssl and mokutil."""

    def __init__(
        self,
        directory: str,
        *,
        subject: str = "/CN=Debian_Secureboot/",
        days: int = 36500,
        key_bits: int = 2048,
        dry_run: bool = False,
    ) -> None:
        self.paths = MokPaths(Path(directory))
        self.subject = subject
        self.days = days
        self.key_bits = key_bits
        self.dry_run = dry_run

    def secure_boot_enabled(self) -> bool:
        # Read-only queries run even in dry-run; the plan depends on their answers.
        r = run_cmd(["mokutil", "--sb-state"], check=False)
        if r.returncode == 127:
            return False
        return "disabled" not in (r.stdout + r.stderr).lower()

    def exists(self) -> bool:
        return self.paths.der.is_file()

    def generate(self) -> bool:
        """Replace the artifact set with a fresh self-signed key pair."""

        d = self.paths.directory
        if self.dry_run:
            logger.info("Would clear %s and generate a new MOK", str(d))
        else:
            d.mkdir(parents=True, exist_ok=True)
            removed = discard_artifacts(d)
            if removed:
                logger.info("Discarded previous MOK files: %s", ", ".join(removed))

        r = run_cmd(
            [
                "openssl",
                "req",
                "-new",
                "-x509",
                "-newkey",
                f"rsa:{self.key_bits}",
                "-nodes",
                "-keyout",
                str(self.paths.private_key),
                "-outform",
                "DER",
                "-out",
                str(self.paths.der),
                "-days",
                str(self.days),
                "-subj",
                self.subject,
            ],
            check=False,
            dry_run=self.dry_run,
        )
        if not r.ok:
            return False

        r = run_cmd(
            ["openssl", "x509", "-inform", "DER", "-in", str(self.paths.der), "-out", str(self.paths.pem)],
            check=False,
            dry_run=self.dry_run,
        )
        if not r.ok:
            return False

        if not self.dry_run:
            os.chmod(self.paths.private_key, 0o600)
        return True

    def register(self) -> bool:
        # mokutil prompts for the one-time enrollment password on the terminal.
        r = run_cmd(["mokutil", "--import", str(self.paths.der)], check=False, capture=False, dry_run=self.dry_run)
        return r.ok

    def validate(self) -> bool:
        r = run_cmd(["mokutil", "--test-key", str(self.paths.der)], check=False)
        if r.returncode == 127:
            return False
        return parse_test_key(r.stdout + r.stderr)

    def files(self) -> List[str]:
        d = self.paths.directory
        if not d.is_dir():
            return []
        try:
            return sorted(p.name for p in d.iterdir())
        except OSError as e:
            logger.warning("Cannot list %s: %s", str(d), e)
            return []
