from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .command import run_cmd, run_ok

logger = logging.getLogger(__name__)

ETHERNET_TYPES = {"ethernet", "802-3-ethernet"}


def split_terse(line: str) -> List[str]:
    """Split one ``nmcli -t`` line on unescaped colons."""

    fields: List[str] = []
    cur: List[str] = []
    escaped = False
    for ch in line:
        if escaped:
            cur.append(ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == ":":
            fields.append("".join(cur))
            cur = []
        else:
            cur.append(ch)
    fields.append("".join(cur))
    return fields


def first_ethernet(terse_output: str) -> Optional[str]:
    for line in terse_output.splitlines():
        if not line.strip():
            continue
        fields = split_terse(line)
        if len(fields) >= 2 and fields[1] in ETHERNET_TYPES:
            return fields[0]
    return None


class NetworkManagerCli:
    """DNS configuration through nmcli connection profiles."""

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def active_ethernet(self) -> Optional[str]:
        # Queries run even in dry-run so the plan shows the real profile.
        r = run_cmd(["nmcli", "-t", "-f", "NAME,TYPE", "con", "show", "--active"], check=False)
        if not r.ok:
            return None
        return first_ethernet(r.stdout)

    def set_dns(self, connection: str, ipv4: Sequence[str], ipv6: Sequence[str]) -> bool:
        return run_ok(
            [
                "nmcli",
                "con",
                "mod",
                connection,
                "ipv4.dns",
                ",".join(ipv4),
                "ipv6.dns",
                ",".join(ipv6),
                "ipv4.ignore-auto-dns",
                "yes",
                "ipv6.ignore-auto-dns",
                "yes",
            ],
            dry_run=self.dry_run,
        )

    def cycle(self, connection: str) -> bool:
        if not run_ok(["nmcli", "con", "down", connection], dry_run=self.dry_run):
            return False
        return run_ok(["nmcli", "con", "up", connection], dry_run=self.dry_run)

    def dns_report(self) -> List[str]:
        r = run_cmd(["nmcli", "dev", "show"], check=False)
        return [ln for ln in r.stdout.splitlines() if "DNS" in ln]
