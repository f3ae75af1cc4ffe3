from __future__ import annotations

import logging

from .command import run_cmd, run_ok

logger = logging.getLogger(__name__)


class Libvirt:
    def __init__(
        self,
        *,
        daemon: str = "libvirtd",
        uri: str = "qemu:///system",
        network: str = "default",
        dry_run: bool = False,
    ) -> None:
        self.daemon = daemon
        self.uri = uri
        self.network = network
        self.dry_run = dry_run

    def _virsh(self, *args: str) -> list[str]:
        return ["virsh", "-c", self.uri, *args]

    def restart_daemon(self) -> bool:
        return run_ok(["systemctl", "restart", self.daemon], dry_run=self.dry_run)

    def autostart_network(self) -> bool:
        return run_ok(self._virsh("net-autostart", self.network), dry_run=self.dry_run)

    def network_active(self) -> bool:
        r = run_cmd(self._virsh("net-list", "--name"), check=False)
        return r.ok and self.network in {ln.strip() for ln in r.stdout.splitlines()}

    def start_network(self) -> bool:
        # net-start errors out on an already running network; re-runs must not.
        if self.network_active():
            logger.info("Virtual network %s already active", self.network)
            return True
        return run_ok(self._virsh("net-start", self.network), dry_run=self.dry_run)
