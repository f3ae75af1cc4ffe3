from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Sequence


class PackageManager(Protocol):
    def sync(self) -> bool:
        ...

    def upgrade(self) -> bool:
        ...

    def install(self, packages: Sequence[str], *, recommends: bool = False) -> bool:
        ...

    def autoremove(self) -> bool:
        ...


class EnrollmentStore(Protocol):
    """The MOK artifact set and the firmware enrollment behind it."""

    def secure_boot_enabled(self) -> bool:
        ...

    def exists(self) -> bool:
        ...

    def generate(self) -> bool:
        ...

    def register(self) -> bool:
        ...

    def validate(self) -> bool:
        ...

    def files(self) -> List[str]:
        ...


class Virtualization(Protocol):
    def restart_daemon(self) -> bool:
        ...

    def autostart_network(self) -> bool:
        ...

    def start_network(self) -> bool:
        ...


class NetworkConfig(Protocol):
    def active_ethernet(self) -> Optional[str]:
        ...

    def set_dns(self, connection: str, ipv4: Sequence[str], ipv6: Sequence[str]) -> bool:
        ...

    def cycle(self, connection: str) -> bool:
        ...

    def dns_report(self) -> List[str]:
        ...


class Accounts(Protocol):
    def add_to_group(self, user: str, group: str) -> bool:
        ...

    def chown(self, path: Path, user: str, group: int, *, recursive: bool = False) -> bool:
        ...

    def change_shell(self, user: str, shell: str) -> bool:
        ...

    def source_profile(self, user: str, shell: str, profile: Path) -> bool:
        ...


class Fetcher(Protocol):
    def shallow_clone(self, url: str, dest: Path) -> bool:
        ...

    def download(self, url: str, dest: Path) -> bool:
        ...

    def extract(self, archive: Path, dest: Path, *, member: str, strip_components: int) -> bool:
        ...


class SystemProbe(Protocol):
    def tool_available(self, name: str) -> bool:
        ...

    def boot_log(self, pattern: str) -> List[str]:
        ...

    def smoke_test(self, argv: Sequence[str]) -> bool:
        ...


@dataclass(frozen=True)
class Host:
    """Everything the stages may touch on the machine."""

    packages: PackageManager
    enrollment: EnrollmentStore
    virt: Virtualization
    network: NetworkConfig
    accounts: Accounts
    fetcher: Fetcher
    probe: SystemProbe
