"""
Shared fixtures: fake capabilities that record every call in one log.
"""

import os
from pathlib import Path
from typing import Callable, List, Optional

import pytest

from debian_autosetup import main as main_mod
from debian_autosetup.capabilities import Host
from debian_autosetup.config import ProvisionConfig
from debian_autosetup.context import ProvisionCtx
from debian_autosetup.lib.accounts import Operator
from debian_autosetup.lib.mok import MokPaths, discard_artifacts
from debian_autosetup.lib.workspace import TempWorkspace

# Calls that change the host; used to assert nothing mutated before a failure.
MUTATING = {
    "packages.sync",
    "packages.upgrade",
    "packages.install",
    "packages.autoremove",
    "enrollment.generate",
    "enrollment.register",
    "virt.restart_daemon",
    "virt.autostart_network",
    "virt.start_network",
    "network.set_dns",
    "network.cycle",
    "accounts.add_to_group",
    "accounts.chown",
    "accounts.change_shell",
    "fetcher.shallow_clone",
    "fetcher.download",
    "fetcher.extract",
}


class Recorder:
    def __init__(self) -> None:
        self.calls: List[str] = []

    def __call__(self, name: str) -> None:
        self.calls.append(name)

    def count(self, name: str) -> int:
        return self.calls.count(name)

    def mutations(self) -> List[str]:
        return [c for c in self.calls if c in MUTATING]


def _scripted(results: Optional[List[bool]]) -> Callable[[], bool]:
    """Pop results in order; succeed once the script runs out."""
    queue = list(results or [])
    return lambda: queue.pop(0) if queue else True


class FakePackages:
    def __init__(self, rec: Recorder) -> None:
        self.rec = rec
        self.sync_results = _scripted(None)
        self.install_results = _scripted(None)
        self.installed: List[List[str]] = []
        self.recommends: List[bool] = []

    def sync(self) -> bool:
        self.rec("packages.sync")
        return self.sync_results()

    def upgrade(self) -> bool:
        self.rec("packages.upgrade")
        return True

    def install(self, packages, *, recommends=False) -> bool:
        self.rec("packages.install")
        self.installed.append(list(packages))
        self.recommends.append(recommends)
        return self.install_results()

    def autoremove(self) -> bool:
        self.rec("packages.autoremove")
        return True


class FakeEnrollment:
    def __init__(self, rec: Recorder, directory: Path) -> None:
        self.rec = rec
        self.paths = MokPaths(directory)
        self.sb_enabled = True
        self.enrolled = False
        self.generation = 0

    def secure_boot_enabled(self) -> bool:
        self.rec("enrollment.secure_boot_enabled")
        return self.sb_enabled

    def exists(self) -> bool:
        self.rec("enrollment.exists")
        return self.paths.der.is_file()

    def generate(self) -> bool:
        self.rec("enrollment.generate")
        self.generation += 1
        self.paths.directory.mkdir(parents=True, exist_ok=True)
        discard_artifacts(self.paths.directory)
        tag = f"gen-{self.generation}".encode()
        self.paths.private_key.write_bytes(b"key " + tag)
        self.paths.der.write_bytes(b"der " + tag)
        self.paths.pem.write_bytes(b"pem " + tag)
        os.chmod(self.paths.private_key, 0o600)
        return True

    def register(self) -> bool:
        self.rec("enrollment.register")
        return True

    def validate(self) -> bool:
        self.rec("enrollment.validate")
        return self.enrolled

    def files(self) -> List[str]:
        d = self.paths.directory
        return sorted(p.name for p in d.iterdir()) if d.is_dir() else []


class FakeVirt:
    def __init__(self, rec: Recorder) -> None:
        self.rec = rec

    def restart_daemon(self) -> bool:
        self.rec("virt.restart_daemon")
        return True

    def autostart_network(self) -> bool:
        self.rec("virt.autostart_network")
        return True

    def start_network(self) -> bool:
        self.rec("virt.start_network")
        return True


class FakeNetwork:
    def __init__(self, rec: Recorder) -> None:
        self.rec = rec
        self.connection: Optional[str] = "Wired connection 1"
        self.dns = {}

    def active_ethernet(self) -> Optional[str]:
        self.rec("network.active_ethernet")
        return self.connection

    def set_dns(self, connection, ipv4, ipv6) -> bool:
        self.rec("network.set_dns")
        self.dns[connection] = (list(ipv4), list(ipv6))
        return True

    def cycle(self, connection) -> bool:
        self.rec("network.cycle")
        return True

    def dns_report(self) -> List[str]:
        return ["IP4.DNS[1]: 1.1.1.1"]


class FakeAccounts:
    def __init__(self, rec: Recorder) -> None:
        self.rec = rec
        self.groups: List[tuple] = []
        self.shells = {}
        self.owners: List[tuple] = []
        self.profile_ok = True

    def add_to_group(self, user, group) -> bool:
        self.rec("accounts.add_to_group")
        self.groups.append((user, group))
        return True

    def chown(self, path, user, group, *, recursive=False) -> bool:
        self.rec("accounts.chown")
        self.owners.append((path, f"{user}:{group}"))
        return True

    def change_shell(self, user, shell) -> bool:
        self.rec("accounts.change_shell")
        self.shells[user] = shell
        return True

    def source_profile(self, user, shell, profile) -> bool:
        self.rec("accounts.source_profile")
        return self.profile_ok


class FakeFetcher:
    """Clones a small config repo and unpacks a one-file theme."""

    def __init__(self, rec: Recorder) -> None:
        self.rec = rec
        self.clone_results = _scripted(None)
        self.with_profile = True

    def shallow_clone(self, url, dest: Path) -> bool:
        self.rec("fetcher.shallow_clone")
        if not self.clone_results():
            return False
        dest.mkdir(parents=True, exist_ok=True)
        (dest / "sources.list").write_text("deb http://deb.debian.org/debian bookworm main\n")
        (dest / "framework.conf").write_text('sign_tool="/etc/dkms/sign_helper.sh"\n')
        (dest / "sign_helper.sh").write_text("#!/bin/sh\n")
        if self.with_profile:
            (dest / ".zshrc").write_text("export ZSH=1\n")
        return True

    def download(self, url, dest: Path) -> bool:
        self.rec("fetcher.download")
        dest.write_bytes(b"tar")
        return True

    def extract(self, archive, dest: Path, *, member, strip_components) -> bool:
        self.rec("fetcher.extract")
        (dest / "themes").mkdir(parents=True, exist_ok=True)
        return True


class FakeProbe:
    def __init__(self, rec: Recorder) -> None:
        self.rec = rec
        self.tools = {"mokutil", "nmcli", "openssl"}
        self.boot_lines = ["integrity: Loaded X.509 cert 'Debian_Secureboot'"]
        self.smoke_ok = True

    def tool_available(self, name) -> bool:
        return name in self.tools

    def boot_log(self, pattern) -> List[str]:
        self.rec("probe.boot_log")
        return list(self.boot_lines)

    def smoke_test(self, argv) -> bool:
        self.rec("probe.smoke_test")
        return self.smoke_ok


@pytest.fixture(autouse=True)
def _no_global_logging(monkeypatch, tmp_path):
    """Keep run() from attaching handlers to the root logger."""
    monkeypatch.setattr(main_mod, "configure_logging", lambda log_path, **kw: log_path)


@pytest.fixture
def rec() -> Recorder:
    return Recorder()


@pytest.fixture
def mok_dir(tmp_path: Path) -> Path:
    return tmp_path / "mok"


@pytest.fixture
def host(rec: Recorder, mok_dir: Path) -> Host:
    return Host(
        packages=FakePackages(rec),
        enrollment=FakeEnrollment(rec, mok_dir),
        virt=FakeVirt(rec),
        network=FakeNetwork(rec),
        accounts=FakeAccounts(rec),
        fetcher=FakeFetcher(rec),
        probe=FakeProbe(rec),
    )


@pytest.fixture
def raw_config(tmp_path: Path, mok_dir: Path) -> dict:
    etc = tmp_path / "etc"
    return {
        "mok": {"dir": str(mok_dir)},
        "retry": {"attempts": 3, "delay_seconds": 0},
        "dns": {"settle_seconds": 0},
        "payload": {
            "system_files": {
                "sources.list": str(etc / "apt" / "sources.list"),
                "framework.conf": str(etc / "dkms" / "framework.conf"),
                "sign_helper.sh": str(etc / "dkms" / "sign_helper.sh"),
            },
            "executable": [str(etc / "dkms" / "sign_helper.sh")],
        },
    }


@pytest.fixture
def cfg(raw_config: dict) -> ProvisionConfig:
    return ProvisionConfig(raw=raw_config)


@pytest.fixture
def config_file(tmp_path: Path, raw_config: dict) -> Path:
    import yaml

    p = tmp_path / "autosetup.yaml"
    p.write_text(yaml.safe_dump(raw_config))
    return p


@pytest.fixture
def operator(tmp_path: Path) -> Operator:
    home = tmp_path / "home" / "alice"
    home.mkdir(parents=True)
    return Operator(name="alice", home=home, uid=1000, gid=1000)


@pytest.fixture
def workspace(tmp_path: Path) -> TempWorkspace:
    ws = TempWorkspace(clone_dir=tmp_path / "ws-repo", download_dir=tmp_path / "ws-dl")
    ws.clone_dir.mkdir()
    ws.download_dir.mkdir()
    return ws


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def make_ctx(cfg, host, workspace, operator, sleeps):
    def _make(**overrides) -> ProvisionCtx:
        kwargs = dict(
            cfg=cfg,
            host=host,
            workspace=workspace,
            operator=operator,
            sleep=sleeps.append,
        )
        kwargs.update(overrides)
        return ProvisionCtx(**kwargs)

    return _make
