from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_CONFIG_PATH = "/etc/debian-autosetup.yaml"

DEFAULT_BASE_PACKAGES = [
    "qemu-kvm",
    "qemu-system-x86",
    "libvirt-daemon-system",
    "libvirt-clients",
    "virt-manager",
    "gir1.2-spiceclientgtk-3.0",
    "dnsmasq-base",
    "qemu-utils",
    "iptables",
    "git",
    "zsh",
    "zsh-syntax-highlighting",
    "zsh-autosuggestions",
    "fonts-firacode",
]

DEFAULT_DRIVER_PACKAGES = [
    "linux-headers-amd64",
    "nvidia-driver",
    "firmware-misc-nonfree",
]

DEFAULT_REPO_URL = "https://github.com/coolgeek2019/Debian-Autosetup.git"
DEFAULT_THEME_URL = (
    "https://gitlab.com/kalilinux/packages/kali-themes/-/archive/kali/master/"
    "kali-themes-kali-master.tar?path=share"
)


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    # mok
    @property
    def mok_dir(self) -> str:
        return str(self._section("mok").get("dir") or "/var/lib/shim-signed/mok")

    @property
    def mok_subject(self) -> str:
        return str(self._section("mok").get("subject") or "/CN=Debian_Secureboot/")

    @property
    def mok_days(self) -> int:
        v = self._section("mok").get("days")
        return int(36500 if v is None else v)

    @property
    def mok_key_bits(self) -> int:
        v = self._section("mok").get("key_bits")
        return int(2048 if v is None else v)

    # packages
    @property
    def base_packages(self) -> List[str]:
        return list(self._section("packages").get("base") or DEFAULT_BASE_PACKAGES)

    @property
    def driver_packages(self) -> List[str]:
        return list(self._section("driver").get("packages") or DEFAULT_DRIVER_PACKAGES)

    @property
    def driver_smoke_test(self) -> List[str]:
        return list(self._section("driver").get("smoke_test") or ["nvidia-smi"])

    # preconditions
    @property
    def required_tools(self) -> List[str]:
        return list(self._section("preconditions").get("required_tools") or ["mokutil", "nmcli", "openssl"])

    # virt
    @property
    def virt_groups(self) -> List[str]:
        return list(self._section("virt").get("groups") or ["libvirt", "kvm"])

    @property
    def virt_daemon(self) -> str:
        return str(self._section("virt").get("daemon") or "libvirtd")

    @property
    def virt_uri(self) -> str:
        return str(self._section("virt").get("uri") or "qemu:///system")

    @property
    def virt_network(self) -> str:
        return str(self._section("virt").get("network") or "default")

    # dns
    @property
    def dns_ipv4(self) -> List[str]:
        return list(self._section("dns").get("ipv4") or ["1.1.1.1", "8.8.8.8"])

    @property
    def dns_ipv6(self) -> List[str]:
        return list(self._section("dns").get("ipv6") or ["2606:4700:4700::1111", "2001:4860:4860::8888"])

    @property
    def dns_settle_s(self) -> float:
        v = self._section("dns").get("settle_seconds")
        return float(3 if v is None else v)

    # payload
    @property
    def repo_url(self) -> str:
        return str(self._section("payload").get("repo_url") or DEFAULT_REPO_URL)

    @property
    def system_files(self) -> Dict[str, str]:
        """Repo-relative source -> absolute destination path."""
        default = {
            "sources.list": "/etc/apt/sources.list",
            "framework.conf": "/etc/dkms/framework.conf",
            "sign_helper.sh": "/etc/dkms/sign_helper.sh",
        }
        return dict(self._section("payload").get("system_files") or default)

    @property
    def executable_files(self) -> List[str]:
        return list(self._section("payload").get("executable") or ["/etc/dkms/sign_helper.sh"])

    @property
    def theme_url(self) -> str:
        return str(self._section("payload").get("theme_url") or DEFAULT_THEME_URL)

    @property
    def theme_member(self) -> str:
        return str(self._section("payload").get("theme_member") or "share/*")

    @property
    def theme_strip_components(self) -> int:
        v = self._section("payload").get("theme_strip_components")
        return int(2 if v is None else v)

    @property
    def theme_target(self) -> str:
        """Relative to the operator's home directory."""
        return str(self._section("payload").get("theme_target") or ".local/share")

    # shell
    @property
    def shell_profile(self) -> str:
        return str(self._section("shell").get("profile") or ".zshrc")

    @property
    def login_shell(self) -> str:
        return str(self._section("shell").get("login_shell") or "/bin/zsh")

    # retry
    @property
    def retry_attempts(self) -> int:
        v = self._section("retry").get("attempts")
        return int(3 if v is None else v)

    @property
    def retry_delay_s(self) -> float:
        v = self._section("retry").get("delay_seconds")
        return float(5 if v is None else v)

    @property
    def rerun_hint(self) -> str:
        return str(self.raw.get("rerun_hint") or "sudo debian-autosetup")

    def check(self) -> None:
        """Reject values that would only fail mid-run. Raises ValueError."""

        if self.retry_attempts < 1:
            raise ValueError(f"retry.attempts must be >= 1, got {self.retry_attempts}")
        if self.retry_delay_s < 0:
            raise ValueError(f"retry.delay_seconds must be >= 0, got {self.retry_delay_s}")
        if self.mok_days < 1:
            raise ValueError(f"mok.days must be >= 1, got {self.mok_days}")
        if self.mok_key_bits < 1024:
            raise ValueError(f"mok.key_bits must be >= 1024, got {self.mok_key_bits}")


def load_config(path: Optional[str] = None) -> ProvisionConfig:
    """Load YAML config.

    With no explicit path, a missing default file means built-in defaults.
    """

    explicit = path is not None
    p = Path(path or DEFAULT_CONFIG_PATH)
    if not p.exists():
        if explicit:
            raise FileNotFoundError(str(p))
        return ProvisionConfig()

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError(f"config must be YAML: {p}")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{p} must contain a mapping/object")

    cfg = ProvisionConfig(raw=raw)
    cfg.check()
    return cfg
