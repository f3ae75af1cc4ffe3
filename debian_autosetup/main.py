from __future__ import annotations

import argparse
import logging
import os
import signal
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Mapping, Optional

import yaml

from .capabilities import Host
from .config import ProvisionConfig, load_config
from .context import ProvisionCtx
from .errors import FailureKind, ProvisionError, fatal
from .lib.accounts import SystemAccounts, discover_operator
from .lib.fetch import NetFetcher
from .lib.mok import MokEnrollment
from .lib.net import NetworkManagerCli
from .lib.pkg import AptPackageManager
from .lib.probe import HostProbe
from .lib.virt import Libvirt
from .lib.workspace import scoped_workspace
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import run_stage
from .resume import StageState, probe_stage
from .steps import build_stage1, build_stage2

logger = logging.getLogger(__name__)

_TERMINATING_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


def build_host(cfg: ProvisionConfig, *, dry_run: bool = False) -> Host:
    return Host(
        packages=AptPackageManager(dry_run=dry_run),
        enrollment=MokEnrollment(
            cfg.mok_dir,
            subject=cfg.mok_subject,
            days=cfg.mok_days,
            key_bits=cfg.mok_key_bits,
            dry_run=dry_run,
        ),
        virt=Libvirt(daemon=cfg.virt_daemon, uri=cfg.virt_uri, network=cfg.virt_network, dry_run=dry_run),
        network=NetworkManagerCli(dry_run=dry_run),
        accounts=SystemAccounts(dry_run=dry_run),
        fetcher=NetFetcher(dry_run=dry_run),
        probe=HostProbe(dry_run=dry_run),
    )


def _raise_interrupt(signum, frame) -> None:
    raise KeyboardInterrupt(f"signal {signum}")


@contextmanager
def signals_as_interrupts() -> Iterator[None]:
    """Turn SIGTERM/SIGHUP into KeyboardInterrupt so cleanup blocks unwind."""

    previous = {}
    for sig in _TERMINATING_SIGNALS:
        try:
            previous[sig] = signal.signal(sig, _raise_interrupt)
        except ValueError:
            # Not the main thread; leave default handling in place.
            pass
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def run(
    *,
    config_path: Optional[str] = None,
    log_path: str = DEFAULT_LOG_PATH,
    dry_run: bool = False,
    stage: str = "auto",
    status_only: bool = False,
    host: Optional[Host] = None,
    env: Optional[Mapping[str, str]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Pick the stage from host state and run it. Returns the exit status.

    This is the only place a failure becomes a process exit code.
    """

    actual_log_path = configure_logging(log_path=log_path)
    logger.debug("Log file: %s", actual_log_path)

    try:
        with signals_as_interrupts():
            try:
                cfg = load_config(config_path)
            except (OSError, ValueError, yaml.YAMLError) as e:
                fatal(f"Cannot load config: {e}", FailureKind.PRECONDITION_FAILED, log=logger)

            if host is None:
                host = build_host(cfg, dry_run=dry_run)

            operator = discover_operator(os.environ if env is None else env)
            if operator is None:
                logger.warning("SUDO_USER not set or invalid; operator-specific steps will be skipped.")

            if stage == "auto":
                chosen = probe_stage(host.enrollment)
            else:
                chosen = StageState.STAGE1 if stage == "1" else StageState.STAGE2
                logger.info("Stage forced from command line")

            if status_only:
                logger.info("Next stage: %s", chosen.value)
                return 0

            with scoped_workspace() as workspace:
                ctx = ProvisionCtx(
                    cfg=cfg,
                    host=host,
                    workspace=workspace,
                    operator=operator,
                    dry_run=dry_run,
                    sleep=sleep,
                )
                stage_def = build_stage1() if chosen is StageState.STAGE1 else build_stage2()
                result = run_stage(ctx, stage_def)
                logger.debug("Ran %s: %s", result.stage, ", ".join(result.ran_steps))
            return 0
    except ProvisionError as e:
        logger.debug("Aborted (%s)", e.kind.value)
        return e.exit_code
    except KeyboardInterrupt:
        logger.critical("Interrupted; aborting.")
        return ProvisionError("interrupted", FailureKind.USER_ABORTED).exit_code


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="debian-autosetup")
    p.add_argument("--config", default=None, help="Path to YAML config (default /etc/debian-autosetup.yaml if present)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to log file")
    p.add_argument("--dry-run", action="store_true", help="Log commands without executing them")
    p.add_argument(
        "--stage",
        choices=["auto", "1", "2"],
        default="auto",
        help="Stage to run; auto derives it from MOK enrollment state",
    )
    p.add_argument("--status", action="store_true", help="Print the stage that would run and exit")

    args = p.parse_args(argv)

    return run(
        config_path=args.config,
        log_path=args.log,
        dry_run=bool(args.dry_run),
        stage=args.stage,
        status_only=bool(args.status),
    )
