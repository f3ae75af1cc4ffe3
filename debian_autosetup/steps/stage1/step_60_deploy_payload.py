from __future__ import annotations

import logging
from pathlib import Path

from ...context import ProvisionCtx
from ...errors import FailureKind, fatal, require
from ...lib.assets import install_file, make_executable

logger = logging.getLogger(__name__)


class DeployPayloadStep:
    """Config repo files, theme assets, shell profile and login shell."""

    step_id = "60_deploy_payload"

    def run(self, ctx: ProvisionCtx) -> None:
        repo = ctx.workspace.clone_dir / "repo"
        self._deploy_system_files(ctx, repo)
        self._install_theme(ctx)
        self._install_shell_profile(ctx, repo)
        self._set_login_shell(ctx)

    def _deploy_system_files(self, ctx: ProvisionCtx, repo: Path) -> None:
        cfg = ctx.cfg
        fetcher = ctx.host.fetcher

        logger.info("Cloning configuration repo...")
        ctx.retry(lambda: fetcher.shallow_clone(cfg.repo_url, repo), f"git clone --depth=1 {cfg.repo_url}")

        for rel, dst in cfg.system_files.items():
            try:
                install_file(repo / rel, dst, dry_run=ctx.dry_run)
            except OSError as e:
                fatal(f"Failed to deploy {rel} -> {dst}: {e}", FailureKind.STEP_FAILED, log=logger)

        for path in cfg.executable_files:
            try:
                make_executable(path, dry_run=ctx.dry_run)
            except OSError as e:
                fatal(f"Failed to mark {path} executable: {e}", FailureKind.STEP_FAILED, log=logger)

    def _install_theme(self, ctx: ProvisionCtx) -> None:
        cfg = ctx.cfg
        fetcher = ctx.host.fetcher
        target = ctx.operator_path(cfg.theme_target)
        if ctx.operator is None or target is None:
            logger.warning("SUDO_USER not set or invalid. Skipping theme install.")
            return

        logger.info("Installing theme into %s...", str(target))
        archive = ctx.workspace.download_dir / "theme.tar"
        ctx.retry(lambda: fetcher.download(cfg.theme_url, archive), f"download {cfg.theme_url}")

        require(
            fetcher.extract(archive, target, member=cfg.theme_member, strip_components=cfg.theme_strip_components),
            f"Failed to unpack theme archive into {target}",
        )
        require(
            ctx.host.accounts.chown(target, ctx.operator.name, ctx.operator.gid, recursive=True),
            f"Failed to chown {target}",
        )

    def _install_shell_profile(self, ctx: ProvisionCtx, repo: Path) -> None:
        dst = ctx.operator_path(ctx.cfg.shell_profile)
        if ctx.operator is None or dst is None:
            logger.warning("SUDO_USER not set or invalid. Skipping %s.", ctx.cfg.shell_profile)
            return

        try:
            install_file(repo / ctx.cfg.shell_profile, dst, dry_run=ctx.dry_run)
        except OSError as e:
            logger.warning("Failed to copy %s: %s", ctx.cfg.shell_profile, e)
            return

        if not ctx.host.accounts.chown(dst, ctx.operator.name, ctx.operator.gid):
            logger.warning("Failed to chown %s", str(dst))

    def _set_login_shell(self, ctx: ProvisionCtx) -> None:
        if ctx.operator is None:
            logger.warning("SUDO_USER not set or invalid. Skipping shell change.")
            return

        logger.info("Setting %s as default shell for user %s...", ctx.cfg.login_shell, ctx.operator.name)
        require(
            ctx.host.accounts.change_shell(ctx.operator.name, ctx.cfg.login_shell),
            f"chsh failed for {ctx.operator.name}",
        )
