from __future__ import annotations

import logging

from ...context import ProvisionCtx

logger = logging.getLogger(__name__)


class ShellProfileStep:
    step_id = "10_shell_profile"

    def run(self, ctx: ProvisionCtx) -> None:
        profile = ctx.operator_path(ctx.cfg.shell_profile)
        if ctx.operator is None or profile is None or not profile.is_file():
            logger.warning("No %s to source.", ctx.cfg.shell_profile)
            return

        if ctx.host.accounts.source_profile(ctx.operator.name, ctx.cfg.login_shell, profile):
            logger.info("Loaded %s", str(profile))
        else:
            logger.warning("%s did not load cleanly", str(profile))
