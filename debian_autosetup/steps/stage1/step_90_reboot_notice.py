from __future__ import annotations

import logging

from ...context import ProvisionCtx
from ...logging_utils import log_notice, log_section

logger = logging.getLogger(__name__)


class RebootNoticeStep:
    step_id = "90_reboot_notice"

    def run(self, ctx: ProvisionCtx) -> None:
        log_section(logger, "Stage 1 Complete - Reboot Required")
        log_notice(
            logger,
            "After reboot, you will be prompted to enroll the MOK (Machine Owner Key).\n"
            "Select 'Enroll MOK' using arrow keys, confirm password, and complete the process.\n"
            f"Then run:\n  {ctx.cfg.rerun_hint}\n",
        )
