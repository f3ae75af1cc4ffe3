from __future__ import annotations

import logging

from ...context import ProvisionCtx
from ...logging_utils import log_section

logger = logging.getLogger(__name__)


class SmokeTestStep:
    step_id = "50_smoke_test"

    def run(self, ctx: ProvisionCtx) -> None:
        argv = ctx.cfg.driver_smoke_test
        logger.info("Testing NVIDIA driver installation...")
        if not ctx.host.probe.smoke_test(argv):
            logger.warning("%s failed. Driver might not be active.", argv[0])

        log_section(logger, "Stage 2 Complete")
