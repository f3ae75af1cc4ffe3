from __future__ import annotations

import logging

from ...context import ProvisionCtx

logger = logging.getLogger(__name__)


class VerifyEnrollmentStep:
    step_id = "20_verify_enrollment"

    def run(self, ctx: ProvisionCtx) -> None:
        logger.info("Verifying MOK key...")
        if ctx.host.enrollment.validate():
            logger.info("MOK key is enrolled")
        else:
            logger.warning("MOK key not enrolled yet or inactive.")
