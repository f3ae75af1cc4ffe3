from __future__ import annotations

import logging

from ...context import ProvisionCtx

logger = logging.getLogger(__name__)

CERT_PATTERN = r"cert"


class BootLogStep:
    step_id = "30_boot_log"

    def run(self, ctx: ProvisionCtx) -> None:
        logger.info("Inspecting kernel logs for certificates...")
        lines = ctx.host.probe.boot_log(CERT_PATTERN)
        if not lines:
            logger.warning("No certificate logs found in dmesg.")
            return
        logger.info("Kernel certificate entries:\n%s", "\n".join(lines))
