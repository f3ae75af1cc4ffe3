from __future__ import annotations

import logging

from ...context import ProvisionCtx

logger = logging.getLogger(__name__)


class InstallDriverStep:
    step_id = "40_driver"

    def run(self, ctx: ProvisionCtx) -> None:
        pm = ctx.host.packages
        packages = ctx.cfg.driver_packages

        logger.info("Installing NVIDIA drivers...")
        ctx.retry(pm.sync, "apt-get update")
        # Recommends carry the driver userland (nvidia-smi) the smoke test needs.
        ctx.retry(lambda: pm.install(packages, recommends=True), f"apt-get install -y {' '.join(packages)}")
