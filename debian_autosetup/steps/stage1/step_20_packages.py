from __future__ import annotations

import logging

from ...context import ProvisionCtx
from ...errors import require

logger = logging.getLogger(__name__)


class PackagesStep:
    step_id = "20_packages"

    def run(self, ctx: ProvisionCtx) -> None:
        pm = ctx.host.packages
        packages = ctx.cfg.base_packages

        logger.info("Updating system and installing packages...")
        ctx.retry(pm.sync, "apt-get update")
        ctx.retry(pm.upgrade, "apt-get full-upgrade -y")

        require(pm.install(packages), f"Package install failed: {' '.join(packages)}")
        require(pm.autoremove(), "apt-get autoremove failed")
