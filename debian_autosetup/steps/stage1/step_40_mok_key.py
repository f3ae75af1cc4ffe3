from __future__ import annotations

import logging

from ...context import ProvisionCtx
from ...errors import require

logger = logging.getLogger(__name__)


class MokKeyStep:
    """Fresh DKMS signing key, queued for enrollment at next boot."""

    step_id = "40_mok_key"

    def run(self, ctx: ProvisionCtx) -> None:
        store = ctx.host.enrollment

        logger.info("Generating DKMS MOK key in %s...", ctx.cfg.mok_dir)
        require(store.generate(), "MOK key generation failed")

        logger.info("Registering MOK for enrollment (choose a one-time password)...")
        require(store.register(), "mokutil --import failed")
