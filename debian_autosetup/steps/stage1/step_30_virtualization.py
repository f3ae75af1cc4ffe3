from __future__ import annotations

import logging

from ...context import ProvisionCtx
from ...errors import require

logger = logging.getLogger(__name__)


class VirtualizationStep:
    step_id = "30_virtualization"

    def run(self, ctx: ProvisionCtx) -> None:
        cfg = ctx.cfg
        virt = ctx.host.virt

        logger.info("Configuring libvirt user and network...")
        if ctx.operator is None:
            logger.warning("SUDO_USER not set or invalid. Skipping group membership (%s).", ", ".join(cfg.virt_groups))
        else:
            for group in cfg.virt_groups:
                require(
                    ctx.host.accounts.add_to_group(ctx.operator.name, group),
                    f"Failed to add {ctx.operator.name} to group {group}",
                )

        require(virt.restart_daemon(), f"Failed to restart {cfg.virt_daemon}")
        require(virt.autostart_network(), f"Failed to autostart virtual network {cfg.virt_network}")
        require(virt.start_network(), f"Failed to start virtual network {cfg.virt_network}")
