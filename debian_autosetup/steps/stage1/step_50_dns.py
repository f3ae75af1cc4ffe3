from __future__ import annotations

import logging

from ...context import ProvisionCtx
from ...errors import FailureKind, fatal, require

logger = logging.getLogger(__name__)


class ConfigureDnsStep:
    step_id = "50_dns"

    def run(self, ctx: ProvisionCtx) -> None:
        cfg = ctx.cfg
        net = ctx.host.network

        logger.info("Configuring DNS...")
        conn = net.active_ethernet()
        if not conn:
            fatal("No active Ethernet connection found.", FailureKind.PRECONDITION_FAILED, log=logger)

        require(net.set_dns(conn, cfg.dns_ipv4, cfg.dns_ipv6), f"Failed to set DNS on {conn}")
        require(net.cycle(conn), f"Failed to restart connection {conn}")

        logger.info("DNS set on %s: %s / %s", conn, ",".join(cfg.dns_ipv4), ",".join(cfg.dns_ipv6))
        ctx.sleep(cfg.dns_settle_s)
