from __future__ import annotations

import logging

from ...context import ProvisionCtx
from ...errors import FailureKind, fatal

logger = logging.getLogger(__name__)


class PreconditionsStep:
    """Refuse to touch a host that could not validate the key we create."""

    step_id = "10_preconditions"

    def run(self, ctx: ProvisionCtx) -> None:
        for tool in ctx.cfg.required_tools:
            if not ctx.host.probe.tool_available(tool):
                fatal(f"{tool} not found. Please install it and rerun.", FailureKind.PRECONDITION_FAILED, log=logger)

        if not ctx.host.enrollment.secure_boot_enabled():
            fatal("SecureBoot is disabled. Please enable it in BIOS and rerun.", FailureKind.PRECONDITION_FAILED, log=logger)

        logger.info("Preconditions met (tools: %s, SecureBoot enabled)", ", ".join(ctx.cfg.required_tools))
