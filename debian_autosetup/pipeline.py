from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from .context import ProvisionCtx
from .logging_utils import log_section

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single step of a stage. Failures surface as ProvisionError."""

    step_id: str

    def run(self, ctx: ProvisionCtx) -> None:
        ...


@dataclass(frozen=True)
class Stage:
    name: str
    title: str
    steps: Sequence[Step]


@dataclass(frozen=True)
class StageResult:
    stage: str
    ran_steps: List[str]


def run_stage(ctx: ProvisionCtx, stage: Stage) -> StageResult:
    """Run every step of a stage, in order, with no skipping."""

    log_section(logger, stage.title)
    ran: List[str] = []
    for step in stage.steps:
        logger.debug("Running step %s/%s", stage.name, step.step_id)
        step.run(ctx)
        ran.append(step.step_id)
    return StageResult(stage=stage.name, ran_steps=ran)
