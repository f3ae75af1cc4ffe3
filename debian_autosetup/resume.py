from __future__ import annotations

import enum
import logging

from .capabilities import EnrollmentStore

logger = logging.getLogger(__name__)


class StageState(enum.Enum):
    STAGE1 = "stage1"
    STAGE2 = "stage2"


def decide_stage(artifact_exists: bool, artifact_validates: bool) -> StageState:
    """Stage 2 only once the key exists *and* firmware reports it enrolled.

    An existing key that does not validate restarts provisioning rather than
    being treated as pending.
    """

    if artifact_exists and artifact_validates:
        return StageState.STAGE2
    return StageState.STAGE1


def probe_stage(store: EnrollmentStore) -> StageState:
    exists = store.exists()
    validates = store.validate() if exists else False
    stage = decide_stage(exists, validates)
    logger.debug("Stage decision: exists=%s validates=%s -> %s", exists, validates, stage.value)
    return stage
