from ...pipeline import Stage
from .step_10_preconditions import PreconditionsStep
from .step_20_packages import PackagesStep
from .step_30_virtualization import VirtualizationStep
from .step_40_mok_key import MokKeyStep
from .step_50_dns import ConfigureDnsStep
from .step_60_deploy_payload import DeployPayloadStep
from .step_80_verify import VerifyStep
from .step_90_reboot_notice import RebootNoticeStep


def build_stage1() -> Stage:
    return Stage(
        name="stage1",
        title="Stage 1: System Setup & Configuration",
        steps=[
            PreconditionsStep(),
            PackagesStep(),
            VirtualizationStep(),
            MokKeyStep(),
            ConfigureDnsStep(),
            DeployPayloadStep(),
            VerifyStep(),
            RebootNoticeStep(),
        ],
    )


__all__ = [
    "build_stage1",
    "PreconditionsStep",
    "PackagesStep",
    "VirtualizationStep",
    "MokKeyStep",
    "ConfigureDnsStep",
    "DeployPayloadStep",
    "VerifyStep",
    "RebootNoticeStep",
]
