from ...pipeline import Stage
from .step_10_shell_profile import ShellProfileStep
from .step_20_verify_enrollment import VerifyEnrollmentStep
from .step_30_boot_log import BootLogStep
from .step_40_driver import InstallDriverStep
from .step_50_smoke_test import SmokeTestStep


def build_stage2() -> Stage:
    return Stage(
        name="stage2",
        title="Stage 2: SecureBoot + NVIDIA Driver Setup",
        steps=[
            ShellProfileStep(),
            VerifyEnrollmentStep(),
            BootLogStep(),
            InstallDriverStep(),
            SmokeTestStep(),
        ],
    )


__all__ = [
    "build_stage2",
    "ShellProfileStep",
    "VerifyEnrollmentStep",
    "BootLogStep",
    "InstallDriverStep",
    "SmokeTestStep",
]
