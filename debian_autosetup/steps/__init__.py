from .stage1 import build_stage1
from .stage2 import build_stage2

__all__ = ["build_stage1", "build_stage2"]
