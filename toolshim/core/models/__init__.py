"""
Domain models — Pydantic types for toolshim.

All models are re-exported here for convenient access:

    from toolshim.core.models import AliasSpec, ToolSpec, Fragment, Action, Receipt
"""

from toolshim.core.models.action import Action, Receipt
from toolshim.core.models.config import ShimConfig, ToolOverride, UpdateCheckConfig
from toolshim.core.models.shim import AliasSpec, Fragment, ToolSpec
from toolshim.core.models.state import ShimState, UpdateCheckRecord

__all__ = [
    # action.py
    "Action",
    "Receipt",
    # shim.py
    "AliasSpec",
    "Fragment",
    "ToolSpec",
    # config.py
    "ShimConfig",
    "ToolOverride",
    "UpdateCheckConfig",
    # state.py
    "ShimState",
    "UpdateCheckRecord",
]
