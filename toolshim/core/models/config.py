"""
Config model — the user's toolshim.yml.

Every field is optional: an absent file means "all built-in fragments,
no extras, no update checks".
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from toolshim.core.models.shim import AliasSpec, ToolSpec

DEFAULT_UPDATE_INTERVAL_HOURS = 24 * 7


class ToolOverride(BaseModel):
    """Per-tool override of built-in settings."""

    executable: str | None = None
    alternatives: list[str] | None = None
    install_hint: str | None = None


class UpdateCheckConfig(BaseModel):
    """Background check for new commits in the user's profile repo."""

    enabled: bool = False
    repo: str | None = None         # git checkout to watch
    interval_hours: float = DEFAULT_UPDATE_INTERVAL_HOURS


class ShimConfig(BaseModel):
    """Root configuration model."""

    version: int = 1

    # Fragment selection. Empty ``enabled`` means all built-ins.
    enabled: list[str] = Field(default_factory=list)
    disabled: list[str] = Field(default_factory=list)

    tools: dict[str, ToolOverride] = Field(default_factory=dict)
    extra_tools: list[ToolSpec] = Field(default_factory=list)
    aliases: list[AliasSpec] = Field(default_factory=list)

    quiet_missing: bool = False

    update_check: UpdateCheckConfig = Field(default_factory=UpdateCheckConfig)
