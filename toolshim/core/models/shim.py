"""
Shim models — tools, aliases, and the fragments that group them.

A fragment is the unit a user enables or disables: "git", "docker",
"kubernetes". It declares the tools it wraps and the short aliases
that forward to them.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, Field, field_validator

# Alias and tool names end up as shell function names.
_NAME_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.+-]*$")

Tier = Literal["core", "essential", "standard", "optional"]


class ToolSpec(BaseModel):
    """A third-party CLI that aliases forward to."""

    name: str
    executable: str = ""            # defaults to name
    alternatives: list[str] = Field(default_factory=list)
    install_hint: str = ""
    homepage: str = ""

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        if not _NAME_RE.match(v):
            raise ValueError(f"invalid tool name: {v!r}")
        return v

    @property
    def candidates(self) -> list[str]:
        """Executable names to probe, in order."""
        primary = self.executable or self.name
        return [primary] + [a for a in self.alternatives if a != primary]

    @property
    def hint(self) -> str:
        """Install hint, or a generic one when none is declared."""
        if self.install_hint:
            return self.install_hint
        return f"Install '{self.name}' and make sure it is on PATH."


class AliasSpec(BaseModel):
    """A short name that forwards to ``<tool> <args...> <forwarded...>``."""

    name: str
    tool: str
    args: list[str] = Field(default_factory=list)
    description: str = ""

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        if not _NAME_RE.match(v):
            raise ValueError(f"invalid alias name: {v!r}")
        return v

    def argv(self, executable: str, forwarded: list[str] | tuple[str, ...] = ()) -> list[str]:
        """Full command line: executable, fixed args, then forwarded args untouched."""
        return [executable, *self.args, *forwarded]

    @property
    def expansion(self) -> str:
        """Human-readable form, e.g. ``git status --short``."""
        return " ".join([self.tool, *self.args])


class Fragment(BaseModel):
    """A named group of tools and aliases, loaded as one unit."""

    name: str
    description: str = ""
    tier: Tier = "standard"
    requires: list[str] = Field(default_factory=list)
    tools: list[ToolSpec] = Field(default_factory=list)
    aliases: list[AliasSpec] = Field(default_factory=list)

    @property
    def alias_names(self) -> list[str]:
        return [a.name for a in self.aliases]
