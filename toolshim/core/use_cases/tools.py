"""
Tool status use case — which wrapped tools are installed, and how to get the rest.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from toolshim.core.config.loader import ConfigError
from toolshim.core.services import command_cache
from toolshim.core.services.registry import RegistryError, load_registry


@dataclass
class ToolStatus:
    """Presence of one tool."""

    name: str
    available: bool = False
    executable: str | None = None   # candidate that matched
    path: str | None = None
    alias_count: int = 0
    install_hint: str = ""
    homepage: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "available": self.available,
            "executable": self.executable,
            "path": self.path,
            "alias_count": self.alias_count,
            "install_hint": self.install_hint,
            "homepage": self.homepage,
        }


@dataclass
class ToolStatusResult:
    """Result of checking every registered tool."""

    tools: list[ToolStatus] = field(default_factory=list)
    error: str | None = None

    @property
    def available_count(self) -> int:
        return sum(1 for t in self.tools if t.available)

    @property
    def missing(self) -> list[ToolStatus]:
        return [t for t in self.tools if not t.available]

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "total": len(self.tools),
            "available": self.available_count,
            "missing": len(self.missing),
            "tools": [t.to_dict() for t in self.tools],
        }


def tool_status(config_path: Path | None = None, refresh: bool = False) -> ToolStatusResult:
    """Check every registered tool against PATH.

    Args:
        config_path: Explicit toolshim.yml (None = discover).
        refresh: Drop cached probe results first.
    """
    result = ToolStatusResult()

    try:
        _config, registry = load_registry(config_path)
    except (ConfigError, RegistryError) as e:
        result.error = str(e)
        return result

    if refresh:
        command_cache.clear_command_cache()

    for tool in registry.list_tools():
        found = command_cache.resolve_first(tool.candidates)
        result.tools.append(ToolStatus(
            name=tool.name,
            available=found is not None,
            executable=found[0] if found else None,
            path=found[1] if found else None,
            alias_count=len(registry.aliases_for(tool.name)),
            install_hint=tool.hint,
            homepage=tool.homepage,
        ))

    return result
