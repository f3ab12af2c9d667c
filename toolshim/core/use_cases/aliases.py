"""
Alias listing use cases — what aliases exist and what they expand to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from toolshim.core.config.loader import ConfigError
from toolshim.core.services import command_cache
from toolshim.core.services.registry import AliasRegistry, RegistryError, load_registry


@dataclass
class AliasEntry:
    """One alias, resolved against the current PATH."""

    name: str
    tool: str
    args: list[str]
    expansion: str
    description: str = ""
    fragment: str = ""
    available: bool = False
    path: str | None = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "tool": self.tool,
            "args": self.args,
            "expansion": self.expansion,
            "description": self.description,
            "fragment": self.fragment,
            "available": self.available,
            "path": self.path,
        }


@dataclass
class AliasListResult:
    """Result of listing aliases."""

    aliases: list[AliasEntry] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "total": len(self.aliases),
            "aliases": [a.to_dict() for a in self.aliases],
        }


def _entry(registry: AliasRegistry, name: str) -> AliasEntry | None:
    alias = registry.get(name)
    tool = registry.tool_for(name)
    if alias is None or tool is None:
        return None
    found = command_cache.resolve_first(tool.candidates)
    return AliasEntry(
        name=alias.name,
        tool=alias.tool,
        args=list(alias.args),
        expansion=alias.expansion,
        description=alias.description,
        fragment=registry.fragment_of(alias.name),
        available=found is not None,
        path=found[1] if found else None,
    )


def list_aliases(
    config_path: Path | None = None,
    tool: str | None = None,
    available_only: bool = False,
) -> AliasListResult:
    """List aliases, optionally filtered by tool or availability."""
    result = AliasListResult()

    try:
        _config, registry = load_registry(config_path)
    except (ConfigError, RegistryError) as e:
        result.error = str(e)
        return result

    for alias in registry.list_aliases():
        if tool and alias.tool != tool:
            continue
        entry = _entry(registry, alias.name)
        if entry is None:
            continue
        if available_only and not entry.available:
            continue
        result.aliases.append(entry)

    return result


def which_alias(alias: str, config_path: Path | None = None) -> AliasListResult:
    """Resolve a single alias. ``error`` is set when it does not exist."""
    result = AliasListResult()

    try:
        _config, registry = load_registry(config_path)
    except (ConfigError, RegistryError) as e:
        result.error = str(e)
        return result

    entry = _entry(registry, alias)
    if entry is None:
        result.error = f"Unknown alias '{alias}'"
        return result

    result.aliases.append(entry)
    return result
