"""
Config check use case — validate toolshim.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import get_args

from toolshim.core.config.loader import ConfigError, find_config_file, load_config
from toolshim.core.models.config import ShimConfig
from toolshim.core.models.shim import Tier
from toolshim.core.services.registry import (
    RegistryError,
    build_registry,
    builtin_fragments,
    select_fragments,
)


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: ShimConfig | None = None
    config_path: Path | None = None
    alias_count: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "alias_count": self.alias_count,
            "user_alias_count": len(self.config.aliases) if self.config else 0,
        }


def _dupes(names: list[str]) -> set[str]:
    return {n for n in names if names.count(n) > 1}


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate configuration and report issues.

    A missing config file is valid: toolshim runs on built-in defaults.
    """
    result = ConfigCheckResult()
    explicit = config_path is not None

    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            result.warnings.append("No toolshim.yml found; using built-in defaults.")

    result.config_path = config_path

    try:
        config = load_config(config_path, explicit=explicit)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    fragments = builtin_fragments()
    known_fragments = {f.name for f in fragments} | set(get_args(Tier))

    # Fragment selection
    for name in config.enabled:
        if name not in known_fragments:
            result.warnings.append(f"Unknown fragment or tier in 'enabled': {name}")
    for name in config.disabled:
        if name not in known_fragments:
            result.warnings.append(f"Unknown fragment or tier in 'disabled': {name}")
    both = set(config.enabled) & set(config.disabled)
    if both:
        result.warnings.append(
            f"Fragments both enabled and disabled (disabled wins): {', '.join(sorted(both))}"
        )

    selected = select_fragments(fragments, config)
    builtin_aliases = {a.name for f in selected for a in f.aliases}
    known_tools = {t.name for f in selected for t in f.tools}
    known_tools |= {t.name for t in config.extra_tools}

    # Tool overrides
    for name in config.tools:
        if name not in known_tools:
            result.warnings.append(f"Override for unknown tool: {name}")

    # User aliases
    user_names = [a.name for a in config.aliases]
    dupes = _dupes(user_names)
    if dupes:
        result.errors.append(f"Duplicate alias names: {', '.join(sorted(dupes))}")

    for alias in config.aliases:
        if alias.tool not in known_tools:
            result.errors.append(
                f"Alias '{alias.name}' forwards to unknown tool '{alias.tool}'. "
                "Declare it under 'extra_tools' or enable its fragment."
            )
        elif alias.name in builtin_aliases:
            result.warnings.append(f"Alias '{alias.name}' overrides a built-in alias")

    # Update check
    uc = config.update_check
    if uc.enabled and not uc.repo:
        result.errors.append("update_check.enabled is true but update_check.repo is not set")
    elif uc.repo and not Path(uc.repo).expanduser().is_dir():
        result.warnings.append(f"update_check.repo does not exist: {uc.repo}")
    if uc.interval_hours <= 0:
        result.errors.append("update_check.interval_hours must be positive")

    if not result.errors:
        try:
            result.alias_count = len(build_registry(config, fragments))
        except RegistryError as e:
            result.errors.append(str(e))

    result.valid = len(result.errors) == 0
    return result
