"""
Alias registry — the lookup table from alias name to tool invocation.

Fragments register their tools first, then their aliases. Registration
never clobbers: an alias that already exists is left alone unless the
caller forces it, so loading the same fragment twice is harmless and
user aliases can deliberately override built-ins.
"""

from __future__ import annotations

import logging
from pathlib import Path

from toolshim.core.config.loader import load_config
from toolshim.core.data.fragments import BUILTIN_FRAGMENTS
from toolshim.core.models.config import ShimConfig
from toolshim.core.models.shim import AliasSpec, Fragment, ToolSpec

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Raised when a fragment, tool or alias cannot be registered."""


class AliasRegistry:
    """Tools and aliases, keyed by name.

    Iteration order is registration order, which is fragment load order.
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}
        self._aliases: dict[str, AliasSpec] = {}
        self._fragments: dict[str, Fragment] = {}
        self._alias_fragment: dict[str, str] = {}

    # ── Registration ────────────────────────────────────────────

    def register_tool(self, tool: ToolSpec, force: bool = False) -> bool:
        """Register a tool. Returns True if it was added or replaced."""
        if tool.name in self._tools and not force:
            logger.debug("Tool already registered, keeping existing: %s", tool.name)
            return False
        self._tools[tool.name] = tool
        return True

    def register_alias(
        self,
        alias: AliasSpec,
        force: bool = False,
        fragment: str = "",
    ) -> bool:
        """Register an alias.

        Args:
            alias: The alias to add.
            force: Replace an existing alias of the same name.
            fragment: Owning fragment name, for listings.

        Returns:
            True if the alias was added or replaced, False if skipped.

        Raises:
            RegistryError: If the alias points at an unknown tool.
        """
        if alias.tool not in self._tools:
            raise RegistryError(
                f"Alias '{alias.name}' forwards to unknown tool '{alias.tool}'"
            )
        if alias.name in self._aliases and not force:
            logger.debug("Alias already registered, keeping existing: %s", alias.name)
            return False
        if alias.name in self._aliases:
            logger.info(
                "Overriding alias %s (%s -> %s)",
                alias.name, self._aliases[alias.name].expansion, alias.expansion,
            )
        self._aliases[alias.name] = alias
        self._alias_fragment[alias.name] = fragment
        return True

    def register_fragment(self, fragment: Fragment) -> int:
        """Register a fragment's tools and aliases.

        Returns:
            Number of aliases newly registered.

        Raises:
            RegistryError: If a required fragment has not been registered.
        """
        missing = [r for r in fragment.requires if r not in self._fragments]
        if missing:
            raise RegistryError(
                f"Fragment '{fragment.name}' requires unloaded fragment(s): "
                f"{', '.join(missing)}"
            )

        for tool in fragment.tools:
            self.register_tool(tool)

        added = 0
        for alias in fragment.aliases:
            if self.register_alias(alias, fragment=fragment.name):
                added += 1

        self._fragments[fragment.name] = fragment
        logger.debug("Loaded fragment %s (%d aliases)", fragment.name, added)
        return added

    # ── Lookup ──────────────────────────────────────────────────

    def get(self, name: str) -> AliasSpec | None:
        """Look up an alias by name."""
        return self._aliases.get(name)

    def get_tool(self, name: str) -> ToolSpec | None:
        """Look up a tool by name."""
        return self._tools.get(name)

    def tool_for(self, alias_name: str) -> ToolSpec | None:
        """The tool an alias forwards to."""
        alias = self._aliases.get(alias_name)
        return self._tools.get(alias.tool) if alias else None

    def fragment_of(self, alias_name: str) -> str:
        """Name of the fragment that registered an alias ("" for user aliases)."""
        return self._alias_fragment.get(alias_name, "")

    def aliases_for(self, tool: str) -> list[AliasSpec]:
        """All aliases that forward to ``tool``."""
        return [a for a in self._aliases.values() if a.tool == tool]

    def list_aliases(self) -> list[AliasSpec]:
        return list(self._aliases.values())

    def list_tools(self) -> list[ToolSpec]:
        return list(self._tools.values())

    def list_fragments(self) -> list[str]:
        return list(self._fragments.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._aliases

    def __len__(self) -> int:
        return len(self._aliases)


def builtin_fragments() -> list[Fragment]:
    """Validate the built-in table into Fragment models."""
    return [Fragment.model_validate(entry) for entry in BUILTIN_FRAGMENTS]


def order_fragments(fragments: list[Fragment]) -> list[Fragment]:
    """Order fragments so every fragment comes after the ones it requires.

    Fragments whose requirements are absent from ``fragments`` are
    dropped with a warning. Cycles raise RegistryError.
    """
    by_name = {f.name: f for f in fragments}
    ordered: list[Fragment] = []
    state: dict[str, str] = {}  # name -> "visiting" | "done" | "dropped"

    def visit(frag: Fragment) -> bool:
        mark = state.get(frag.name)
        if mark == "done":
            return True
        if mark == "dropped":
            return False
        if mark == "visiting":
            raise RegistryError(f"Fragment dependency cycle at '{frag.name}'")

        state[frag.name] = "visiting"
        for req in frag.requires:
            dep = by_name.get(req)
            if dep is None or not visit(dep):
                logger.warning(
                    "Skipping fragment '%s': requires '%s' which is not enabled",
                    frag.name, req,
                )
                state[frag.name] = "dropped"
                return False
        state[frag.name] = "done"
        ordered.append(frag)
        return True

    for frag in fragments:
        visit(frag)
    return ordered


def _matches(frag: Fragment, names: set[str]) -> bool:
    return frag.name in names or frag.tier in names


def select_fragments(fragments: list[Fragment], config: ShimConfig) -> list[Fragment]:
    """Apply the config's enabled/disabled lists.

    Entries are fragment names or tier names (``optional`` drops every
    optional fragment). Disabled wins over enabled.
    """
    selected = fragments
    if config.enabled:
        wanted = set(config.enabled)
        selected = [f for f in selected if _matches(f, wanted)]
    if config.disabled:
        unwanted = set(config.disabled)
        selected = [f for f in selected if not _matches(f, unwanted)]
    return selected


def _apply_override(tool: ToolSpec, config: ShimConfig) -> ToolSpec:
    override = config.tools.get(tool.name)
    if override is None:
        return tool
    changes = override.model_dump(exclude_none=True)
    return tool.model_copy(update=changes)


def load_registry(config_path: Path | None = None) -> tuple[ShimConfig, AliasRegistry]:
    """Load config (explicit path or discovered) and build the registry.

    Raises:
        ConfigError: If the config file is missing (explicit path) or invalid.
        RegistryError: If the config describes an impossible registry.
    """
    config = load_config(config_path, explicit=config_path is not None)
    return config, build_registry(config)


def build_registry(
    config: ShimConfig | None = None,
    fragments: list[Fragment] | None = None,
) -> AliasRegistry:
    """Build the registry from built-in fragments and user config.

    Order: selected built-in fragments (dependency order, with tool
    overrides applied), then the user's extra tools, then the user's
    aliases, which replace built-ins of the same name.

    Raises:
        RegistryError: On dependency cycles or user aliases that point
            at unknown tools.
    """
    config = config or ShimConfig()
    fragments = builtin_fragments() if fragments is None else fragments

    registry = AliasRegistry()
    for frag in order_fragments(select_fragments(fragments, config)):
        tools = [_apply_override(t, config) for t in frag.tools]
        registry.register_fragment(frag.model_copy(update={"tools": tools}))

    for tool in config.extra_tools:
        registry.register_tool(_apply_override(tool, config), force=True)

    for alias in config.aliases:
        registry.register_alias(alias, force=True)

    logger.debug(
        "Registry built: %d fragments, %d tools, %d aliases",
        len(registry.list_fragments()), len(registry.list_tools()), len(registry),
    )
    return registry
