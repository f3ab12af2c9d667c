"""
Command cache — memoized "is this executable on PATH" checks.

Probing PATH is the only expensive thing a shim does before it runs,
so each executable name is probed once per process and the answer
(found or not) is kept for the rest of the session.

Missing-tool warnings are debounced here too: the same tool warns at
most once per process no matter how many aliases point at it, and
TOOLSHIM_QUIET_MISSING=1 silences them entirely.
"""

from __future__ import annotations

import logging
import os
import shutil
import threading
from collections.abc import Sequence

import click

logger = logging.getLogger(__name__)

QUIET_MISSING_ENV_VAR = "TOOLSHIM_QUIET_MISSING"
_TRUTHY = {"1", "true", "yes", "on"}

_lock = threading.Lock()

# executable name -> resolved path (None = probed, not found)
_resolved: dict[str, str | None] = {}

_warned: set[str] = set()


def resolve_command(name: str) -> str | None:
    """Resolve an executable name to its full path, probing at most once.

    Returns:
        Absolute path, or None when the command is not on PATH.
    """
    with _lock:
        if name in _resolved:
            return _resolved[name]

    path = shutil.which(name)

    with _lock:
        # Another thread may have raced us; first writer wins.
        path = _resolved.setdefault(name, path)

    logger.debug("Probed %s -> %s", name, path or "not found")
    return path


def command_exists(name: str) -> bool:
    """Whether ``name`` is an executable on PATH (cached)."""
    return resolve_command(name) is not None


def resolve_first(candidates: list[str]) -> tuple[str, str] | None:
    """Resolve the first candidate that exists.

    Returns:
        (candidate_name, resolved_path), or None if none exist.
    """
    for candidate in candidates:
        path = resolve_command(candidate)
        if path:
            return candidate, path
    return None


def cached_names() -> dict[str, bool]:
    """Snapshot of probed names and whether each was found."""
    with _lock:
        return {name: path is not None for name, path in _resolved.items()}


def should_warn(tool: str) -> bool:
    """Claim the one missing-tool warning for ``tool``.

    Returns True the first time it is called for a tool in this
    process, False afterwards.
    """
    with _lock:
        if tool in _warned:
            return False
        _warned.add(tool)
        return True


def quiet_missing_from_env() -> bool:
    """Whether TOOLSHIM_QUIET_MISSING asks for silence."""
    return os.environ.get(QUIET_MISSING_ENV_VAR, "").strip().lower() in _TRUTHY


def missing_tool_message(tool: str, hint: str, looked_for: Sequence[str] = ()) -> str:
    """The warning printed when a tool is not installed."""
    tried = ", ".join(looked_for or [tool])
    return f"⚠️  {tool} not found (looked for: {tried}). Install: {hint}"


def warn_missing_tool(tool: str, hint: str, looked_for: Sequence[str] = ()) -> bool:
    """Print the missing-tool warning on stderr, once per tool per process.

    Returns:
        True if the warning was printed.
    """
    if quiet_missing_from_env() or not should_warn(tool):
        return False
    click.secho(missing_tool_message(tool, hint, looked_for), fg="yellow", err=True)
    return True


def clear_command_cache() -> None:
    """Forget every probe result and every issued warning."""
    with _lock:
        _resolved.clear()
        _warned.clear()
