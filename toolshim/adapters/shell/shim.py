"""
Shim adapter — forward an alias to the tool behind it.

The whole life of a shim: look up the alias, find the tool's
executable (cached), then either hand the terminal over to the tool
with the alias's fixed args plus the user's args, or print an install
hint and run nothing.
"""

from __future__ import annotations

import contextlib
import logging
import signal
import subprocess
import threading
import time
from collections.abc import Iterator

from toolshim.adapters.base import Adapter, ExecutionContext
from toolshim.core.models.action import Receipt
from toolshim.core.models.shim import AliasSpec, ToolSpec
from toolshim.core.services import command_cache
from toolshim.core.services.registry import AliasRegistry

logger = logging.getLogger(__name__)

# Conventional shell exit codes
EXIT_NOT_FOUND = 127
EXIT_INTERRUPTED = 130


@contextlib.contextmanager
def _sigint_ignored() -> Iterator[None]:
    """Ignore Ctrl-C in this process while a foreground tool runs.

    The terminal delivers SIGINT to the whole process group, so the tool
    still receives it and decides for itself what it means.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _run_foreground(argv: list[str], cwd: str | None) -> int:
    """Run a tool on the caller's terminal and return its exit status."""
    proc = subprocess.Popen(argv, cwd=cwd)
    try:
        with _sigint_ignored():
            return proc.wait()
    except KeyboardInterrupt:
        # Ctrl-C beat the handler swap; the tool got it too, so keep waiting
        with _sigint_ignored():
            return proc.wait()


class ShimAdapter(Adapter):
    """Forward alias invocations to installed tools.

    Action:
        id: alias name.
        args: forwarded arguments, passed through untouched.

    Tool output is never captured: stdin, stdout and stderr are the
    caller's, so interactive tools behave normally. Ctrl-C belongs to
    the tool while it runs; its exit status is reported as-is.
    """

    def __init__(self, aliases: AliasRegistry, quiet_missing: bool = False):
        self._aliases = aliases
        self._quiet_missing = quiet_missing

    @property
    def name(self) -> str:
        return "shim"

    def is_available(self) -> bool:
        return True

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        alias_name = context.action.id
        if alias_name not in self._aliases:
            return False, f"Unknown alias '{alias_name}'"
        if self._aliases.tool_for(alias_name) is None:
            return False, f"Alias '{alias_name}' has no registered tool"
        return True, ""

    def resolve(self, alias_name: str) -> tuple[AliasSpec, ToolSpec, str | None]:
        """Alias, its tool, and the resolved executable path (None if missing)."""
        alias = self._aliases.get(alias_name)
        tool = self._aliases.tool_for(alias_name)
        assert alias is not None and tool is not None  # guaranteed by validate()
        found = command_cache.resolve_first(tool.candidates)
        return alias, tool, found[1] if found else None

    def describe(self, context: ExecutionContext) -> Receipt:
        alias, tool, path = self.resolve(context.action.id)
        argv = alias.argv(path or tool.candidates[0], context.action.args)
        return Receipt.skip(
            adapter=self.name,
            action_id=alias.name,
            reason=f"[dry-run] {' '.join(argv)}",
            metadata={
                "dry_run": True,
                "argv": argv,
                "tool": tool.name,
                "missing": path is None,
                "return_code": None,
            },
        )

    def execute(self, context: ExecutionContext) -> Receipt:
        alias, tool, path = self.resolve(context.action.id)

        if path is None:
            if not self._quiet_missing:
                command_cache.warn_missing_tool(tool.name, tool.hint, tool.candidates)
            logger.info("Skipping %s: %s is not installed", alias.name, tool.name)
            return Receipt.skip(
                adapter=self.name,
                action_id=alias.name,
                reason=f"{tool.name} is not installed",
                metadata={
                    "tool": tool.name,
                    "missing": True,
                    "install_hint": tool.hint,
                    "return_code": None,
                },
            )

        argv = alias.argv(path, context.action.args)
        logger.debug("Executing: %s (cwd=%s)", argv, context.cwd or ".")
        start = time.monotonic()
        metadata = {"tool": tool.name, "argv": argv}

        try:
            returncode = _run_foreground(argv, context.cwd)
        except KeyboardInterrupt:
            # Ctrl-C landed before the tool took over the terminal
            return Receipt.failure(
                adapter=self.name,
                action_id=alias.name,
                error="Interrupted",
                metadata={**metadata, "return_code": EXIT_INTERRUPTED},
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=alias.name,
                error=f"Cannot start {tool.name}: {e}",
                metadata={**metadata, "return_code": EXIT_NOT_FOUND},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        metadata["return_code"] = returncode
        metadata["spawned"] = True

        if returncode == 0:
            return Receipt.success(
                adapter=self.name,
                action_id=alias.name,
                duration_ms=elapsed_ms,
                metadata=metadata,
            )
        return Receipt.failure(
            adapter=self.name,
            action_id=alias.name,
            error=f"{tool.name} exited with code {returncode}",
            duration_ms=elapsed_ms,
            metadata=metadata,
        )
