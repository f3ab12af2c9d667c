"""
Run use case — invoke one alias with forwarded arguments.

Loads config, builds the alias registry, dispatches through the
adapter registry and translates the receipt into a process exit code:
the tool's own code when it ran (128+N when a signal killed it), 127
when it is not installed, 1 when the alias or config is bad.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from toolshim.adapters.registry import AdapterRegistry
from toolshim.adapters.shell.shim import EXIT_NOT_FOUND, ShimAdapter
from toolshim.core.config.loader import ConfigError
from toolshim.core.models.action import Action, Receipt
from toolshim.core.services.registry import RegistryError, load_registry

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Result of running an alias."""

    alias: str
    args: list[str] = field(default_factory=list)
    receipt: Receipt | None = None
    exit_code: int = 1
    error: str | None = None

    @property
    def missing(self) -> bool:
        return bool(self.receipt and self.receipt.missing)

    def to_dict(self) -> dict:
        result: dict = {"alias": self.alias, "args": self.args, "exit_code": self.exit_code}
        if self.error:
            result["error"] = self.error
        if self.receipt:
            result["status"] = self.receipt.status
            result["argv"] = self.receipt.metadata.get("argv")
            result["tool"] = self.receipt.metadata.get("tool")
            result["missing"] = self.receipt.missing
        return result


def _exit_code(receipt: Receipt) -> int:
    if receipt.missing:
        return EXIT_NOT_FOUND
    code = receipt.return_code
    if code is None:
        return 0 if not receipt.failed else 1
    if code < 0:
        # killed by signal N: report it the way a shell does
        return 128 - code
    return code


def run_alias(
    alias: str,
    args: list[str] | tuple[str, ...] = (),
    config_path: Path | None = None,
    dry_run: bool = False,
    cwd: str | None = None,
    adapters: AdapterRegistry | None = None,
) -> RunResult:
    """Invoke an alias.

    Args:
        alias: Alias name, e.g. "gs".
        args: Arguments forwarded verbatim after the alias's fixed args.
        config_path: Explicit toolshim.yml (None = discover).
        dry_run: Resolve and report the command line, run nothing.
        cwd: Working directory for the tool (None = inherit).
        adapters: Pre-configured adapter registry (tests, mock mode).

    Returns:
        RunResult. Never raises for missing tools or bad aliases.
    """
    result = RunResult(alias=alias, args=list(args))

    try:
        config, registry = load_registry(config_path)
    except (ConfigError, RegistryError) as e:
        result.error = str(e)
        return result

    if adapters is None:
        adapters = AdapterRegistry()
        adapters.register(ShimAdapter(registry, quiet_missing=config.quiet_missing))

    action = Action(id=alias, args=list(args))
    receipt = adapters.execute_action(action, cwd=cwd, dry_run=dry_run)
    result.receipt = receipt

    if dry_run:
        result.exit_code = 0 if not receipt.failed else 1
    else:
        result.exit_code = _exit_code(receipt)

    if receipt.failed and not receipt.metadata.get("spawned"):
        # Never reached the tool: unknown alias, spawn failure or interrupt
        result.error = receipt.error

    logger.debug("Alias %s finished with exit code %d", alias, result.exit_code)
    return result
