"""
Shell init — render alias functions for an interactive shell.

    eval "$(toolshim init bash)"
    toolshim init fish | source
    toolshim init powershell | Out-String | Invoke-Expression

Every function just calls ``toolshim run <alias>`` with the caller's
arguments, plus ``--config <file>`` when init was given one. Presence
checks and install hints happen when the function is called, not when
the shell starts.
"""

from __future__ import annotations

import re
from pathlib import Path

from toolshim.core.services.registry import AliasRegistry

SUPPORTED_SHELLS = ("bash", "zsh", "fish", "powershell")

_POSIX_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_PWSH_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")


def _sh_quote(value: str) -> str:
    return "'" + value.replace("'", "'\\''") + "'"


def _fish_quote(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _pwsh_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _render_posix(name: str, prefix: list[str]) -> list[str]:
    call = " ".join(_sh_quote(p) for p in prefix)
    return [
        f"unalias {name} 2>/dev/null",
        f'{name}() {{ {call} run {name} "$@"; }}',
    ]


def _render_fish(name: str, prefix: list[str], wraps: str) -> list[str]:
    call = " ".join(_fish_quote(p) for p in prefix)
    return [
        f"function {name} --wraps {_fish_quote(wraps)}",
        f"    {call} run {name} $argv",
        "end",
    ]


def _render_pwsh(name: str, prefix: list[str]) -> list[str]:
    prog, *rest = (_pwsh_quote(p) for p in prefix)
    call = " ".join([f"& {prog}", *rest])
    return [
        f"Remove-Item -Path Alias:{name} -Force -ErrorAction SilentlyContinue",
        f"function global:{name} {{ {call} run {name} @args }}",
    ]


def render_init(
    shell: str,
    registry: AliasRegistry,
    prog: str = "toolshim",
    only: set[str] | None = None,
    config_path: Path | None = None,
) -> str:
    """Render shell code defining one function per alias.

    Args:
        shell: One of SUPPORTED_SHELLS.
        registry: Aliases to render.
        prog: Command used to call back into toolshim.
        only: If given, render just these alias names.
        config_path: Config file every function passes back with
            ``--config``, so the aliases keep working from any directory.

    Raises:
        ValueError: For an unsupported shell.
    """
    if shell not in SUPPORTED_SHELLS:
        raise ValueError(
            f"Unsupported shell '{shell}'. Choose from: {', '.join(SUPPORTED_SHELLS)}"
        )

    comment = "#"
    name_re = _PWSH_NAME if shell == "powershell" else _POSIX_NAME
    lines = [f"{comment} toolshim aliases for {shell} (generated)"]
    prefix = [prog]
    if config_path is not None:
        prefix += ["--config", str(Path(config_path).resolve())]

    for alias in registry.list_aliases():
        if only is not None and alias.name not in only:
            continue
        if not name_re.match(alias.name):
            lines.append(f"{comment} skipped '{alias.name}': not a valid {shell} function name")
            continue

        if shell in ("bash", "zsh"):
            lines.extend(_render_posix(alias.name, prefix))
        elif shell == "fish":
            lines.extend(_render_fish(alias.name, prefix, alias.expansion))
        else:
            lines.extend(_render_pwsh(alias.name, prefix))

    return "\n".join(lines) + "\n"
