"""
toolshim — CLI entrypoint.

Usage:
    toolshim --help
    toolshim run gs
    toolshim list --tool git
    eval "$(toolshim init bash)"
"""

from __future__ import annotations

import json
import logging
import os
import shlex
import sys
from pathlib import Path

import click

from toolshim import __version__
from toolshim.core.observability.logging_config import setup_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="toolshim")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to toolshim.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """toolshim — short aliases for the command-line tools you already use."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("TOOLSHIM_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("TOOLSHIM_LOG_FILE"),
        log_file_level=os.environ.get("TOOLSHIM_LOG_FILE_LEVEL"),
    )


def _schedule_updates(ctx: click.Context) -> None:
    """Hand a due update check to a detached process that outlives this one."""
    from toolshim.core.config.loader import ConfigError, load_config
    from toolshim.core.persistence.state_file import default_state_path
    from toolshim.core.services.update_check import schedule_update_check

    config_path: Path | None = ctx.obj.get("config_path")
    try:
        config = load_config(config_path, explicit=config_path is not None)
    except ConfigError:
        return  # reported by the command itself
    schedule_update_check(
        config,
        default_state_path(),
        detached=True,
        config_path=config_path,
    )


@cli.command(context_settings={"allow_interspersed_args": False})
@click.argument("alias")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option("--dry-run", is_flag=True, help="Print the command line, run nothing.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON (with --dry-run).")
@click.pass_context
def run(
    ctx: click.Context,
    alias: str,
    args: tuple[str, ...],
    dry_run: bool,
    as_json: bool,
) -> None:
    """Run ALIAS, forwarding ARGS unchanged to its tool.

    Options for toolshim itself go before the alias; everything after
    it belongs to the tool.

    Examples:

        toolshim run gs

        toolshim run gco -b feature/x

        toolshim run --dry-run kgp -n kube-system
    """
    from toolshim.core.use_cases.run import run_alias

    if not dry_run:
        _schedule_updates(ctx)

    result = run_alias(
        alias,
        list(args),
        config_path=ctx.obj.get("config_path"),
        dry_run=dry_run,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(result.exit_code)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(result.exit_code)

    if dry_run and result.receipt is not None:
        argv = result.receipt.metadata.get("argv") or []
        click.echo(shlex.join(argv))
        if result.receipt.missing:
            click.secho(
                f"   ({result.receipt.metadata.get('tool')} is not installed)",
                fg="yellow",
                err=True,
            )

    sys.exit(result.exit_code)


@cli.command("list")
@click.option("--tool", "-t", default=None, help="Only aliases for this tool.")
@click.option("--available", "available_only", is_flag=True, help="Only aliases whose tool is installed.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_cmd(
    ctx: click.Context,
    tool: str | None,
    available_only: bool,
    as_json: bool,
) -> None:
    """List aliases and what they expand to."""
    from toolshim.core.use_cases.aliases import list_aliases

    result = list_aliases(
        config_path=ctx.obj.get("config_path"),
        tool=tool,
        available_only=available_only,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if not result.aliases:
        click.secho("No aliases match.", fg="yellow")
        return

    width = max(len(a.name) for a in result.aliases)
    current_fragment = None
    for entry in result.aliases:
        if entry.fragment != current_fragment:
            current_fragment = entry.fragment
            click.echo()
            click.secho(f"  {current_fragment or 'user'}", fg="cyan", bold=True)
        marker = click.style("✓", fg="green") if entry.available else click.style("✗", fg="red")
        click.echo(f"    {marker} {entry.name.ljust(width)}  → {entry.expansion}")
    click.echo()

    if not ctx.obj.get("quiet"):
        available = sum(1 for a in result.aliases if a.available)
        click.echo(f"   {len(result.aliases)} aliases, {available} with an installed tool")
        click.echo()


@cli.command()
@click.argument("alias")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def which(ctx: click.Context, alias: str, as_json: bool) -> None:
    """Show what ALIAS runs and where its tool lives."""
    from toolshim.core.use_cases.aliases import which_alias

    result = which_alias(alias, config_path=ctx.obj.get("config_path"))

    if as_json:
        if result.error:
            click.echo(json.dumps(result.to_dict(), indent=2))
            sys.exit(1)
        click.echo(json.dumps(result.aliases[0].to_dict(), indent=2))
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    entry = result.aliases[0]
    click.secho(f"{entry.name}", fg="cyan", bold=True, nl=False)
    click.echo(f" → {entry.expansion}")
    if entry.description:
        click.echo(f"   {entry.description}")
    if entry.available:
        click.echo(f"   Tool: {entry.path}")
    else:
        click.secho(f"   Tool: {entry.tool} (not installed)", fg="yellow")


@cli.command()
@click.option("--refresh", is_flag=True, help="Re-probe PATH instead of using cached results.")
@click.option("--missing", "missing_only", is_flag=True, help="Only show tools that are not installed.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def tools(ctx: click.Context, refresh: bool, missing_only: bool, as_json: bool) -> None:
    """Show which wrapped tools are installed, with install hints for the rest."""
    from toolshim.core.use_cases.tools import tool_status

    result = tool_status(config_path=ctx.obj.get("config_path"), refresh=refresh)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    click.echo()
    click.secho(
        f"🔧 Tools: {result.available_count}/{len(result.tools)} installed",
        fg="cyan",
        bold=True,
    )
    click.echo()

    for status in result.tools:
        if status.available:
            if missing_only:
                continue
            click.secho(f"   ✓ {status.name}", fg="green", nl=False)
            via = f" (as {status.executable})" if status.executable != status.name else ""
            click.echo(f"{via}  → {status.path}")
        else:
            click.secho(f"   ✗ {status.name}", fg="red", nl=False)
            click.echo(f"  ({status.alias_count} aliases)")
            click.echo(f"     Install: {status.install_hint}")
    click.echo()


@cli.command()
@click.argument("shell", type=click.Choice(["bash", "zsh", "fish", "powershell"]))
@click.option("--available-only", is_flag=True, help="Only define aliases whose tool is installed.")
@click.option("--prog", default="toolshim", show_default=True, help="Command the functions call back into.")
@click.pass_context
def init(ctx: click.Context, shell: str, available_only: bool, prog: str) -> None:
    """Print shell code that defines every alias as a function.

    A config given with --config or TOOLSHIM_CONFIG is baked into the
    functions, so they use it from any directory.

    \b
        eval "$(toolshim init bash)"
        toolshim init fish | source
        toolshim init powershell | Out-String | Invoke-Expression
    """
    from toolshim.core.config.loader import CONFIG_ENV_VAR, ConfigError
    from toolshim.core.persistence.state_file import default_state_path
    from toolshim.core.services.registry import RegistryError, load_registry
    from toolshim.core.services.shell_init import render_init
    from toolshim.core.services.update_check import pending_notice

    try:
        _config, registry = load_registry(ctx.obj.get("config_path"))
    except (ConfigError, RegistryError) as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    only = None
    if available_only:
        from toolshim.core.use_cases.aliases import list_aliases

        listed = list_aliases(config_path=ctx.obj.get("config_path"), available_only=True)
        only = {a.name for a in listed.aliases}

    pinned = ctx.obj.get("config_path") or os.environ.get(CONFIG_ENV_VAR)
    click.echo(
        render_init(
            shell,
            registry,
            prog=prog,
            only=only,
            config_path=Path(pinned) if pinned else None,
        ),
        nl=False,
    )

    if not ctx.obj.get("quiet"):
        notice = pending_notice(default_state_path())
        if notice:
            click.secho(notice, fg="cyan", err=True)

    _schedule_updates(ctx)


# ── Register sub-command groups from toolshim/ui/cli/ ─────────────

from toolshim.ui.cli.config import config  # noqa: E402
from toolshim.ui.cli.updates import updates  # noqa: E402

cli.add_command(config)
cli.add_command(updates)


if __name__ == "__main__":
    cli()
