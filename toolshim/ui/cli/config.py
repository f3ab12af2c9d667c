"""
CLI commands for toolshim.yml — check, locate, show.

Thin wrappers over ``toolshim.core.use_cases.config_check`` and the loader.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
import yaml


@click.group()
def config() -> None:
    """Configuration — validate and inspect toolshim.yml."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate toolshim.yml."""
    from toolshim.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        if result.config_path:
            click.echo(f"   File: {result.config_path}")
        click.echo(f"   Aliases: {result.alias_count}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


@config.command("path")
@click.pass_context
def config_path(ctx: click.Context) -> None:
    """Print the config file in effect (exit 1 if none)."""
    from toolshim.core.config.loader import CONFIG_FILE, find_config_file, user_config_dir

    path: Path | None = ctx.obj.get("config_path") or find_config_file()
    if path is None:
        click.secho(
            f"No {CONFIG_FILE} found. Create one at {user_config_dir() / CONFIG_FILE}",
            fg="yellow",
        )
        sys.exit(1)
    click.echo(str(path))


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Print the effective configuration as YAML (defaults filled in)."""
    from toolshim.core.config.loader import ConfigError, load_config

    path: Path | None = ctx.obj.get("config_path")
    try:
        cfg = load_config(path, explicit=path is not None)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    data = cfg.model_dump(mode="json", exclude_none=True)
    click.echo(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), nl=False)
