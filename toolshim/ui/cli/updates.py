"""
CLI commands for profile repo update checks.

Thin wrappers over ``toolshim.core.services.update_check``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


def _resolve_repo(ctx: click.Context, repo: str | None) -> Path | None:
    """Repo from --repo, else from config."""
    if repo:
        return Path(repo).expanduser()

    from toolshim.core.config.loader import ConfigError, load_config

    config_path: Path | None = ctx.obj.get("config_path")
    try:
        cfg = load_config(config_path, explicit=config_path is not None)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)
    return Path(cfg.update_check.repo).expanduser() if cfg.update_check.repo else None


@click.group()
def updates() -> None:
    """Updates — is your profile repo behind its upstream?"""


@updates.command("check")
@click.option("--repo", default=None, help="Git checkout to check (default: update_check.repo).")
@click.option("--record", is_flag=True, help="Save the result to the state file.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def updates_check(ctx: click.Context, repo: str | None, record: bool, as_json: bool) -> None:
    """Fetch and report how many upstream commits are missing locally."""
    from toolshim.core.persistence.state_file import default_state_path
    from toolshim.core.services.update_check import check_for_updates, record_check

    repo_dir = _resolve_repo(ctx, repo)
    if repo_dir is None:
        click.secho("❌ No repo given. Use --repo or set update_check.repo.", fg="red")
        sys.exit(1)

    status = check_for_updates(repo_dir)
    if record:
        record_check(status, default_state_path())

    if as_json:
        click.echo(json.dumps(status.to_dict(), indent=2))
        sys.exit(1 if status.error else 0)

    if status.error:
        click.secho(f"❌ {status.error}", fg="red")
        sys.exit(1)

    if status.available:
        click.secho(f"📦 {status.behind} update(s) available", fg="cyan", bold=True)
        click.echo(f"   Run: git -C {repo_dir} pull")
    else:
        click.secho("✅ Up to date", fg="green")


@updates.command("status")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def updates_status(as_json: bool) -> None:
    """Show the last recorded update check."""
    from toolshim.core.persistence.state_file import default_state_path, load_state

    state = load_state(default_state_path())
    record = state.last_update_check

    if as_json:
        click.echo(json.dumps(record.model_dump(mode="json"), indent=2))
        return

    if not record.checked_at:
        click.secho("No update check recorded yet.", fg="yellow")
        return

    click.echo(f"Last check: {record.checked_at}")
    click.echo(f"   Repo: {record.repo}")
    if state.update_error:
        click.secho(f"   Error: {state.update_error}", fg="red")
    elif state.updates_available:
        click.secho(f"   {record.behind} update(s) available", fg="cyan")
    else:
        click.secho("   Up to date", fg="green")
