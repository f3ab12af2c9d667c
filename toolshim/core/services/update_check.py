"""
Update checker — has the user's profile repo fallen behind its upstream?

Runs ``git fetch`` and counts commits between HEAD and its upstream.
The CLI hands due checks to a detached ``toolshim updates check --record``
process, so a shim that exits in milliseconds never cuts a fetch short;
the result is shown from state next time. A check is only started when
the last recorded one is older than the interval, so most invocations
spawn nothing. Git never prompts: stdin is closed and
GIT_TERMINAL_PROMPT=0.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from toolshim.core.models.config import ShimConfig
from toolshim.core.models.state import UpdateCheckRecord
from toolshim.core.persistence.state_file import load_state, save_state
from toolshim.core.services import command_cache

logger = logging.getLogger(__name__)

FETCH_TIMEOUT_S = 30
GIT_TIMEOUT_S = 10

# A started check blocks others for this long, then is presumed dead
CLAIM_TTL_S = FETCH_TIMEOUT_S + 2 * GIT_TIMEOUT_S
CLAIM_KEY = "update_check_started_at"


@dataclass
class UpdateStatus:
    """Result of one update check."""

    repo: str
    available: bool = False
    behind: int = 0
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "repo": self.repo,
            "available": self.available,
            "behind": self.behind,
            "error": self.error,
        }

    def to_record(self) -> UpdateCheckRecord:
        return UpdateCheckRecord(
            checked_at=datetime.now(UTC).isoformat(),
            repo=self.repo,
            available=self.available,
            behind=self.behind,
            error=self.error,
        )


def _run_git(
    git: str, *args: str, cwd: Path, timeout: int = GIT_TIMEOUT_S
) -> subprocess.CompletedProcess[str]:
    """Run a git command non-interactively and return the result."""
    return subprocess.run(
        [git, *args],
        cwd=str(cwd),
        stdin=subprocess.DEVNULL,
        env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
        capture_output=True,
        text=True,
        timeout=timeout,
    )


def check_for_updates(repo_dir: Path) -> UpdateStatus:
    """Fetch and count upstream commits not yet in HEAD.

    Never raises: every failure is reported in ``UpdateStatus.error``.
    """
    status = UpdateStatus(repo=str(repo_dir))

    git = command_cache.resolve_command("git")
    if git is None:
        status.error = "git is not installed"
        return status

    if not repo_dir.is_dir():
        status.error = f"Not a directory: {repo_dir}"
        return status

    try:
        fetch = _run_git(git, "fetch", "--quiet", cwd=repo_dir, timeout=FETCH_TIMEOUT_S)
        if fetch.returncode != 0:
            status.error = fetch.stderr.strip() or f"git fetch exited with {fetch.returncode}"
            return status

        count = _run_git(git, "rev-list", "--count", "HEAD..@{u}", cwd=repo_dir)
        if count.returncode != 0:
            status.error = count.stderr.strip() or "No upstream branch configured"
            return status

        status.behind = int(count.stdout.strip() or 0)
        status.available = status.behind > 0
    except subprocess.TimeoutExpired as e:
        status.error = f"git timed out after {e.timeout}s"
    except (OSError, ValueError) as e:
        status.error = str(e)

    logger.debug("Update check for %s: %s", repo_dir, status)
    return status


def _in_flight(started_at: str | None) -> bool:
    if not started_at:
        return False
    try:
        started = datetime.fromisoformat(started_at)
    except ValueError:
        return False
    return (datetime.now(UTC) - started).total_seconds() < CLAIM_TTL_S


def is_check_due(state_path: Path, interval_s: float) -> bool:
    """Whether the last recorded check is older than ``interval_s``
    and no other process has started one in the meantime."""
    state = load_state(state_path)
    elapsed = state.seconds_since_update_check()
    if elapsed is not None and elapsed < interval_s:
        return False
    return not _in_flight(state.metadata.get(CLAIM_KEY))


def claim_check(state_path: Path) -> None:
    """Mark a check as started so concurrent shells don't start another."""
    state = load_state(state_path)
    state.metadata[CLAIM_KEY] = datetime.now(UTC).isoformat()
    try:
        save_state(state, state_path)
    except OSError as e:
        logger.debug("Could not claim update check: %s", e)


def record_check(status: UpdateStatus, state_path: Path) -> None:
    """Persist a check result. Failures to write are logged, not raised."""
    state = load_state(state_path)
    state.last_update_check = status.to_record()
    state.metadata.pop(CLAIM_KEY, None)
    try:
        save_state(state, state_path)
    except OSError as e:
        logger.debug("Could not record update check: %s", e)


def _check_and_record(repo_dir: Path, state_path: Path) -> None:
    status = check_for_updates(repo_dir)
    record_check(status, state_path)
    if status.available:
        logger.warning(
            "📦 %d update(s) available for %s. Run: git -C %s pull",
            status.behind, repo_dir, repo_dir,
        )
    elif status.error:
        logger.info("Update check failed for %s: %s", repo_dir, status.error)


def spawn_detached_check(config_path: Path | None = None) -> subprocess.Popen | None:
    """Run ``toolshim updates check --record`` in a detached child process.

    Used by ``run`` and ``init``, which both exit long before a fetch
    could finish in a thread. The result is picked up from state next time.
    """
    argv = [sys.executable, "-m", "toolshim.main"]
    if config_path is not None:
        argv += ["--config", str(config_path)]
    argv += ["--quiet", "updates", "check", "--record"]
    try:
        return subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        logger.debug("Could not spawn update check: %s", e)
        return None


def start_update_checker(
    repo_dir: Path,
    state_path: Path,
    interval_s: float,
) -> threading.Thread | None:
    """Start a background update check if one is due.

    For long-lived callers. The thread runs until the check finishes or
    the process exits (daemon=True); a short-lived process should use
    ``spawn_detached_check`` instead.

    Returns:
        The started daemon thread, or None when no check is due.
    """
    if not is_check_due(state_path, interval_s):
        logger.debug("Update check not due for %s", repo_dir)
        return None

    claim_check(state_path)
    t = threading.Thread(
        target=_check_and_record,
        args=(repo_dir, state_path),
        daemon=True,
        name="toolshim-update-check",
    )
    t.start()
    logger.debug("Update checker started for %s", repo_dir)
    return t


def schedule_update_check(
    config: ShimConfig,
    state_path: Path,
    detached: bool = False,
    config_path: Path | None = None,
) -> threading.Thread | subprocess.Popen | None:
    """Start a background check if the config enables one and it is due."""
    uc = config.update_check
    if not uc.enabled or not uc.repo:
        return None

    interval_s = uc.interval_hours * 3600
    repo_dir = Path(uc.repo).expanduser()

    if detached:
        if not is_check_due(state_path, interval_s):
            return None
        claim_check(state_path)
        return spawn_detached_check(config_path)
    return start_update_checker(repo_dir, state_path, interval_s)


def pending_notice(state_path: Path) -> str | None:
    """A one-line notice if the last recorded check found updates."""
    state = load_state(state_path)
    if not state.updates_available:
        return None
    record = state.last_update_check
    return f"📦 {record.behind} update(s) available for {record.repo}. Run: git -C {record.repo} pull"
