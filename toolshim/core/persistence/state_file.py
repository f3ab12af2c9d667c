"""
State file persistence — atomic read/write for ShimState.

State is stored as JSON in ``$XDG_CACHE_HOME/toolshim/state.json``
(override the directory with TOOLSHIM_STATE_DIR). Writes are atomic
(write to temp file, then rename) because the update checker writes
from a background thread that may be cut off at process exit.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from toolshim.core.models.state import ShimState

logger = logging.getLogger(__name__)

STATE_DIR_ENV_VAR = "TOOLSHIM_STATE_DIR"
DEFAULT_STATE_FILE = "state.json"


def default_state_path() -> Path:
    """Get the default state file path."""
    override = os.environ.get(STATE_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser() / DEFAULT_STATE_FILE
    base = os.environ.get("XDG_CACHE_HOME")
    root = Path(base) if base else Path.home() / ".cache"
    return root / "toolshim" / DEFAULT_STATE_FILE


def load_state(path: Path) -> ShimState:
    """Load state from a JSON file.

    Returns:
        ShimState. A missing or unreadable file yields a fresh state.
    """
    if not path.is_file():
        logger.debug("No state file at %s — starting fresh", path)
        return ShimState()

    try:
        raw = path.read_text(encoding="utf-8")
        data = json.loads(raw)
        state = ShimState.model_validate(data)
        logger.debug("Loaded state from %s (updated_at=%s)", path, state.updated_at)
        return state
    except json.JSONDecodeError as e:
        logger.warning("Corrupt state file %s: %s — starting fresh", path, e)
        return ShimState()
    except Exception as e:
        logger.warning("Cannot load state from %s: %s — starting fresh", path, e)
        return ShimState()


def save_state(state: ShimState, path: Path) -> None:
    """Save state to a JSON file (atomic write).

    Raises:
        OSError: If the directory cannot be created or the file written.
    """
    state.touch()

    path.parent.mkdir(parents=True, exist_ok=True)

    data = state.model_dump(mode="json")
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=".state_",
        suffix=".tmp",
    )
    os.close(fd)
    tmp = Path(tmp_path)
    try:
        tmp.write_text(content, encoding="utf-8")
        tmp.replace(path)
        logger.debug("State saved to %s", path)
    except Exception as e:
        tmp.unlink(missing_ok=True)
        logger.error("Failed to save state to %s: %s", path, e)
        raise
