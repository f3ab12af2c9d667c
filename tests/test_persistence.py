"""
Tests for persistence — the update-check state file.
"""

import json
from pathlib import Path

import pytest

from toolshim.core.models.state import ShimState, UpdateCheckRecord
from toolshim.core.persistence.state_file import (
    STATE_DIR_ENV_VAR,
    default_state_path,
    load_state,
    save_state,
)


class TestStateFile:
    """Tests for state file persistence."""

    def test_save_and_load(self, tmp_path: Path):
        """State roundtrips through save/load."""
        path = tmp_path / "cache" / "state.json"
        state = ShimState()
        state.last_update_check = UpdateCheckRecord(
            checked_at="2026-01-01T00:00:00+00:00",
            repo="/home/me/dotfiles",
            available=True,
            behind=3,
        )

        save_state(state, path)
        assert path.is_file()

        loaded = load_state(path)
        assert loaded.last_update_check.behind == 3
        assert loaded.last_update_check.repo == "/home/me/dotfiles"

    def test_load_missing_file(self, tmp_path: Path):
        """Missing file returns a fresh state."""
        state = load_state(tmp_path / "nonexistent.json")
        assert state.last_update_check.checked_at is None

    def test_load_corrupt_file(self, tmp_path: Path):
        """Corrupt JSON returns a fresh state."""
        path = tmp_path / "state.json"
        path.write_text("{not valid json")
        state = load_state(path)
        assert state.schema_version == 1

    def test_load_wrong_shape(self, tmp_path: Path):
        path = tmp_path / "state.json"
        path.write_text(json.dumps({"last_update_check": "yesterday"}))
        assert load_state(path).last_update_check.checked_at is None

    def test_save_is_valid_json(self, tmp_path: Path):
        path = tmp_path / "state.json"
        save_state(ShimState(), path)
        data = json.loads(path.read_text())
        assert data["schema_version"] == 1

    def test_no_temp_files_left(self, tmp_path: Path):
        path = tmp_path / "state.json"
        save_state(ShimState(), path)
        save_state(ShimState(), path)
        assert [p.name for p in tmp_path.iterdir()] == ["state.json"]

    def test_save_touches_updated_at(self, tmp_path: Path):
        state = ShimState(updated_at="2000-01-01T00:00:00+00:00")
        save_state(state, tmp_path / "state.json")
        assert state.updated_at != "2000-01-01T00:00:00+00:00"

    def test_failed_write_cleans_up(self, tmp_path: Path, monkeypatch):
        def boom(self, *args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(Path, "replace", boom)
        with pytest.raises(OSError):
            save_state(ShimState(), tmp_path / "state.json")
        assert list(tmp_path.iterdir()) == []


class TestDefaultStatePath:
    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv(STATE_DIR_ENV_VAR, str(tmp_path / "s"))
        assert default_state_path() == tmp_path / "s" / "state.json"

    def test_xdg_cache_home(self, tmp_path, monkeypatch):
        monkeypatch.delenv(STATE_DIR_ENV_VAR)
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg"))
        assert default_state_path() == tmp_path / "xdg" / "toolshim" / "state.json"
