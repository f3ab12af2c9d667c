"""
Shared test fixtures and configuration.

Every test runs with an isolated config/state location and an empty
command cache. ``fake_path`` replaces PATH lookups so no real tools
are needed.
"""

import logging
from pathlib import Path

import pytest

from toolshim.core.services import command_cache


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, tmp_path_factory, monkeypatch) -> Path:
    """Keep tests away from the user's config, state and cwd."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.delenv("TOOLSHIM_CONFIG", raising=False)
    monkeypatch.delenv("TOOLSHIM_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TOOLSHIM_LOG_FILE", raising=False)
    monkeypatch.delenv("TOOLSHIM_QUIET_MISSING", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("TOOLSHIM_STATE_DIR", str(home / ".cache" / "toolshim"))
    monkeypatch.chdir(tmp_path)
    return home


@pytest.fixture(autouse=True)
def clean_command_cache():
    """Each test starts with nothing probed and nothing warned."""
    command_cache.clear_command_cache()
    yield
    command_cache.clear_command_cache()


@pytest.fixture(autouse=True)
def reset_toolshim_logger():
    """Undo setup_logging() from CLI tests so caplog keeps working."""
    yield
    logger = logging.getLogger("toolshim")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


class FakePath:
    """Stand-in for PATH: only the registered executables exist."""

    def __init__(self):
        self.executables: dict[str, str] = {}
        self.lookups: list[str] = []

    def add(self, *names: str) -> "FakePath":
        for name in names:
            self.executables[name] = f"/usr/bin/{name}"
        return self

    def which(self, name, *args, **kwargs):
        self.lookups.append(name)
        return self.executables.get(name)


@pytest.fixture
def fake_path(monkeypatch) -> FakePath:
    """Patch shutil.which; add executables with ``fake_path.add('git')``."""
    fake = FakePath()
    monkeypatch.setattr(command_cache.shutil, "which", fake.which)
    return fake


class FakeProcess:
    """What the recorder hands back instead of a real Popen."""

    def __init__(self, recorder: "SubprocessRecorder"):
        self._recorder = recorder

    def wait(self, timeout=None) -> int:
        if self._recorder.on_wait is not None:
            self._recorder.on_wait()
        return self._recorder.returncode


class SubprocessRecorder:
    """Records tool launches and exits with a preset status."""

    def __init__(self):
        self.calls: list[list[str]] = []
        self.kwargs: list[dict] = []
        self.returncode = 0
        self.raises: BaseException | None = None
        self.on_wait = None

    def __call__(self, argv, *args, **kwargs):
        self.calls.append(list(argv))
        self.kwargs.append(kwargs)
        if self.raises is not None:
            raise self.raises
        return FakeProcess(self)


@pytest.fixture
def fake_run(monkeypatch) -> SubprocessRecorder:
    """Patch subprocess.Popen for the shim adapter."""
    from toolshim.adapters.shell import shim

    recorder = SubprocessRecorder()
    monkeypatch.setattr(shim.subprocess, "Popen", recorder)
    return recorder


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a toolshim.yml into the test's cwd and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "toolshim.yml"
        path.write_text(content)
        return path

    return _write
