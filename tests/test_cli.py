"""
Tests for CLI commands — run, list, which, tools, init, config, updates.
"""

import json
import os
import shlex
import subprocess
import sys
import time
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from toolshim.main import cli

PACKAGE_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "short aliases" in result.output
        for command in ("run", "list", "which", "tools", "init", "config", "updates"):
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestRunCommand:
    def test_runs_tool_with_args(self, runner, fake_path, fake_run):
        fake_path.add("git")
        result = runner.invoke(cli, ["run", "gcm", "fix: the thing"])
        assert result.exit_code == 0
        assert fake_run.calls == [["/usr/bin/git", "commit", "-m", "fix: the thing"]]

    def test_tool_flags_not_parsed(self, runner, fake_path, fake_run):
        fake_path.add("git")
        result = runner.invoke(cli, ["run", "gl", "--help", "-n", "5", "--dry-run"])
        assert result.exit_code == 0
        assert fake_run.calls == [["/usr/bin/git", "log", "--help", "-n", "5", "--dry-run"]]

    def test_exit_code_passthrough(self, runner, fake_path, fake_run):
        fake_path.add("git")
        fake_run.returncode = 42
        result = runner.invoke(cli, ["run", "gs"])
        assert result.exit_code == 42

    def test_missing_tool(self, runner, fake_path, fake_run):
        result = runner.invoke(cli, ["run", "kgp"])
        assert result.exit_code == 127
        assert "kubectl not found" in result.output
        assert "Install:" in result.output
        assert fake_run.calls == []

    def test_unknown_alias(self, runner, fake_path, fake_run):
        result = runner.invoke(cli, ["run", "zzz"])
        assert result.exit_code == 1
        assert "Unknown alias 'zzz'" in result.output

    def test_dry_run(self, runner, fake_path, fake_run):
        fake_path.add("kubectl")
        result = runner.invoke(cli, ["run", "--dry-run", "kgp", "-n", "kube system"])
        assert result.exit_code == 0
        assert "/usr/bin/kubectl get pods -n 'kube system'" in result.output
        assert fake_run.calls == []

    def test_dry_run_json(self, runner, fake_path, fake_run):
        fake_path.add("git")
        result = runner.invoke(cli, ["run", "--dry-run", "--json", "gs"])
        data = json.loads(result.output)
        assert data["argv"] == ["/usr/bin/git", "status"]
        assert data["missing"] is False

    def test_tool_killed_by_signal(self, runner, fake_path, fake_run):
        fake_path.add("git")
        fake_run.returncode = -15
        result = runner.invoke(cli, ["run", "gs"])
        assert result.exit_code == 143

    def test_quiet_missing_env(self, runner, fake_path, fake_run, monkeypatch):
        monkeypatch.setenv("TOOLSHIM_QUIET_MISSING", "1")
        result = runner.invoke(cli, ["run", "kgp"])
        assert result.exit_code == 127
        assert "not found" not in result.output

    def test_update_check_runs_detached(
        self, runner, tmp_path, write_config, fake_path, fake_run, monkeypatch
    ):
        from toolshim.core.services import update_check

        spawned = []
        monkeypatch.setattr(
            update_check, "spawn_detached_check", lambda config_path=None: spawned.append(config_path)
        )
        write_config(f"update_check:\n  enabled: true\n  repo: {tmp_path}\n")
        fake_path.add("git")

        result = runner.invoke(cli, ["run", "gs"])

        assert result.exit_code == 0
        assert spawned == [None]

    def test_bad_config(self, runner, tmp_path, fake_path, fake_run):
        result = runner.invoke(cli, ["--config", str(tmp_path / "nope.yml"), "run", "gs"])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestListCommand:
    def test_list(self, runner, fake_path):
        fake_path.add("git")
        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "gs" in result.output
        assert "git status" in result.output
        assert "kubernetes" in result.output

    def test_list_json_filtered(self, runner, fake_path):
        result = runner.invoke(cli, ["list", "--tool", "helm", "--json"])
        data = json.loads(result.output)
        assert {a["name"] for a in data["aliases"]} == {"h", "hls", "hup"}
        assert data["total"] == 3

    def test_list_available_only(self, runner, fake_path):
        fake_path.add("terraform")
        result = runner.invoke(cli, ["list", "--available", "--json"])
        data = json.loads(result.output)
        assert data["total"] > 0
        assert {a["tool"] for a in data["aliases"]} == {"terraform"}

    def test_list_nothing_matches(self, runner, fake_path):
        result = runner.invoke(cli, ["list", "--available"])
        assert result.exit_code == 0
        assert "No aliases match" in result.output


class TestWhichCommand:
    def test_installed(self, runner, fake_path):
        fake_path.add("git")
        result = runner.invoke(cli, ["which", "gs"])
        assert result.exit_code == 0
        assert "git status" in result.output
        assert "/usr/bin/git" in result.output

    def test_not_installed(self, runner, fake_path):
        result = runner.invoke(cli, ["which", "kgp"])
        assert "not installed" in result.output

    def test_json(self, runner, fake_path):
        fake_path.add("podman")
        result = runner.invoke(cli, ["which", "dps", "--json"])
        data = json.loads(result.output)
        assert data["path"] == "/usr/bin/podman"
        assert data["fragment"] == "docker"

    def test_unknown(self, runner, fake_path):
        result = runner.invoke(cli, ["which", "zzz"])
        assert result.exit_code == 1


class TestToolsCommand:
    def test_summary(self, runner, fake_path):
        fake_path.add("git")
        result = runner.invoke(cli, ["tools"])
        assert result.exit_code == 0
        assert "Tools: 1/" in result.output
        assert "brew install helm" in result.output

    def test_json(self, runner, fake_path):
        fake_path.add("git", "docker")
        data = json.loads(runner.invoke(cli, ["tools", "--json"]).output)
        assert data["available"] == 2
        git = next(t for t in data["tools"] if t["name"] == "git")
        assert git["path"] == "/usr/bin/git"

    def test_missing_only(self, runner, fake_path):
        fake_path.add("git")
        result = runner.invoke(cli, ["tools", "--missing"])
        assert "✓ git" not in result.output
        assert "✗ helm" in result.output

    def test_refresh_reprobes(self, runner, fake_path):
        runner.invoke(cli, ["tools"])
        fake_path.add("git")
        data = json.loads(runner.invoke(cli, ["tools", "--refresh", "--json"]).output)
        assert data["available"] == 1


class TestInitCommand:
    def test_bash(self, runner):
        result = runner.invoke(cli, ["init", "bash"])
        assert result.exit_code == 0
        assert """gs() { 'toolshim' run gs "$@"; }""" in result.output

    def test_powershell_custom_prog(self, runner):
        result = runner.invoke(cli, ["init", "powershell", "--prog", "ts"])
        assert "function global:kgp { & 'ts' run kgp @args }" in result.output

    def test_available_only(self, runner, fake_path):
        fake_path.add("ollama")
        result = runner.invoke(cli, ["init", "fish", "--available-only"])
        assert "function olls" in result.output
        assert "function gs " not in result.output

    def test_explicit_config_pinned(self, runner, tmp_path, fake_path, fake_run, monkeypatch):
        cfg_dir = tmp_path / "profile"
        cfg_dir.mkdir()
        cfg = cfg_dir / "my tools.yml"
        cfg.write_text(
            "extra_tools:\n  - name: jq\n"
            "aliases:\n  - {name: jqc, tool: jq, args: ['-C']}\n"
        )

        result = runner.invoke(cli, ["--config", str(cfg), "init", "bash"])
        assert result.exit_code == 0
        line = next(ln for ln in result.output.splitlines() if ln.startswith("jqc()"))
        assert f"'toolshim' '--config' '{cfg.resolve()}' run jqc" in line

        # Call the generated function from somewhere else entirely
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)
        body = line[line.index("{") + 1:line.rindex(";")]
        argv = shlex.split(body)
        assert argv[0] == "toolshim" and argv[-1] == "$@"
        fake_path.add("jq")

        called = runner.invoke(cli, [*argv[1:-1], ".foo"])

        assert called.exit_code == 0
        assert fake_run.calls == [["/usr/bin/jq", "-C", ".foo"]]

    def test_env_config_pinned(self, runner, tmp_path, monkeypatch):
        cfg = tmp_path / "env.yml"
        cfg.write_text("enabled: [git]\n")
        monkeypatch.setenv("TOOLSHIM_CONFIG", str(cfg))
        result = runner.invoke(cli, ["init", "fish"])
        assert f"'toolshim' '--config' '{cfg.resolve()}' run gs $argv" in result.output

    def test_discovered_config_not_pinned(self, runner, write_config):
        write_config("enabled: [git]\n")
        result = runner.invoke(cli, ["init", "powershell"])
        assert "--config" not in result.output
        assert "function global:gs { & 'toolshim' run gs @args }" in result.output

    def test_relative_config_made_absolute(self, runner, tmp_path):
        (tmp_path / "rel.yml").write_text("enabled: [git]\n")
        result = runner.invoke(cli, ["--config", "rel.yml", "init", "zsh"])
        assert f"'--config' '{(tmp_path / 'rel.yml').resolve()}'" in result.output

    def test_unsupported_shell(self, runner):
        result = runner.invoke(cli, ["init", "tcsh"])
        assert result.exit_code != 0

    def test_respects_enabled(self, runner, write_config):
        write_config("enabled: [rust]\n")
        result = runner.invoke(cli, ["init", "zsh"])
        assert "cb()" in result.output
        assert "gs()" not in result.output


class TestConfigCommands:
    def test_check_defaults(self, runner):
        result = runner.invoke(cli, ["config", "check"])
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output

    def test_check_errors(self, runner, write_config):
        write_config("aliases:\n  - {name: jqc, tool: jq}\n")
        result = runner.invoke(cli, ["config", "check"])
        assert result.exit_code == 1
        assert "extra_tools" in result.output

    def test_check_json(self, runner, write_config):
        write_config("enabled: [git]\n")
        data = json.loads(runner.invoke(cli, ["config", "check", "--json"]).output)
        assert data["valid"] is True

    def test_path(self, runner, write_config):
        path = write_config("version: 1\n")
        result = runner.invoke(cli, ["config", "path"])
        assert result.exit_code == 0
        assert str(path.resolve()) in result.output

    def test_path_none(self, runner):
        result = runner.invoke(cli, ["config", "path"])
        assert result.exit_code == 1
        assert "No toolshim.yml found" in result.output

    def test_show(self, runner, write_config):
        write_config("quiet_missing: true\n")
        result = runner.invoke(cli, ["config", "show"])
        assert result.exit_code == 0
        assert "quiet_missing: true" in result.output
        assert "interval_hours" in result.output


class TestUpdatesCommands:
    def test_status_nothing_recorded(self, runner):
        result = runner.invoke(cli, ["updates", "status"])
        assert result.exit_code == 0
        assert "No update check recorded yet" in result.output

    def test_check_without_repo(self, runner):
        result = runner.invoke(cli, ["updates", "check"])
        assert result.exit_code == 1
        assert "No repo given" in result.output

    def test_check_missing_repo_records(self, runner, tmp_path, fake_path):
        fake_path.add("git")
        result = runner.invoke(
            cli, ["updates", "check", "--repo", str(tmp_path / "gone"), "--record"]
        )
        assert result.exit_code == 1
        assert "Not a directory" in result.output

        status = runner.invoke(cli, ["updates", "status", "--json"])
        data = json.loads(status.output)
        assert "Not a directory" in data["error"]


@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell script as git")
class TestBackgroundUpdateCheck:
    """``run`` exits at once; the update check must still land in state."""

    def test_recorded_after_run_exits(self, tmp_path):
        from toolshim.core.persistence.state_file import default_state_path, load_state

        bin_dir = tmp_path / "bin"
        bin_dir.mkdir()
        git = bin_dir / "git"
        git.write_text(
            "#!/bin/sh\n"
            'case "$1" in\n'
            "  fetch) exit 0 ;;\n"
            "  rev-list) echo 2 ;;\n"
            "esac\n"
        )
        git.chmod(0o755)
        repo = tmp_path / "dotfiles"
        repo.mkdir()

        cfg = tmp_path / "toolshim.yml"
        cfg.write_text(yaml.safe_dump({
            "extra_tools": [{"name": "py", "executable": sys.executable}],
            "aliases": [{"name": "pyok", "tool": "py", "args": ["-c", "pass"]}],
            "update_check": {"enabled": True, "repo": str(repo), "interval_hours": 1},
        }))

        env = dict(os.environ)
        env["PATH"] = os.pathsep.join([str(bin_dir), env.get("PATH", "")])
        env["PYTHONPATH"] = os.pathsep.join(
            p for p in [str(PACKAGE_ROOT), env.get("PYTHONPATH")] if p
        )

        proc = subprocess.run(
            [sys.executable, "-m", "toolshim.main", "--config", str(cfg), "run", "pyok"],
            env=env,
            capture_output=True,
            text=True,
            timeout=30,
        )
        assert proc.returncode == 0, proc.stderr

        state_path = default_state_path()
        deadline = time.monotonic() + 20
        record = load_state(state_path).last_update_check
        while record.checked_at is None and time.monotonic() < deadline:
            time.sleep(0.1)
            record = load_state(state_path).last_update_check

        assert record.checked_at is not None, "detached update check never recorded"
        assert record.error is None
        assert record.behind == 2
        assert load_state(state_path).updates_available
