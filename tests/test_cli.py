"""
Tests for CLI commands — run, check, tree, and global options.
"""

import json
import textwrap
from pathlib import Path

from click.testing import CliRunner

from zapp.main import EXIT_FAILURE, EXIT_FATAL, cli


def _make_config(config_dir: Path, tasks: str) -> Path:
    (config_dir / "config.yaml").write_text(textwrap.dedent(tasks))
    return config_dir


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "provision your environment" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_config_dir_from_env(self, config_dir: Path, monkeypatch):
        _make_config(config_dir, """\
            tasks:
              - shell: "true"
        """)
        monkeypatch.setenv("ZAPP_CONFIG_DIR", str(config_dir))
        result = CliRunner().invoke(cli, ["run"])
        assert result.exit_code == 0
        assert "main: SUCCESS" in result.output


class TestRunCommand:
    def test_success(self, config_dir: Path, home: Path):
        (config_dir / "files" / "a.txt").write_text("a")
        _make_config(config_dir, """\
            tasks:
              - setup:
                  - copy: {src: a.txt, dst: ~/a.txt}
                  - shell: "true"
        """)
        result = CliRunner().invoke(cli, ["-C", str(config_dir), "run"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "    copy: SUCCESS",
            "    shell: SUCCESS",
            "  setup: SUCCESS",
            "main: SUCCESS",
        ]

    def test_failure_exit_code(self, config_dir: Path):
        _make_config(config_dir, """\
            tasks:
              - shell: exit 1
        """)
        result = CliRunner().invoke(cli, ["-C", str(config_dir), "run"])
        assert result.exit_code == EXIT_FAILURE
        assert "  shell: FAILURE" in result.output
        assert "main: FAILURE" in result.output

    def test_skipped_only_is_success(self, config_dir: Path):
        _make_config(config_dir, """\
            tasks:
              - 42
              - name: root
                su: true
                shell: "false"
        """)
        result = CliRunner().invoke(cli, ["-C", str(config_dir), "run"])
        assert result.exit_code == 0
        assert "  unknown: SKIPPED" in result.output
        assert "  root: SKIPPED" in result.output

    def test_missing_config_is_fatal(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["-C", str(tmp_path / "nowhere"), "run"])
        assert result.exit_code == EXIT_FATAL
        assert "not found" in result.output
        assert "main:" not in result.output

    def test_undecodable_config_is_fatal(self, config_dir: Path):
        (config_dir / "config.yaml").write_bytes(b"tasks:\n  - shell: \xff\n")
        result = CliRunner().invoke(cli, ["-C", str(config_dir), "run"])
        assert result.exit_code == EXIT_FATAL
        assert "not valid UTF-8" in result.output

    def test_json_output(self, config_dir: Path):
        _make_config(config_dir, """\
            tasks:
              - name: loud
                shell: echo hello
              - shell: exit 2
        """)
        result = CliRunner().invoke(cli, ["-C", str(config_dir), "run", "--json"])
        assert result.exit_code == EXIT_FAILURE
        data = json.loads(result.output)
        report = data["report"]
        assert report["status"] == "FAILURE"
        assert report["succeeded"] == 1
        assert report["failed"] == 1
        assert [r["name"] for r in report["results"]] == ["loud", "shell", "main"]

    def test_json_fatal(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["-C", str(tmp_path), "run", "--json"])
        assert result.exit_code == EXIT_FATAL
        assert "error" in json.loads(result.output)

    def test_mock_mode(self, config_dir: Path, home: Path):
        _make_config(config_dir, """\
            tasks:
              - shell: touch "$HOME/mocked"
        """)
        result = CliRunner().invoke(cli, ["-C", str(config_dir), "run", "--mock"])
        assert result.exit_code == 0
        assert not (home / "mocked").exists()

    def test_verbose_shows_errors(self, config_dir: Path):
        (config_dir / "templates" / "t").write_text("{{ nope }}")
        _make_config(config_dir, """\
            tasks:
              - template: {src: t, dst: /tmp/zapp-never-written}
        """)
        result = CliRunner().invoke(cli, ["-C", str(config_dir), "-v", "run"])
        assert result.exit_code == EXIT_FAILURE
        assert "nope" in result.output


class TestCheckCommand:
    def test_valid(self, config_dir: Path):
        (config_dir / "files" / "a.txt").write_text("a")
        _make_config(config_dir, """\
            tasks:
              - copy: {src: a.txt, dst: ~/a.txt}
        """)
        result = CliRunner().invoke(cli, ["-C", str(config_dir), "check"])
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output
        assert "Tasks: 1" in result.output

    def test_warnings(self, config_dir: Path):
        _make_config(config_dir, """\
            tasks:
              - copy: {src: missing.txt, dst: ~/a.txt}
              - name: hosts
                su: true
                copy: {src: hosts, dst: /etc/hosts}
              - template: {src: nope, dst: ~/nope}
        """)
        result = CliRunner().invoke(cli, ["-C", str(config_dir), "check"])
        assert result.exit_code == 0
        assert "source does not exist" in result.output
        assert "elevated privileges" in result.output
        assert "template not found: nope" in result.output

    def test_invalid(self, config_dir: Path):
        _make_config(config_dir, """\
            tasks:
              - copy: {src: a, dst: b, mode: wrong}
        """)
        result = CliRunner().invoke(cli, ["-C", str(config_dir), "check"])
        assert result.exit_code == EXIT_FAILURE
        assert "Configuration errors" in result.output

    def test_missing_shell_is_error(self, config_dir: Path, monkeypatch):
        monkeypatch.setenv("ZAPP_SHELL", "/definitely/not/a/shell")
        _make_config(config_dir, """\
            tasks:
              - shell: "true"
        """)
        result = CliRunner().invoke(cli, ["-C", str(config_dir), "check"])
        assert result.exit_code == EXIT_FAILURE
        assert "Cannot run shell tasks" in result.output
        assert "/definitely/not/a/shell" in result.output

    def test_json(self, config_dir: Path):
        _make_config(config_dir, "tasks: []\n")
        result = CliRunner().invoke(cli, ["-C", str(config_dir), "check", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["task_count"] == 0
        assert any("No tasks" in w for w in data["warnings"])


class TestTreeCommand:
    def test_tree(self, config_dir: Path):
        (config_dir / "tasks" / "git.yaml").write_text("- symlink: {src: gitconfig, dst: ~/.gitconfig}\n")
        _make_config(config_dir, """\
            tasks:
              - git
              - name: pkgs
                su: true
                shell: apt install -y ripgrep
        """)
        result = CliRunner().invoke(cli, ["-C", str(config_dir), "tree"])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0].startswith("main  — group (2 tasks)")
        assert lines[1].startswith("  git  — group (1 tasks)")
        assert lines[2] == "    symlink  — symlink ~/.gitconfig → gitconfig"
        assert lines[3] == "  pkgs [su]  — shell: apt install -y ripgrep"

    def test_tree_bad_config(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["-C", str(tmp_path), "tree"])
        assert result.exit_code == EXIT_FATAL
