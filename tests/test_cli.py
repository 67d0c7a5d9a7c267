"""CLI tests for devenv."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from devenv.cli import main
from devenv.version import __version__

PROJECT_ROOT = str(Path(__file__).resolve().parent.parent)


class TestCLI:
    @pytest.mark.unit
    def test_help_exits_zero(self) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "devenv.cli", "--help"],
            capture_output=True,
            text=True,
            cwd=PROJECT_ROOT,
        )
        assert result.returncode == 0
        assert "devenv" in result.stdout.lower()

    @pytest.mark.unit
    @pytest.mark.parametrize("subcommand", ["locate", "show"])
    def test_subcommand_help(self, subcommand: str) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "devenv.cli", subcommand, "--help"],
            capture_output=True,
            text=True,
            cwd=PROJECT_ROOT,
        )
        assert result.returncode == 0

    @pytest.mark.unit
    def test_version_output(self) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "devenv.cli", "--version"],
            capture_output=True,
            text=True,
            cwd=PROJECT_ROOT,
        )
        assert result.returncode == 0
        assert __version__ in result.stdout

    @pytest.mark.unit
    def test_locate_prints_path(
        self, project_tree: dict[str, Path], capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["locate", "-C", str(project_tree["nested"])]) == 0
        assert capsys.readouterr().out.strip() == str(project_tree["config"])

    @pytest.mark.unit
    def test_locate_missing_config(self, tmp_path: Path) -> None:
        assert main(["locate", "-C", str(tmp_path)]) == 1

    @pytest.mark.unit
    def test_show_json(
        self, project_tree: dict[str, Path], capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["show", "-C", str(project_tree["root"]), "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["project_prefix"] == "shop"
        assert data["urls"]["api"] == "http://localhost:3000"
        assert data["config_path"] == str(project_tree["config"])

    @pytest.mark.unit
    def test_show_json_with_uncopyable_extra(
        self, tmp_path: Path, write_config, capsys: pytest.CaptureFixture[str]  # type: ignore[no-untyped-def]
    ) -> None:
        write_config(
            tmp_path,
            "import threading\n"
            "config = {'project_prefix': 'shop', 'services': {'db': {'port': 5432}}, "
            "'lock': threading.Lock()}\n",
        )
        assert main(["show", "-C", str(tmp_path), "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert "lock" in data["extra"]

    @pytest.mark.unit
    def test_show_text(
        self, project_tree: dict[str, Path], capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["show", "-C", str(project_tree["root"])]) == 0
        out = capsys.readouterr().out
        assert "Project: shop" in out
        assert "http://localhost:5432" in out

    @pytest.mark.unit
    def test_show_invalid_config(self, tmp_path: Path, write_config) -> None:  # type: ignore[no-untyped-def]
        write_config(tmp_path, "config = {'services': {'db': {}}}\n")
        assert main(["show", "-C", str(tmp_path)]) == 1
