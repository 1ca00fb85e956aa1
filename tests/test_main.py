import os
import subprocess
import sys
from pathlib import Path

import pytest

from dirdesk import __version__
from dirdesk.cli import parse_args, validate_directory

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def test_main_requires_interactive_terminal():
    env = dict(os.environ, PYTHONPATH=str(PROJECT_ROOT / "src"))
    result = subprocess.run(
        [sys.executable, "-m", "dirdesk.cli"],
        cwd=PROJECT_ROOT,
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 1
    assert "requires an interactive terminal" in result.stdout
    assert result.stderr == ""


def test_parse_args_defaults_to_current_directory():
    assert parse_args([]).directory == "."
    assert parse_args(["/tmp"]).directory == "/tmp"


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_validate_directory_falls_back_to_cwd(tmp_path, capsys):
    missing = tmp_path / "missing"
    assert validate_directory(missing) == Path.cwd()
    assert "does not exist" in capsys.readouterr().err

    a_file = tmp_path / "file.txt"
    a_file.write_text("x", encoding="utf-8")
    assert validate_directory(a_file) == Path.cwd()
    assert validate_directory(tmp_path) == tmp_path.resolve()
