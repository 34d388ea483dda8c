"""
起動オプションのテスト
"""

from pathlib import Path

import pytest

from app.main import parse_args


def test_defaults():
    args = parse_args([])
    assert args.log_dir is None
    assert not args.reset_settings


def test_options():
    args = parse_args(["--log-dir", "/tmp/logs", "--reset-settings"])
    assert args.log_dir == Path("/tmp/logs")
    assert args.reset_settings


def test_qt_arguments_are_ignored():
    args = parse_args(["-style", "fusion"])
    assert args.log_dir is None


def test_version(capsys):
    with pytest.raises(SystemExit):
        parse_args(["--version"])
    assert "1.0.0" in capsys.readouterr().out
