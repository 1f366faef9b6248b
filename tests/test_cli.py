"""Tests for the git-tc command line"""

import json
from datetime import date, datetime, time
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from git_touchfish.cli import cli
from git_touchfish.common.errors import GitCommandError
from git_touchfish.common.timestamp import local_datetime


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point the app dir at a temp directory"""
    monkeypatch.setenv("GIT_TC_HOME", str(tmp_path / "app"))
    return tmp_path / "app"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def git():
    """Replace the git client built by Touchfish"""
    with patch("git_touchfish.core.GitClient") as client_cls:
        yield client_cls.return_value


def _write_window(home, start="00:00", end="23:59"):
    home.mkdir(parents=True, exist_ok=True)
    (home / "config.json").write_text(
        json.dumps({"start_time": start, "end_time": end}), encoding="utf-8"
    )


def test_no_arguments_prints_usage(runner, home):
    result = runner.invoke(cli, [])

    assert result.exit_code == 0
    assert "git tc set <start> <end>" in result.output


def test_set_then_show(runner, home):
    result = runner.invoke(cli, ["set", "09:00", "17:00"])
    assert result.exit_code == 0
    assert "09:00 - 17:00" in result.output

    result = runner.invoke(cli, ["show"])
    assert result.exit_code == 0
    assert "09:00 - 17:00" in result.output


def test_set_invalid_format(runner, home):
    _write_window(home, "09:00", "17:00")

    result = runner.invoke(cli, ["set", "9am", "17:00"])

    assert result.exit_code == 2
    assert "Invalid time format" in result.output
    stored = json.loads((home / "config.json").read_text(encoding="utf-8"))
    assert stored == {"start_time": "09:00", "end_time": "17:00"}


def test_set_reversed_window(runner, home):
    result = runner.invoke(cli, ["set", "17:00", "09:00"])

    assert result.exit_code == 2
    assert "must be earlier" in result.output


def test_set_requires_two_times(runner, home):
    result = runner.invoke(cli, ["set", "09:00"])

    assert result.exit_code != 0


def test_show_unconfigured(runner, home):
    result = runner.invoke(cli, ["show"])

    assert result.exit_code == 3
    assert "No time window configured" in result.output


def test_unknown_args_forwarded_to_commit(runner, home, git):
    _write_window(home)
    git.read_head_time.return_value = datetime(2000, 1, 1).astimezone()

    result = runner.invoke(cli, ["-a", "-m", "fix: typo"])

    assert result.exit_code == 0, result.output
    args, timestamp = git.commit.call_args.args
    assert list(args) == ["-a", "-m", "fix: typo"]
    assert timestamp.date() == date.today()


def test_long_options_forwarded_to_commit(runner, home, git):
    _write_window(home)
    git.read_head_time.return_value = datetime(2000, 1, 1).astimezone()

    result = runner.invoke(cli, ["--allow-empty", "--message", "wip"])

    assert result.exit_code == 0, result.output
    assert list(git.commit.call_args.args[0]) == ["--allow-empty", "--message", "wip"]


def test_amend_forwards_extra_args(runner, home, git):
    _write_window(home)
    git.read_parent_time.return_value = datetime(2000, 1, 1).astimezone()

    result = runner.invoke(cli, ["amend", "-a"])

    assert result.exit_code == 0, result.output
    timestamp, args = git.amend.call_args.args
    assert list(args) == ["-a"]
    assert timestamp.date() == date.today()


def test_commit_unconfigured(runner, home, git):
    result = runner.invoke(cli, ["-m", "msg"])

    assert result.exit_code == 3
    git.commit.assert_not_called()


def test_window_exhausted_exit_code(runner, home, git):
    _write_window(home, "00:00", "00:01")
    git.read_head_time.return_value = local_datetime(date.today(), time(23, 0))

    result = runner.invoke(cli, ["-m", "late"])

    assert result.exit_code == 4
    assert "--roll-over" in result.output
    git.commit.assert_not_called()


def test_roll_over_flag(runner, home, git):
    _write_window(home, "00:00", "00:01")
    git.read_head_time.return_value = local_datetime(date.today(), time(23, 0))

    result = runner.invoke(cli, ["--roll-over", "-m", "late"])

    assert result.exit_code == 0, result.output
    timestamp = git.commit.call_args.args[1]
    assert timestamp.date() > date.today()


def test_git_failure_propagates_exit_code(runner, home, git):
    _write_window(home)
    git.read_head_time.return_value = datetime(2000, 1, 1).astimezone()
    git.commit.side_effect = GitCommandError(
        "git commit failed with exit code 1: nothing to commit", returncode=1
    )

    result = runner.invoke(cli, ["-m", "msg"])

    assert result.exit_code == 1
    assert "nothing to commit" in result.output


def test_version(runner, home):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "git-tc" in result.output


def test_app_dir_created_on_invocation(runner, home):
    runner.invoke(cli, ["show"])

    assert home.is_dir()


def test_main_entry_point(home):
    from git_touchfish import cli as cli_module

    with patch.object(cli_module, "cli", MagicMock()) as mock_cli:
        cli_module.main()

    mock_cli.assert_called_once_with()


@pytest.mark.parametrize(
    "argv",
    [
        ["-m", "--version"],
        ["-m", "--help"],
        ["-m", "--roll-over"],
        ["--allow-empty", "-m", "--version"],
    ],
)
def test_group_option_names_after_git_args_are_forwarded(runner, home, git, argv):
    _write_window(home)
    git.read_head_time.return_value = datetime(2000, 1, 1).astimezone()

    result = runner.invoke(cli, argv)

    assert result.exit_code == 0, result.output
    assert list(git.commit.call_args.args[0]) == argv


def test_amend_forwards_help_to_git(runner, home, git):
    _write_window(home)
    git.read_parent_time.return_value = datetime(2000, 1, 1).astimezone()

    result = runner.invoke(cli, ["amend", "-m", "--help"])

    assert result.exit_code == 0, result.output
    assert list(git.amend.call_args.args[1]) == ["-m", "--help"]


def test_group_options_still_apply_before_git_args(runner, home, git):
    _write_window(home, "00:00", "00:01")
    git.read_head_time.return_value = local_datetime(date.today(), time(23, 0))

    result = runner.invoke(cli, ["--roll-over", "-m", "--version"])

    assert result.exit_code == 0, result.output
    args, timestamp = git.commit.call_args.args
    assert list(args) == ["-m", "--version"]
    assert timestamp.date() > date.today()
