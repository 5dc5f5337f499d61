"""Tests for the wer command line."""

import pytest
from click.testing import CliRunner

from wer import __version__
from wer.cli.main import main


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("WER_DEBUG", raising=False)
    monkeypatch.delenv("WER_LOG_LEVEL", raising=False)
    return CliRunner()


@pytest.fixture
def in_repo(abc_repo, monkeypatch):
    monkeypatch.chdir(abc_repo.path)
    return abc_repo


def short(in_repo, name):
    return in_repo.commits[name].hexsha[:7]


class TestLastTouch:
    def test_file(self, runner, in_repo):
        result = runner.invoke(main, ["README.md", "--no-color"])
        assert result.exit_code == 0, result.output
        assert result.output == (
            f"{short(in_repo, 'C')} Alice - 03 May 2024: Expand readme\n\n"
        )

    def test_defaults_to_current_directory(self, runner, in_repo):
        result = runner.invoke(main, ["--no-color"])
        assert result.exit_code == 0
        assert result.output.startswith(short(in_repo, "C"))

    def test_directory(self, runner, in_repo):
        result = runner.invoke(main, ["src", "--no-color"])
        assert result.exit_code == 0
        assert result.output.startswith(f"{short(in_repo, 'B')} Bob - 02 May 2024")

    def test_found_by_name(self, runner, in_repo):
        result = runner.invoke(main, ["lib.x", "--no-color"])
        assert result.exit_code == 0
        assert "Add library" in result.output

    def test_date_only(self, runner, in_repo):
        result = runner.invoke(main, ["README.md", "-d", "--no-color"])
        assert result.output == "03 May 2024\n\n"

    def test_separate_commit_message(self, runner, in_repo):
        result = runner.invoke(main, ["README.md", "-m", "--no-color"])
        assert result.output.splitlines()[:2] == [
            f"{short(in_repo, 'C')} Alice - 03 May 2024",
            "└─ Expand readme",
        ]

    def test_last_contributors(self, runner, in_repo):
        result = runner.invoke(main, ["README.md", "--last", "5", "--no-color"])
        assert result.exit_code == 0
        assert result.output.splitlines()[:2] == [
            f"{short(in_repo, 'C')} Alice - 03 May 2024: Expand readme",
            "Searched for 5 but only 1 contributed",
        ]

    def test_no_color_from_environment(self, runner, in_repo):
        result = runner.invoke(main, ["README.md"], env={"NO_COLOR": "1"}, color=True)
        assert "\x1b[" not in result.output

    def test_colors_when_enabled(self, runner, in_repo):
        result = runner.invoke(main, ["README.md"], color=True)
        assert "\x1b[33m" in result.output


class TestBlame:
    def test_table(self, runner, in_repo):
        result = runner.invoke(main, ["-b", "README.md", "--no-color"])
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[1] == "│ Commit  │ Name            │ Date   │ Line │ Code"
        assert lines[3] == f"│ {short(in_repo, 'A')} │ Alice           │ 01 May │    1 │ # Project"
        assert lines[4].startswith(f"│ {short(in_repo, 'C')} │")
        assert lines[5].endswith("│    3 │ More words.")
        assert lines[6].startswith("└")

    def test_date_only_table(self, runner, in_repo):
        result = runner.invoke(main, ["-b", "-d", "README.md", "--no-color"])
        assert result.exit_code == 0
        assert result.output.splitlines()[3] == "│ 01 May │    1 │ # Project"

    def test_directory_rejected(self, runner, in_repo):
        result = runner.invoke(main, ["-b", "src", "--no-color"])
        assert result.exit_code == 1
        assert "Blame can only be used on files" in result.output
        assert "┌" not in result.output

    def test_untracked_file(self, runner, in_repo):
        (in_repo.path / "scratch.txt").write_text("tmp\n")
        result = runner.invoke(main, ["-b", "scratch.txt", "--no-color"])
        assert result.exit_code == 1
        assert "git add scratch.txt" in result.output

    def test_multiple_matches_rejected(self, runner, in_repo):
        in_repo.commit({"other/lib.x": "other\n"}, "Second lib", author="Carol")
        result = runner.invoke(main, ["-b", "lib.x", "--no-color"])
        assert result.exit_code == 1
        assert "Multiple files/directories named 'lib.x' found" in result.output
        assert "1. other/lib.x" in result.output
        assert "2. src/lib.x" in result.output


class TestValidation:
    def test_date_only_and_commit_message(self, runner, in_repo):
        result = runner.invoke(main, ["-d", "-m", "README.md"])
        assert result.exit_code == 1
        assert "Cannot use both --date-only and --commit-message" in result.output

    def test_last_with_blame(self, runner, in_repo):
        result = runner.invoke(main, ["-b", "-l", "2", "README.md"])
        assert result.exit_code == 1
        assert "--last flag only works in normal mode" in result.output

    def test_missing_name(self, runner, in_repo):
        result = runner.invoke(main, ["does-not-exist.txt"])
        assert result.exit_code == 1
        assert "No file or directory named 'does-not-exist.txt'" in result.output


class TestBatch:
    def test_each_match_reported(self, runner, in_repo):
        in_repo.commit({"other/lib.x": "other\n"}, "Second lib", author="Carol")
        result = runner.invoke(main, ["lib.x", "--no-color"])
        assert result.exit_code == 0
        assert "other/lib.x:\n" in result.output
        assert "src/lib.x:\n" in result.output

    def test_failure_isolated_per_path(self, runner, in_repo):
        in_repo.commit({"a/data/x.txt": "x\n"}, "Data", author="Carol")
        (in_repo.path / "b" / "data").mkdir(parents=True)

        result = runner.invoke(main, ["data", "--no-color"])

        assert result.exit_code == 1
        assert "a/data:\n" in result.output
        assert "Carol" in result.output
        assert "Error: b/data: No commits found for path" in result.output
        assert "b/data:\n" not in result.output


def test_outside_repository(runner, tmp_path, monkeypatch):
    plain = tmp_path / "plain"
    plain.mkdir()
    monkeypatch.chdir(plain)
    result = runner.invoke(main, [])
    assert result.exit_code == 1
    assert "not in a git repository" in result.output


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
