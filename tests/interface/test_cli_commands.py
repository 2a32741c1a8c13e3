"""Tests for CLI commands: help, review, queue, plan, config."""

import json
import logging

import pytest
from typer.testing import CliRunner

from lexitrack.domain.errors import InvalidGradeError
from lexitrack.interface.cli import app, humanize_error

runner = CliRunner()

NOW = "2026-03-01T12:00:00Z"


@pytest.fixture
def items_file(tmp_path):
    path = tmp_path / "items.yaml"
    path.write_text(
        """
- id: future
  repetitions: 3
  interval_days: 15
  next_review: 2026-03-10T12:00:00Z
  last_result: good
- id: late
  repetitions: 2
  interval_days: 6
  next_review: 2026-02-20T12:00:00Z
  last_result: hard
  dictionary_score: 40
- id: lapsed
  repetitions: 0
  next_review: 2026-02-28T12:00:00Z
  last_result: forgot
- id: fresh-hard
  dictionary_score: 80
- id: fresh-easy
  dictionary_score: 15
"""
    )
    return path


# --- Help ---


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "review" in result.stdout
    assert "queue" in result.stdout
    assert "plan" in result.stdout


# --- Review ---


def test_review_new_item(tmp_path, mock_home):
    path = tmp_path / "progress.json"
    path.write_text("{}")

    result = runner.invoke(app, ["review", str(path), "--grade", "good", "--now", NOW])

    assert result.exit_code == 0
    record = json.loads(result.stdout)
    assert record["repetitions"] == 1
    assert record["interval_days"] == 1
    assert record["next_review"] == "2026-03-02T12:00:00+00:00"
    assert record["word_state"] == "learning"
    assert record["correct_count"] == 1
    assert record["personal_score"] == 45


def test_review_existing_record(tmp_path, mock_home):
    path = tmp_path / "progress.yaml"
    path.write_text(
        """
ease_factor: 2.5
interval_days: 100
repetitions: 9
next_review: 2026-03-01T12:00:00Z
last_result: good
correct_count: 9
wrong_count: 2
dictionary_score: 60
history: [true, true, true]
"""
    )

    result = runner.invoke(app, ["review", str(path), "-g", "good", "--now", NOW])

    assert result.exit_code == 0
    record = json.loads(result.stdout)
    assert record["interval_days"] == 250
    assert record["personal_score"] == 47
    assert record["trend_direction"] == "stable"


def test_review_score_option_overrides_file(tmp_path, mock_home):
    path = tmp_path / "progress.yaml"
    path.write_text("dictionary_score: 90\n")

    result = runner.invoke(
        app, ["review", str(path), "-g", "good", "--score", "50", "--now", NOW]
    )
    assert json.loads(result.stdout)["personal_score"] == 45


def test_review_unknown_grade_lenient(tmp_path, mock_home):
    path = tmp_path / "progress.json"
    path.write_text("{}")

    result = runner.invoke(app, ["review", str(path), "-g", "perfect", "--now", NOW])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["last_result"] == "forgot"


def test_review_unknown_grade_strict(tmp_path, mock_home):
    path = tmp_path / "progress.json"
    path.write_text("{}")

    result = runner.invoke(
        app, ["review", str(path), "-g", "perfect", "--strict", "--now", NOW]
    )
    assert result.exit_code == 1


def test_review_strict_from_env(tmp_path, mock_home, monkeypatch):
    monkeypatch.setenv("LEXITRACK_STRICT", "1")
    path = tmp_path / "progress.json"
    path.write_text('{"ease_factor": 0.9, "repetitions": 1}')

    result = runner.invoke(app, ["review", str(path), "-g", "good", "--now", NOW])
    assert result.exit_code == 1


def test_review_missing_file(tmp_path, mock_home):
    result = runner.invoke(app, ["review", str(tmp_path / "nope.yaml"), "-g", "good"])
    assert result.exit_code == 1


def test_review_bad_now(tmp_path, mock_home):
    path = tmp_path / "progress.json"
    path.write_text("{}")
    result = runner.invoke(app, ["review", str(path), "-g", "good", "--now", "yesterday"])
    assert result.exit_code == 2


# --- Queue ---


def test_queue_json(items_file, mock_home):
    result = runner.invoke(app, ["queue", str(items_file), "--now", NOW, "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == ["lapsed", "fresh-hard", "fresh-easy", "late"]


def test_queue_limit(items_file, mock_home):
    result = runner.invoke(
        app, ["queue", str(items_file), "--now", NOW, "--json", "--limit", "2"]
    )
    assert json.loads(result.stdout) == ["lapsed", "fresh-hard"]


def test_queue_text(items_file, mock_home):
    result = runner.invoke(app, ["queue", str(items_file), "--now", NOW])
    assert result.exit_code == 0
    assert "Items: 5  Due: 4" in result.stdout
    assert "lapsed  (forgot)" in result.stdout


def test_queue_negative_limit_is_reported(items_file, mock_home):
    result = runner.invoke(app, ["queue", str(items_file), "--limit", "-1"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Invalid configuration: queue_limit" in result.output


def test_queue_rejects_non_list(tmp_path, mock_home):
    path = tmp_path / "items.yaml"
    path.write_text("id: x\n")
    result = runner.invoke(app, ["queue", str(path)])
    assert result.exit_code == 1


# --- Plan ---


def test_plan(items_file, mock_home):
    result = runner.invoke(app, ["plan", str(items_file), "--now", NOW, "--size", "3"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["items"] == ["late", "lapsed", "fresh-easy"]
    assert data["due"] == 2
    assert data["new"] == 1
    assert data["not_yet_due"] == 1


def test_plan_negative_size_is_reported(items_file, mock_home):
    result = runner.invoke(app, ["plan", str(items_file), "--size", "-1"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Invalid configuration: daily_plan_size" in result.output


def test_bad_env_value_is_reported(items_file, mock_home, monkeypatch):
    monkeypatch.setenv("LEXITRACK_DAILY_PLAN_SIZE", "abc")
    result = runner.invoke(app, ["plan", str(items_file)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "daily_plan_size" in result.output


def test_config_show_bad_env_value(mock_home, monkeypatch):
    monkeypatch.setenv("LEXITRACK_QUEUE_LIMIT", "-3")
    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 1
    assert "queue_limit" in result.output


# --- Config ---


def test_config_show(mock_home, monkeypatch):
    monkeypatch.setenv("LEXITRACK_DAILY_PLAN_SIZE", "11")
    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["daily_plan_size"] == 11
    assert data["strict"] is False


def test_config_path(mock_home):
    result = runner.invoke(app, ["config", "path"])
    assert result.exit_code == 0
    assert ".config/lexitrack/config.toml" in result.stdout


# --- Verbosity ---


@pytest.mark.parametrize(
    "flags, level",
    [([], logging.WARNING), (["-v"], logging.INFO), (["-vv"], logging.DEBUG)],
)
def test_verbose_flag_sets_log_level(mock_home, flags, level):
    result = runner.invoke(app, [*flags, "config", "path"])

    assert result.exit_code == 0
    assert logging.getLogger("lexitrack").level == level


# --- humanize_error ---


def test_humanize_error():
    assert humanize_error(InvalidGradeError("Unknown review grade: 'x'")).startswith(
        "Invalid input:"
    )
    missing = FileNotFoundError(2, "No such file", "a.yaml")
    assert humanize_error(missing) == "File not found: a.yaml"


def test_humanize_config_error():
    from lexitrack.application.config import AppConfig

    with pytest.raises(ValueError) as excinfo:
        AppConfig(queue_limit=-1)
    message = humanize_error(excinfo.value)
    assert message.startswith("Invalid configuration: queue_limit:")
