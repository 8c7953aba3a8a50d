"""Shared test fixtures and helpers for chanstat tests."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from chanstat.channel import Channel


# --- Fixtures ---


@pytest.fixture
def channel():
    """Provide an empty Channel."""
    return Channel()


@pytest.fixture
def lexicon_file(tmp_path):
    """A small NRC-format lexicon with three scored words and some noise."""
    path = tmp_path / "lexicon.txt"
    path.write_text(
        "\n".join([
            "hug\tjoy\t1",
            "hug\tpositive\t1",
            "hug\tsadness\t0",
            "haunt\tfear\t1",
            "haunt\tnegative\t1",
            "intruder\tanger\t1",
            "intruder\tfear\t1",
            "intruder\tnegative\t1",
            "Not a valid line",
            "abacus\ttrust\t0",
            "",
        ]),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def log_dir(tmp_path):
    """A directory of two ZNC log files (written out of date order) plus noise."""
    logs = tmp_path / "logs"
    logs.mkdir()
    write_log(logs / "#chan_20010102.log", [
        "[09:00:00] *** Joins: Dinnerbone (dinnerbone@dinnerbone.com)",
        "[09:00:05] <Dinnerbone> I'm back, hugs everyone",
        "[09:01:00] *** Dinnerbone sets mode: +o Dinnerbone",
        "[09:02:00] *** Dinnerbone changes topic to 'A channel about nothing!'",
        "[09:03:00] *** Troll was kicked by Dinnerbone (Go away)",
    ])
    write_log(logs / "#chan_20010101.log", [
        "[01:23:45] *** Joins: Dinnerbone (dinnerbone@dinnerbone.com)",
        "[01:23:46] *** Joins: Troll (troll@example.com)",
        "[01:24:00] <Troll> Oh no, an intruder!",
        "[01:25:00] * Dinnerbone waves",
        "[01:26:00] -Dinnerbone- Hey, listen!",
        "this line is garbage",
        "[01:30:00] *** Dinnerbone is now known as Djinnibone",
        "[01:31:00] *** Quits: Djinnibone (dinnerbone@dinnerbone.com) (Bye!)",
    ])
    (logs / "notes.log").write_text("no date here\n", encoding="utf-8")
    (logs / "README.txt").write_text("not a log\n", encoding="utf-8")
    return logs


@pytest.fixture
def config_file(tmp_path, log_dir, lexicon_file):
    """A config.json pointing at the log fixture, using relative paths."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "parser": {"name": "znc", "path": "logs", "channel": "#chan"},
        "collectors": {"eventcount": True, "sentiments": {"lexicon": "lexicon.txt"}},
        "writer": {"name": "json", "target": "out"},
    }), encoding="utf-8")
    return path


# --- Helper Functions (not fixtures) ---


def write_log(path: Path, lines: list[str]) -> Path:
    """Write log lines to a file, newline terminated."""
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def at(stamp: str) -> datetime:
    """UTC datetime from '2001-01-01 00:00:00'."""
    return datetime.fromisoformat(stamp).replace(tzinfo=timezone.utc)
