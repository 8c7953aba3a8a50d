"""Tests for the ZNC log parser."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from chanstat.channel import Channel
from chanstat.collectors import Collector
from chanstat.errors import ConfigError
from chanstat.events import Action, Join, Kick, Message, Mode, Nick, Notice, Part, Quit, Topic
from chanstat.parsers import PARSERS, get_parser
from chanstat.parsers.znc import LogStats, ZncParser, parse_mode_changes

from conftest import at, write_log


DAY = date(2001, 1, 1)
WHEN = at("2001-01-01 01:23:45")


@pytest.fixture
def collector():
    return MagicMock(spec=Collector)


@pytest.fixture
def parser(collector):
    return ZncParser(collector)


# ─────────────────────────────────────────────────────────────────────────────
# match_line
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.parametrize("line,expected", [
    ("[01:23:45] * Dinnerbone waves", {"type": "action", "nick": "Dinnerbone", "action": "waves"}),
    ("[01:23:45] * Dinnerbone", {"type": "action", "nick": "Dinnerbone", "action": ""}),
    ("[01:23:45] <Dinnerbone> Hello world!", {"type": "message", "nick": "Dinnerbone", "message": "Hello world!"}),
    ("[01:23:45] <Dinnerbone>", {"type": "message", "nick": "Dinnerbone", "message": ""}),
    (
        "[01:23:45] *** Joins: Dinnerbone (dinnerbone@dinnerbone.com)",
        {"type": "join", "nick": "Dinnerbone", "ident": "dinnerbone", "host": "dinnerbone.com"},
    ),
    (
        "[01:23:45] *** Troll was kicked by Dinnerbone (Go away)",
        {"type": "kick", "nick": "Troll", "kicker": "Dinnerbone", "message": "Go away"},
    ),
    (
        "[01:23:45] *** Dinnerbone sets mode: +vm-oS+k voice op key",
        {"type": "mode", "nick": "Dinnerbone", "modes": "+vm-oS+k voice op key"},
    ),
    (
        "[01:23:45] *** Dinnerbone is now known as Djinnibone",
        {"type": "nick", "nick": "Dinnerbone", "new_nick": "Djinnibone"},
    ),
    ("[01:23:45] -Dinnerbone- Hey, listen!", {"type": "notice", "nick": "Dinnerbone", "message": "Hey, listen!"}),
    (
        "[01:23:45] *** Parts: Dinnerbone (dinnerbone@dinnerbone.com) (Bye!)",
        {"type": "part", "nick": "Dinnerbone", "ident": "dinnerbone", "host": "dinnerbone.com", "message": "Bye!"},
    ),
    (
        "[01:23:45] *** Quits: Dinnerbone (dinnerbone@dinnerbone.com) ()",
        {"type": "quit", "nick": "Dinnerbone", "ident": "dinnerbone", "host": "dinnerbone.com", "message": ""},
    ),
    (
        "[01:23:45] *** Dinnerbone changes topic to 'It's a topic'",
        {"type": "topic", "nick": "Dinnerbone", "topic": "It's a topic"},
    ),
])
def test_match_line(line, expected):
    """Test each supported line format."""
    assert ZncParser.match_line(line) == {"time": "01:23:45", **expected}


@pytest.mark.parametrize("line", [
    "",
    "Hello",
    "[1:23:45] <Dinnerbone> short clock",
    "[99:99:99] <Dinnerbone> impossible clock",
    "[24:00:00] <Dinnerbone> past midnight",
    "[01:23:45] *** Something we don't know about",
])
def test_match_line_unknown(line):
    assert ZncParser.match_line(line) is None


def test_parse_mode_changes():
    """Test splitting a mode string without knowing mode classes."""
    changes = parse_mode_changes("+vm-oS+k voice op key")
    assert changes.added == ["v", "m", "k"]
    assert changes.removed == ["o", "S"]
    assert changes.params == ["voice", "op", "key"]


def test_parse_mode_changes_defaults_to_adding():
    changes = parse_mode_changes("n")
    assert changes.added == ["n"]
    assert changes.params == []


# ─────────────────────────────────────────────────────────────────────────────
# parse_line
# ─────────────────────────────────────────────────────────────────────────────


def test_parse_message(parser, collector):
    """Test a message becomes a Message event and a collector callback."""
    event = parser.parse_line(DAY, "[01:23:45] <Dinnerbone> Hello world!")
    assert isinstance(event, Message)
    assert event.time == WHEN
    assert event.author.nick == "Dinnerbone"
    assert event.message == "Hello world!"
    collector.on_message.assert_called_once_with(WHEN, "Dinnerbone", "Hello world!")


def test_parse_action(parser, collector):
    event = parser.parse_line(DAY, "[01:23:45] * Dinnerbone waves")
    assert isinstance(event, Action)
    assert event.action == "waves"
    collector.on_action.assert_called_once_with(WHEN, "Dinnerbone", "waves")


def test_parse_notice(parser, collector):
    event = parser.parse_line(DAY, "[01:23:45] -Dinnerbone- Hey, listen!")
    assert isinstance(event, Notice)
    assert event.message == "Hey, listen!"
    collector.on_notice.assert_called_once_with(WHEN, "Dinnerbone", "Hey, listen!")


def test_parse_join_carries_identity(parser, collector):
    """Test join lines record the ident and host."""
    event = parser.parse_line(DAY, "[01:23:45] *** Joins: Dinnerbone (dinnerbone@dinnerbone.com)")
    assert isinstance(event, Join)
    assert event.author.nick == "Dinnerbone"
    assert event.author.user.model_dump() == {"ident": "dinnerbone", "host": "dinnerbone.com"}
    collector.on_join.assert_called_once_with(WHEN, "Dinnerbone")


def test_parse_kick(parser, collector):
    """Test the kicker is the author and the kicked nick the victim."""
    event = parser.parse_line(DAY, "[01:23:45] *** Troll was kicked by Dinnerbone (Go away)")
    assert isinstance(event, Kick)
    assert event.author.nick == "Dinnerbone"
    assert event.victim.nick == "Troll"
    assert event.message == "Go away"
    collector.on_kick.assert_called_once_with(WHEN, "Dinnerbone", "Troll", "Go away")


def test_parse_mode(parser, collector):
    event = parser.parse_line(DAY, "[01:23:45] *** Dinnerbone sets mode: +o Djinnibone")
    assert isinstance(event, Mode)
    assert event.instructions == "+o Djinnibone"
    collector.on_mode.assert_called_once_with(WHEN, "Dinnerbone", "+o Djinnibone")


def test_parse_nick(parser, collector):
    event = parser.parse_line(DAY, "[01:23:45] *** Dinnerbone is now known as Djinnibone")
    assert isinstance(event, Nick)
    assert event.author.nick == "Dinnerbone"
    assert event.new_nick == "Djinnibone"
    collector.on_nick.assert_called_once_with(WHEN, "Dinnerbone", "Djinnibone")


@pytest.mark.parametrize("word,event_cls,callback", [
    ("Parts", Part, "on_part"),
    ("Quits", Quit, "on_quit"),
])
def test_parse_leaving(parser, collector, word, event_cls, callback):
    event = parser.parse_line(DAY, f"[01:23:45] *** {word}: Dinnerbone (dinnerbone@dinnerbone.com) (Bye!)")
    assert isinstance(event, event_cls)
    assert event.author.host == "dinnerbone.com"
    assert event.message == "Bye!"
    getattr(collector, callback).assert_called_once_with(WHEN, "Dinnerbone", "Bye!")


def test_parse_topic(parser, collector):
    event = parser.parse_line(DAY, "[01:23:45] *** Dinnerbone changes topic to 'Hello world!'")
    assert isinstance(event, Topic)
    assert event.topic == "Hello world!"
    collector.on_topic.assert_called_once_with(WHEN, "Dinnerbone", "Hello world!")


def test_parse_unknown_line(parser, collector):
    """Test unknown lines produce nothing and notify nobody."""
    assert parser.parse_line(DAY, "garbage") is None
    assert collector.method_calls == []


def test_parser_without_collector():
    """Test a parser can run with no collector at all."""
    event = ZncParser().parse_line(DAY, "[01:23:45] <Dinnerbone> hi")
    assert isinstance(event, Message)


# ─────────────────────────────────────────────────────────────────────────────
# Files
# ─────────────────────────────────────────────────────────────────────────────


def test_find_log_files_sorted_by_date(log_dir):
    """Test only dated .log files are found, oldest first."""
    files = ZncParser.find_log_files(log_dir)
    assert [day for day, _ in files] == [date(2001, 1, 1), date(2001, 1, 2)]
    assert [path.name for _, path in files] == ["#chan_20010101.log", "#chan_20010102.log"]


def test_find_log_files_single_file(log_dir):
    files = ZncParser.find_log_files(log_dir / "#chan_20010102.log")
    assert files == [(date(2001, 1, 2), log_dir / "#chan_20010102.log")]


def test_find_log_files_empty_dir(tmp_path):
    assert ZncParser.find_log_files(tmp_path) == []


def test_read_log_feeds_channel(log_dir):
    """Test reading a file replays every recognized line into the channel."""
    channel = Channel()
    stats = ZncParser().read_log(date(2001, 1, 1), log_dir / "#chan_20010101.log", channel)

    assert stats == LogStats(lines=8, events=7, skipped=1)
    assert len(channel.events) == 7
    assert list(channel.actors) == ["Troll"]
    assert channel.actors["Troll"].host == "example.com"


def test_read_log_skips_impossible_clock(tmp_path):
    """Test a line with an out-of-range time is skipped, not fatal to the run."""
    path = write_log(tmp_path / "#chan_20010101.log", ["[99:99:99] <a> broken", "[23:59:59] <b> fine"])
    channel = Channel()
    stats = ZncParser().read_log(DAY, path, channel)
    assert stats == LogStats(lines=2, events=1, skipped=1)
    assert channel.events[0].author.nick == "b"


def test_read_log_without_channel(tmp_path, collector):
    """Test reading with no channel still reports to the collector."""
    path = write_log(tmp_path / "#chan_20010101.log", ["[00:00:00] <a> one", "", "[00:00:01] <b> two"])
    stats = ZncParser(collector).read_log(DAY, path)
    assert stats == LogStats(lines=2, events=2, skipped=0)
    assert collector.on_message.call_count == 2


def test_log_stats_add():
    total = LogStats()
    total += LogStats(lines=3, events=2, skipped=1)
    total += LogStats(lines=1, events=1)
    assert total == LogStats(lines=4, events=3, skipped=1)


def test_get_parser():
    assert get_parser("znc") is ZncParser
    assert PARSERS == {"znc": ZncParser}


def test_get_parser_unknown():
    with pytest.raises(ConfigError, match="unknown parser 'irssi'"):
        get_parser("irssi")
