"""Parser for ZNC log module transcripts.

ZNC writes one file per channel per day (e.g. `#channel_20170101.log`), with
lines like:

    [01:23:45] <nick> message
    [01:23:45] * nick does something
    [01:23:45] -nick- notice
    [01:23:45] *** Joins: nick (ident@host)
    [01:23:45] *** Parts: nick (ident@host) (message)
    [01:23:45] *** Quits: nick (ident@host) (message)
    [01:23:45] *** victim was kicked by nick (message)
    [01:23:45] *** nick sets mode: +o-v op voice
    [01:23:45] *** nick is now known as newnick
    [01:23:45] *** nick changes topic to 'topic'
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from ..channel import Channel
from ..collectors import Collector
from ..events import Action, Event, Join, Kick, Message, Mode, Nick, Notice, Part, Quit, Topic
from ..models import Actor
from ..timeutil import combine, parse_log_date

logger = logging.getLogger(__name__)

TIME = r"^\[(?P<time>(?:[01]\d|2[0-3]):[0-5]\d:[0-5]\d)\] "

# Order matters: the first matching pattern wins.
PATTERNS: list[tuple[str, re.Pattern]] = [
    ("action", re.compile(TIME + r"\* (?P<nick>\S+)(?: (?P<action>.*))?$")),
    ("message", re.compile(TIME + r"<(?P<nick>[^>]+)>(?: (?P<message>.*))?$")),
    ("join", re.compile(TIME + r"\*\*\* Joins: (?P<nick>\S+) \((?P<ident>\S+)@(?P<host>\S+)\)$")),
    ("kick", re.compile(TIME + r"\*\*\* (?P<nick>\S+) was kicked by (?P<kicker>\S+) \((?P<message>.*)\)$")),
    ("mode", re.compile(TIME + r"\*\*\* (?P<nick>\S+) sets mode: (?P<modes>.+)$")),
    ("nick", re.compile(TIME + r"\*\*\* (?P<nick>\S+) is now known as (?P<new_nick>\S+)$")),
    ("notice", re.compile(TIME + r"-(?P<nick>[^-]+)- (?P<message>.*)$")),
    ("part", re.compile(
        TIME + r"\*\*\* Parts: (?P<nick>\S+) \((?P<ident>\S+)@(?P<host>\S+)\) \((?P<message>.*)\)$"
    )),
    ("quit", re.compile(
        TIME + r"\*\*\* Quits: (?P<nick>\S+) \((?P<ident>\S+)@(?P<host>\S+)\) \((?P<message>.*)\)$"
    )),
    ("topic", re.compile(TIME + r"\*\*\* (?P<nick>\S+) changes topic to '(?P<topic>.*)'$")),
]


@dataclass
class ModeChanges:
    """A mode string split into letters added, letters removed, and parameters."""

    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    params: list[str] = field(default_factory=list)


def parse_mode_changes(modes: str) -> ModeChanges:
    """Split "+vm-oS+k voice op key" without knowing which modes take parameters."""
    letters, *params = modes.split(" ")
    result = ModeChanges(params=params)
    target = result.added
    for char in letters:
        if char == "+":
            target = result.added
        elif char == "-":
            target = result.removed
        else:
            target.append(char)
    return result


@dataclass
class LogStats:
    """What reading one or more log files produced."""

    lines: int = 0
    events: int = 0
    skipped: int = 0

    def __iadd__(self, other: "LogStats") -> "LogStats":
        self.lines += other.lines
        self.events += other.events
        self.skipped += other.skipped
        return self


class ZncParser:
    """Turns ZNC log lines into events, reporting each one to a collector."""

    def __init__(self, collector: Collector | None = None):
        self.collector = collector or Collector()

    @staticmethod
    def match_line(line: str) -> dict | None:
        """Match a line against the known formats, without any date context.

        Returns:
            {"type": kind, "time": "HH:MM:SS", ...fields}, or None if no
            format matches
        """
        for kind, pattern in PATTERNS:
            match = pattern.match(line)
            if match:
                record = {"type": kind}
                record.update({k: v if v is not None else "" for k, v in match.groupdict().items()})
                return record
        return None

    def parse_line(self, day: date, line: str) -> Event | None:
        """Parse one line of the log for `day`.

        Fires the matching collector callback and returns the event, or
        returns None for lines in no known format.
        """
        record = self.match_line(line)
        if record is None:
            logger.debug(f"Unrecognized line: {line!r}")
            return None

        kind = record["type"]
        when = combine(day, record["time"])
        nick = record["nick"]
        collector = self.collector

        if kind == "message":
            collector.on_message(when, nick, record["message"])
            return Message(time=when, author=Actor(nick=nick), message=record["message"])

        elif kind == "action":
            collector.on_action(when, nick, record["action"])
            return Action(time=when, author=Actor(nick=nick), action=record["action"])

        elif kind == "notice":
            collector.on_notice(when, nick, record["message"])
            return Notice(time=when, author=Actor(nick=nick), message=record["message"])

        elif kind == "join":
            collector.on_join(when, nick)
            author = Actor(nick=nick, ident=record["ident"], host=record["host"])
            return Join(time=when, author=author)

        elif kind == "kick":
            collector.on_kick(when, record["kicker"], nick, record["message"])
            return Kick(
                time=when,
                author=Actor(nick=record["kicker"]),
                victim=Actor(nick=nick),
                message=record["message"],
            )

        elif kind == "mode":
            collector.on_mode(when, nick, record["modes"])
            return Mode(time=when, author=Actor(nick=nick), instructions=record["modes"])

        elif kind == "nick":
            collector.on_nick(when, nick, record["new_nick"])
            return Nick(time=when, author=Actor(nick=nick), new_nick=record["new_nick"])

        elif kind == "part":
            collector.on_part(when, nick, record["message"])
            author = Actor(nick=nick, ident=record["ident"], host=record["host"])
            return Part(time=when, author=author, message=record["message"])

        elif kind == "quit":
            collector.on_quit(when, nick, record["message"])
            author = Actor(nick=nick, ident=record["ident"], host=record["host"])
            return Quit(time=when, author=author, message=record["message"])

        elif kind == "topic":
            collector.on_topic(when, nick, record["topic"])
            return Topic(time=when, author=Actor(nick=nick), topic=record["topic"])

        return None

    @staticmethod
    def find_log_files(path: Path) -> list[tuple[date, Path]]:
        """List the dated `*.log` files under `path`, oldest first.

        `path` may also be a single log file.
        """
        path = Path(path)
        candidates = [path] if path.is_file() else sorted(path.glob("*.log"))
        found = []
        for candidate in candidates:
            try:
                day = parse_log_date(candidate.stem)
            except ValueError:
                logger.warning(f"Skipping {candidate.name}: no date in file name")
                continue
            found.append((day, candidate))
        found.sort(key=lambda item: item[0])
        return found

    def read_log(self, day: date, path: Path, channel: Channel | None = None) -> LogStats:
        """Parse every line of one log file, feeding events to `channel`."""
        stats = LogStats()
        with open(path, encoding="utf-8", errors="replace") as f:
            for raw in f:
                line = raw.rstrip("\r\n")
                if not line:
                    continue
                stats.lines += 1
                event = self.parse_line(day, line)
                if event is None:
                    stats.skipped += 1
                    continue
                if channel is not None:
                    channel.add_event(event)
                stats.events += 1
        logger.debug(f"{path.name}: {stats.events} events, {stats.skipped} lines skipped")
        return stats
