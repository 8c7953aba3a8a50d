"""Event counts per day and per hour, overall and per nick."""

import logging
from datetime import datetime

from ..timeutil import day_key, hour_key
from . import Collector, WriteFn

logger = logging.getLogger(__name__)


def _bump(tally: dict, key: str, event: str) -> None:
    counts = tally.setdefault(key, {})
    counts[event] = counts.get(event, 0) + 1


class EventCountCollector(Collector):
    """Counts actions, messages, kicks, mode changes and topic changes.

    Shape of both `days` and `hours`:
        {"total": {bucket: {event: n}}, "nicks": {nick: {bucket: {event: n}}}}
    """

    def __init__(self):
        self.days: dict = {"total": {}, "nicks": {}}
        self.hours: dict = {"total": {}, "nicks": {}}

    def increment(self, time: datetime, event: str, nick: str) -> None:
        day = day_key(time)
        hour = hour_key(time)

        _bump(self.days["total"], day, event)
        _bump(self.days["nicks"].setdefault(nick, {}), day, event)
        _bump(self.hours["total"], hour, event)
        _bump(self.hours["nicks"].setdefault(nick, {}), hour, event)

    def on_action(self, time, nick, action=None):
        self.increment(time, "action", nick)

    def on_message(self, time, nick, message=None):
        self.increment(time, "message", nick)

    def on_kick(self, time, nick, victim=None, message=None):
        self.increment(time, "kick", nick)

    def on_mode(self, time, nick, mode=None):
        self.increment(time, "mode", nick)

    def on_notice(self, time, nick, message=None):
        # Notices are rare enough in channels to count as plain messages
        self.increment(time, "message", nick)

    def on_topic(self, time, nick, topic=None):
        self.increment(time, "topic", nick)

    def save(self, write: WriteFn) -> None:
        write("eventcount/days", self.days["total"])
        write("eventcount/hours", self.hours["total"])
        nicks = {
            nick: {
                "days": self.days["nicks"].get(nick, {}),
                "hours": self.hours["nicks"].get(nick, {}),
            }
            for nick in sorted(self.days["nicks"])
        }
        write("eventcount/nicks", nicks)
        logger.debug(f"Saved event counts for {len(nicks)} nicks")
