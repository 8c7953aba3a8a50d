"""Statistics collectors.

Collectors observe the parsed log directly: the parser calls one `on_*`
method per recognized line with `(time, nick, payload...)`, independently of
any Channel state. When parsing is done, `save(write)` hands the collected
data to a writer callable `write(name, data)`.
"""

from datetime import datetime
from typing import Any, Callable

WriteFn = Callable[[str, Any], None]


class Collector:
    """Base collector: every callback is a no-op."""

    def on_action(self, time: datetime, nick: str, action: str) -> None:
        pass

    def on_message(self, time: datetime, nick: str, message: str) -> None:
        pass

    def on_join(self, time: datetime, nick: str) -> None:
        pass

    def on_kick(self, time: datetime, nick: str, victim: str, message: str) -> None:
        pass

    def on_mode(self, time: datetime, nick: str, mode: str) -> None:
        pass

    def on_nick(self, time: datetime, old_nick: str, new_nick: str) -> None:
        pass

    def on_notice(self, time: datetime, nick: str, message: str) -> None:
        pass

    def on_part(self, time: datetime, nick: str, message: str) -> None:
        pass

    def on_quit(self, time: datetime, nick: str, message: str) -> None:
        pass

    def on_topic(self, time: datetime, nick: str, topic: str) -> None:
        pass

    def save(self, write: WriteFn) -> None:
        pass

    @staticmethod
    def combine(collectors: list["Collector"]) -> "CombinedCollector":
        return CombinedCollector(collectors)


class CombinedCollector(Collector):
    """Forwards every callback, unchanged, to each wrapped collector in order."""

    def __init__(self, collectors: list[Collector]):
        self.collectors = list(collectors)

    def on_action(self, *args) -> None:
        for collector in self.collectors:
            collector.on_action(*args)

    def on_message(self, *args) -> None:
        for collector in self.collectors:
            collector.on_message(*args)

    def on_join(self, *args) -> None:
        for collector in self.collectors:
            collector.on_join(*args)

    def on_kick(self, *args) -> None:
        for collector in self.collectors:
            collector.on_kick(*args)

    def on_mode(self, *args) -> None:
        for collector in self.collectors:
            collector.on_mode(*args)

    def on_nick(self, *args) -> None:
        for collector in self.collectors:
            collector.on_nick(*args)

    def on_notice(self, *args) -> None:
        for collector in self.collectors:
            collector.on_notice(*args)

    def on_part(self, *args) -> None:
        for collector in self.collectors:
            collector.on_part(*args)

    def on_quit(self, *args) -> None:
        for collector in self.collectors:
            collector.on_quit(*args)

    def on_topic(self, *args) -> None:
        for collector in self.collectors:
            collector.on_topic(*args)

    def save(self, write: WriteFn) -> None:
        for collector in self.collectors:
            collector.save(write)
