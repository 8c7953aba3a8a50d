"""Channel state built by replaying events.

A Channel owns the actor registry, the mode table, the topic and the
append-only log of events applied to it. Events mutate the channel through
the methods here while being added with `add_event`.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING, Iterable

from .models import Actor, User
from .modes import ModeTable, ModeType, ModeValue

if TYPE_CHECKING:
    from .events import AnyEvent

logger = logging.getLogger(__name__)


class Channel:
    """Materialized state of one IRC channel."""

    def __init__(self, name: str | None = None):
        self.name = name
        self.actors: dict[str, User] = {}
        self.events: list[AnyEvent] = []
        self.topic: str | None = None
        self.modes = ModeTable()

    def __repr__(self) -> str:
        return (
            f"<Channel {self.name or '?'}: {len(self.actors)} actors, "
            f"{len(self.events)} events>"
        )

    def add_event(self, event: AnyEvent) -> None:
        """Apply an event, then record it.

        If applying raises, the event is not recorded. Whatever the event
        changed before failing stays changed.
        """
        event.apply(self)
        self.events.append(event)

    # --- Actors ---

    def update_actor(self, actor: Actor) -> User:
        """Register or refresh the user record for `actor.nick`.

        Returns:
            The canonical record for this nick. New nicks get a copy of
            `actor.user`, never the object itself; known nicks get the
            existing record with `actor.user`'s attributes merged in.
        """
        record = self.actors.get(actor.nick)
        if record is None:
            record = actor.user.model_copy()
            self.actors[actor.nick] = record
            return record
        return record.merge(actor.user)

    def remove_actor(self, actor: Actor) -> None:
        """Forget `actor.nick`. Unknown nicks are ignored."""
        self.actors.pop(actor.nick, None)

    def rename_actor(self, nick: str, new_nick: str) -> None:
        """Move the record for `nick` to `new_nick`, keeping its attributes.

        An unknown `nick` leaves an empty record at `new_nick`. Whatever was
        at `new_nick` before is replaced. Actors already on logged events
        keep the nick they were logged with.
        """
        record = self.actors.pop(nick, None)
        self.actors[new_nick] = record if record is not None else User()

    # --- Modes ---

    def set_available_modes(
        self,
        lists: Iterable[str],
        param: Iterable[str],
        partial: Iterable[str],
        channel: Iterable[str],
        user: Iterable[str],
    ) -> None:
        """Redefine the known mode letters. See `ModeTable.configure`."""
        self.modes.configure(lists, param, partial, channel, user)

    def set_mode(self, mode: str, param: str | None = None) -> None:
        self.modes.enable(mode, param)

    def unset_mode(self, mode: str, param: str | None = None) -> None:
        self.modes.disable(mode, param)

    def update_modes(self, instructions: str) -> None:
        """Apply a mode string such as "+vm-oS+k voice op key".

        The first word is a run of mode letters and +/- direction markers
        (adding by default); the remaining words are parameters, handed out
        left to right to the letters that take one.
        """
        words = instructions.split()
        if not words:
            return

        letters, params = words[0], deque(words[1:])
        adding = True
        for letter in letters:
            if letter == "+":
                adding = True
            elif letter == "-":
                adding = False
            else:
                param = None
                if params and self.modes.takes_param(letter, adding):
                    param = params.popleft()
                if adding:
                    self.set_mode(letter, param)
                else:
                    self.unset_mode(letter, param)

        if params:
            logger.debug(f"Unused mode parameters in {instructions!r}: {list(params)}")

    def get_available_modes(self) -> dict[str, ModeType]:
        return self.modes.available

    def get_channel_modes(self) -> dict[str, ModeValue]:
        return self.modes.channel_modes

    def get_user_modes(self) -> dict[str, list[str]]:
        return self.modes.user_modes

    def get_lists(self) -> dict[str, list[str]]:
        return self.modes.lists

    # --- Topic ---

    def update_topic(self, topic: str) -> None:
        self.topic = topic
