"""Channel events.

A closed set of event kinds, each a Pydantic model tagged by `kind`. Every
event knows how to apply itself to a Channel. Applying an event points its
`author` (and `victim`) at the channel's shared user record, so code holding
the event afterwards sees merged attributes. The nick on an event is never
changed, not even by a later nick change.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import TYPE_CHECKING, Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from .models import Actor

if TYPE_CHECKING:
    from .channel import Channel


def _canonical(channel: Channel, actor: Actor) -> Actor:
    """`actor` with its user swapped for the channel's shared record."""
    return actor.model_copy(update={"user": channel.update_actor(actor)})


class Event(BaseModel):
    """Something happened. Applying the bare base event does nothing."""

    kind: Literal["event"] = "event"
    time: datetime

    def apply(self, channel: Channel) -> None:
        pass


class AuthoredEvent(Event):
    """Base for events with a single author."""

    author: Actor

    def apply(self, channel: Channel) -> None:
        self.author = _canonical(channel, self.author)


class Message(AuthoredEvent):
    kind: Literal["message"] = "message"
    message: str = ""


class Notice(AuthoredEvent):
    kind: Literal["notice"] = "notice"
    message: str = ""


class Action(AuthoredEvent):
    kind: Literal["action"] = "action"
    action: str = ""


class Join(AuthoredEvent):
    kind: Literal["join"] = "join"


class Kick(Event):
    """`author` kicked `victim` out of the channel."""

    kind: Literal["kick"] = "kick"
    author: Actor
    victim: Actor
    message: str = ""

    def apply(self, channel: Channel) -> None:
        self.author = _canonical(channel, self.author)
        self.victim = _canonical(channel, self.victim)
        channel.remove_actor(self.victim)


class Part(AuthoredEvent):
    kind: Literal["part"] = "part"
    message: str = ""

    def apply(self, channel: Channel) -> None:
        super().apply(channel)
        channel.remove_actor(self.author)


class Quit(AuthoredEvent):
    kind: Literal["quit"] = "quit"
    message: str = ""

    def apply(self, channel: Channel) -> None:
        super().apply(channel)
        channel.remove_actor(self.author)


class Mode(AuthoredEvent):
    """A mode change; `instructions` is the raw mode string ("+o-v op voice")."""

    kind: Literal["mode"] = "mode"
    instructions: str

    def apply(self, channel: Channel) -> None:
        super().apply(channel)
        channel.update_modes(self.instructions)


class Topic(AuthoredEvent):
    kind: Literal["topic"] = "topic"
    topic: str

    def apply(self, channel: Channel) -> None:
        super().apply(channel)
        channel.update_topic(self.topic)


class Nick(AuthoredEvent):
    """`author` is now known as `new_nick`."""

    kind: Literal["nick"] = "nick"
    new_nick: str

    def apply(self, channel: Channel) -> None:
        super().apply(channel)
        channel.rename_actor(self.author.nick, self.new_nick)


AnyEvent = Annotated[
    Union[Event, Message, Notice, Action, Join, Kick, Part, Quit, Mode, Topic, Nick],
    Field(discriminator="kind"),
]

_event_adapter = TypeAdapter(AnyEvent)


def event_from_json(data: str | dict) -> Event:
    """Rebuild an event from its JSON form (a string or an already-decoded dict).

    Raises:
        pydantic.ValidationError: Unknown kind or missing/invalid fields
    """
    if isinstance(data, str):
        data = json.loads(data)
    return _event_adapter.validate_python(data)


def event_to_json(event: Event) -> str:
    """Serialize an event to a JSON string, including its `kind` tag."""
    return event.model_dump_json()
