"""Core data models for channel participants.

Uses Pydantic v2. A participant is split in two:

- `Actor` is the nick as it appeared on one event. It belongs to that event
  and never changes once the event is logged.
- `User` is what is known about whoever is behind the nick (ident, host,
  anything else a parser finds). The channel keeps one `User` per live nick
  and every applied event's actor points at that shared record, so later
  merges are visible through earlier events.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class User(BaseModel):
    """Mergeable attributes of a participant. Unknown keys are kept."""

    model_config = ConfigDict(extra="allow")

    ident: str | None = None
    host: str | None = None

    def merge(self, other: "User") -> "User":
        """Copy every attribute explicitly set on `other` onto this record.

        Unset or None attributes on `other` leave the existing value alone.

        Returns:
            self, so callers keep holding the same record
        """
        updates = {name: getattr(other, name) for name in other.model_fields_set}
        updates.update(other.model_extra or {})
        for name, value in updates.items():
            if value is not None:
                setattr(self, name, value)
        return self


class Actor(BaseModel):
    """A nick on one event, plus the user record behind it."""

    model_config = ConfigDict(extra="forbid")

    nick: str
    user: User = Field(default_factory=User)

    @model_validator(mode="before")
    @classmethod
    def _collect_user_attributes(cls, data: Any) -> Any:
        """Accept Actor(nick=..., ident=..., host=...) as shorthand for user=User(...)."""
        if not isinstance(data, dict):
            return data
        attributes = {k: v for k, v in data.items() if k not in ("nick", "user")}
        if not attributes:
            return data

        user = data.get("user") or {}
        if isinstance(user, BaseModel):
            user = user.model_dump(exclude_unset=True)
        result = {k: v for k, v in data.items() if k == "nick"}
        result["user"] = {**user, **attributes}
        return result

    @property
    def ident(self) -> str | None:
        return self.user.ident

    @property
    def host(self) -> str | None:
        return self.user.host
