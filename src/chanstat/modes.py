"""Channel mode table.

Every known mode letter belongs to exactly one class, and each class has its
own storage:

- list:    parameterized, multi-valued (bans, exceptions)  -> lists[letter]
- param:   parameter required to set and unset (key)       -> channel_modes[letter]
- partial: parameter required only to set (limit)          -> channel_modes[letter]
- channel: boolean flag, no parameter (moderated)          -> channel_modes[letter]
- user:    parameterized, multi-valued, per user (op)      -> user_modes[letter]

Letters nobody told us about are treated as boolean channel modes the first
time they are seen.
"""

import logging
from typing import Iterable, Literal

from .errors import ModeConfigError

logger = logging.getLogger(__name__)

ModeType = Literal["list", "param", "partial", "channel", "user"]

MODE_TYPES: tuple[ModeType, ...] = ("list", "param", "partial", "channel", "user")

ModeValue = str | bool | None


def default_value(mode_type: ModeType) -> list[str] | ModeValue:
    """Fresh initial state for a letter of the given class."""
    if mode_type in ("list", "user"):
        return []
    if mode_type == "channel":
        return False
    return None


def _is_param(param: str | None) -> bool:
    return isinstance(param, str) and len(param) > 0


class ModeTable:
    """Classification and state of every mode letter on a channel."""

    def __init__(self):
        self.available: dict[str, ModeType] = {}
        self.lists: dict[str, list[str]] = {}
        self.channel_modes: dict[str, ModeValue] = {}
        self.user_modes: dict[str, list[str]] = {}

    def _bucket(self, mode_type: ModeType) -> dict:
        if mode_type == "list":
            return self.lists
        if mode_type == "user":
            return self.user_modes
        return self.channel_modes

    def configure(
        self,
        lists: Iterable[str],
        param: Iterable[str],
        partial: Iterable[str],
        channel: Iterable[str],
        user: Iterable[str],
    ) -> None:
        """Redefine which letters are known, and as which class.

        Letters that keep their class keep their state. Letters dropped from
        a class lose their state; letters new to a class start from that
        class's default.

        Raises:
            ModeConfigError: A letter is newly added under two classes at
                once. Nothing is changed in that case.
        """
        wanted = {
            mode_type: list(dict.fromkeys(letters))
            for mode_type, letters in zip(MODE_TYPES, (lists, param, partial, channel, user))
        }

        added: dict[ModeType, list[str]] = {
            mode_type: [letter for letter in letters if self.available.get(letter) != mode_type]
            for mode_type, letters in wanted.items()
        }
        removed: dict[ModeType, list[str]] = {
            mode_type: [
                letter for letter, current in self.available.items()
                if current == mode_type and letter not in wanted[mode_type]
            ]
            for mode_type in MODE_TYPES
        }

        claimed: dict[str, ModeType] = {}
        for mode_type, letters in added.items():
            for letter in letters:
                if letter in claimed:
                    raise ModeConfigError(
                        f"Cannot add mode {letter} as different types at the same time "
                        f"({claimed[letter]} and {mode_type})."
                    )
                claimed[letter] = mode_type

        for mode_type, letters in removed.items():
            for letter in letters:
                del self.available[letter]
                self._bucket(mode_type).pop(letter, None)

        for mode_type, letters in added.items():
            for letter in letters:
                self.available[letter] = mode_type
                self._bucket(mode_type)[letter] = default_value(mode_type)

        logger.debug(
            f"Mode table configured: +{len(claimed)} letters, "
            f"-{sum(len(v) for v in removed.values())} letters"
        )

    def takes_param(self, letter: str, adding: bool) -> bool:
        """Whether this letter consumes a parameter from a mode string."""
        mode_type = self.available.get(letter)
        if mode_type in ("list", "param", "user"):
            return True
        return mode_type == "partial" and adding

    def enable(self, letter: str, param: str | None = None) -> None:
        """Apply +letter (with its parameter, if any)."""
        mode_type = self.available.get(letter)

        if mode_type is None:
            self.available[letter] = "channel"
            self.channel_modes[letter] = True

        elif mode_type in ("list", "user"):
            bucket = self._bucket(mode_type)[letter]
            if _is_param(param) and param not in bucket:
                bucket.append(param)

        elif mode_type in ("param", "partial"):
            if _is_param(param):
                self.channel_modes[letter] = param

        elif mode_type == "channel":
            self.channel_modes[letter] = True

    def disable(self, letter: str, param: str | None = None) -> None:
        """Apply -letter (with its parameter, if any)."""
        mode_type = self.available.get(letter)

        if mode_type is None:
            self.available[letter] = "channel"
            self.channel_modes[letter] = False

        elif mode_type in ("list", "user"):
            bucket = self._bucket(mode_type)[letter]
            if _is_param(param) and param in bucket:
                bucket.remove(param)

        elif mode_type == "param":
            if _is_param(param):
                self.channel_modes[letter] = None

        elif mode_type == "partial":
            self.channel_modes[letter] = None

        elif mode_type == "channel":
            self.channel_modes[letter] = False


def parse_isupport(chanmodes: str, prefix: str = "") -> tuple[str, str, str, str, str]:
    """Split ISUPPORT CHANMODES and PREFIX values into the five mode classes.

    CHANMODES is four comma-separated groups: list modes (+b), modes that
    always take a parameter (+k), modes that take one only when set (+l),
    and flag modes (+m). PREFIX is "(ov)@+": the letters are user modes.

    Returns:
        (lists, param, partial, channel, user) letter strings, ready for
        `ModeTable.configure`

    Raises:
        ModeConfigError: Either value is malformed
    """
    groups = chanmodes.split(",") if chanmodes else []
    if len(groups) < 4:
        raise ModeConfigError(
            f"CHANMODES must have four comma-separated groups, got {chanmodes!r}"
        )
    # Servers may append further groups; they're undefined, so ignore them
    lists, param, partial, channel = groups[:4]

    user = ""
    if prefix:
        if not prefix.startswith("(") or ")" not in prefix:
            raise ModeConfigError(f"PREFIX must look like (ov)@+, got {prefix!r}")
        user, symbols = prefix[1:].split(")", 1)
        if len(user) != len(symbols):
            raise ModeConfigError(
                f"PREFIX lists {len(user)} modes but {len(symbols)} symbols: {prefix!r}"
            )

    return lists, param, partial, channel, user
