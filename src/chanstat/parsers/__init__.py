"""Log parsers, by the name used in config files."""

from ..errors import ConfigError
from .znc import ZncParser

PARSERS = {
    "znc": ZncParser,
}


def get_parser(name: str) -> type[ZncParser]:
    """Look up a parser class by name.

    Raises:
        ConfigError: No parser has that name
    """
    try:
        return PARSERS[name]
    except KeyError:
        raise ConfigError(f"Invalid config: unknown parser '{name}'") from None


__all__ = ["PARSERS", "ZncParser", "get_parser"]
