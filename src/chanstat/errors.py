"""Exception types raised by chanstat."""


class ChanstatError(Exception):
    """Base class for all chanstat errors."""


class ConfigError(ChanstatError, ValueError):
    """The configuration file or one of its blocks is invalid."""


class ModeConfigError(ChanstatError, ValueError):
    """Available modes could not be (re)configured."""


class LexiconError(ConfigError):
    """A sentiment lexicon contained no usable lines."""
