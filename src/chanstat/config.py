"""Configuration file loading and validation.

A run is described by a JSON file (default: ./config.json):

    {
        "parser": {"name": "znc", "path": "logs/"},
        "collectors": {"eventcount": true, "sentiments": {"lexicon": "lexicon.txt"}},
        "writer": {"name": "json", "target": "out/", "spacing": 2},
        "modes": {"chanmodes": "beI,k,l,imnpst", "prefix": "(ov)@+"}
    }

Relative paths are resolved against the directory holding the config file.
"""

import json
import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .parsers import PARSERS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "config.json"


class ParserConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    path: Path
    channel: str | None = None

    @field_validator("name")
    @classmethod
    def _known_parser(cls, name: str) -> str:
        if name not in PARSERS:
            raise ValueError(f"unknown parser '{name}'")
        return name


class SentimentConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    lexicon: Path


class CollectorsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    eventcount: bool = True
    sentiments: SentimentConfig | None = None


class WriterConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Literal["json"] = "json"
    target: Path
    spacing: int | None = Field(default=None, ge=0)


class ModesConfig(BaseModel):
    """Available channel modes, in ISUPPORT CHANMODES/PREFIX syntax."""

    model_config = ConfigDict(extra="forbid")

    chanmodes: str = "beI,k,l,imnpst"
    prefix: str = "(ov)@+"


class Config(BaseModel):
    model_config = ConfigDict(extra="forbid")

    parser: ParserConfig
    collectors: CollectorsConfig = Field(default_factory=CollectorsConfig)
    writer: WriterConfig
    modes: ModesConfig = Field(default_factory=ModesConfig)

    def relative_to(self, base: Path) -> "Config":
        """Copy of this config with relative paths anchored at `base`."""
        def anchor(path: Path) -> Path:
            return path if path.is_absolute() else base / path

        parser = self.parser.model_copy(update={"path": anchor(self.parser.path)})
        writer = self.writer.model_copy(update={"target": anchor(self.writer.target)})
        collectors = self.collectors
        if collectors.sentiments is not None:
            sentiments = collectors.sentiments.model_copy(
                update={"lexicon": anchor(collectors.sentiments.lexicon)}
            )
            collectors = collectors.model_copy(update={"sentiments": sentiments})
        return self.model_copy(update={"parser": parser, "writer": writer, "collectors": collectors})


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"])
        msg = err["msg"].removeprefix("Value error, ")
        parts.append(f"'{loc}' {msg}" if loc else msg)
    return "; ".join(parts)


def validate_config(data: object) -> Config:
    """Validate an already-decoded config object.

    Raises:
        ConfigError: With an "Invalid config: ..." message
    """
    if not isinstance(data, dict):
        raise ConfigError("Invalid config (must be an object)")
    if "parser" not in data:
        raise ConfigError("Invalid config: Missing 'parser' block")
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config: {_describe(e)}") from e


def resolve_config_path(path: Path | str | None = None) -> Path:
    """The config file to use: `path` if given, else config.json in the cwd."""
    if path is None:
        return Path.cwd() / DEFAULT_CONFIG_NAME
    return Path(path)


def load_config(path: Path | str | None = None) -> Config:
    """Read, parse and validate a config file.

    Raises:
        ConfigError: The file is missing, unreadable, not JSON, or invalid
    """
    config_path = resolve_config_path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        if path is None:
            raise ConfigError(
                f"Could not find a config.json in {Path.cwd()}. "
                "Please see the README for instructions on creating one."
            ) from e
        raise ConfigError(
            f"Unable to read config file '{path}' (does it exist and is it accessible?)"
        ) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Error trying to read config file '{config_path}': {e}") from e

    config = validate_config(data).relative_to(config_path.resolve().parent)
    logger.debug(f"Loaded config from {config_path}")
    return config
