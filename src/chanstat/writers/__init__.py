"""Output writers for collected statistics."""

from .jsonfile import JsonFileWriter

WRITERS = {
    "json": JsonFileWriter,
}

__all__ = ["JsonFileWriter", "WRITERS"]
