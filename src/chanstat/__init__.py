"""chanstat - IRC channel log replay and statistics."""

__version__ = "0.1.0"
