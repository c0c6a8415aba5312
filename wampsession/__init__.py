"""Building blocks for a WAMP client: message types, options, events, builders and parsers."""

__version__ = "0.1.0"

__all__ = [
    "event",
    "messages",
    "options",
    "parameters",
    "protocol",
    "requests",
    "types",
]