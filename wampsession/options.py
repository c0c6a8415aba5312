"""Options attached to CALL and PUBLISH messages."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict

__all__ = ["CallOptions", "PublishOptions"]

_ONE_MS = timedelta(milliseconds=1)


def _require_mapping(data: Any) -> Mapping:
    if not isinstance(data, Mapping):
        raise TypeError(f"options must be a mapping, not {type(data).__name__}")
    return data


@dataclass
class CallOptions:
    """Options for a remote procedure call.

    ``timeout`` is the call timeout; zero means no timeout is requested.
    """

    timeout: timedelta = timedelta(0)

    @property
    def timeout_ms(self) -> int:
        """The timeout in whole milliseconds."""
        return self.timeout // _ONE_MS

    def to_dict(self) -> Dict[str, Any]:
        """Return the options as sent on the wire; a zero timeout is omitted."""
        milliseconds = self.timeout_ms
        if milliseconds > 0:
            return {"timeout": milliseconds}
        return {}

    @classmethod
    def from_dict(cls, data: Mapping) -> "CallOptions":
        """Build options from a wire dictionary.

        Raises ``TypeError`` if the data is not a mapping or the timeout is not
        an integer, and ``ValueError`` if the timeout is negative.
        """
        options = cls()
        data = _require_mapping(data)
        if "timeout" in data:
            value = data["timeout"]
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError("timeout must be an unsigned integer")
            if value < 0:
                raise ValueError("timeout must not be negative")
            options.timeout = timedelta(milliseconds=value)
        return options


@dataclass
class PublishOptions:
    """Options for publishing an event.

    ``exclude_me`` defaults to true; only a false value is sent on the wire.
    """

    exclude_me: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Return the options as sent on the wire."""
        if not self.exclude_me:
            return {"exclude_me": False}
        return {}

    @classmethod
    def from_dict(cls, data: Mapping) -> "PublishOptions":
        """Build options from a wire dictionary.

        Raises ``TypeError`` if the data is not a mapping or ``exclude_me`` is
        not a boolean.
        """
        options = cls()
        data = _require_mapping(data)
        if "exclude_me" in data:
            value = data["exclude_me"]
            if not isinstance(value, bool):
                raise TypeError("exclude_me must be a boolean")
            options.exclude_me = value
        return options