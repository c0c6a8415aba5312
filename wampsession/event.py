"""Events delivered to subscription handlers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, TypeVar

__all__ = ["Event", "EventHandler"]

T = TypeVar("T")

_MISSING = object()


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


@dataclass
class Event:
    """An event published on a topic.

    ``arguments`` and ``kw_arguments`` hold what the publisher sent; ``uri``
    is the topic the event was published to, which matters for prefix and
    wildcard subscriptions.
    """

    arguments: List[Any] = field(default_factory=list)
    kw_arguments: Dict[str, Any] = field(default_factory=dict)
    uri: str = ""

    @property
    def number_of_arguments(self) -> int:
        """The number of positional arguments, or 0 if they are not a list."""
        return len(self.arguments) if _is_array(self.arguments) else 0

    @property
    def number_of_kw_arguments(self) -> int:
        """The number of keyword arguments, or 0 if they are not a mapping."""
        return len(self.kw_arguments) if isinstance(self.kw_arguments, Mapping) else 0

    def argument(self, index: int) -> Any:
        """Return the positional argument at ``index``.

        Raises ``IndexError`` if there is no argument at that index.
        """
        if not _is_array(self.arguments) or not 0 <= index < len(self.arguments):
            raise IndexError(f"no argument at index {index}")
        return self.arguments[index]

    def _lookup(self, key: str) -> Any:
        if not isinstance(self.kw_arguments, Mapping):
            raise TypeError("keyword arguments are not a mapping")
        if not isinstance(key, str):
            return _MISSING
        for name, value in self.kw_arguments.items():
            if isinstance(name, str) and name == key:
                return value
        return _MISSING

    def kw_argument(self, key: str) -> Any:
        """Return the keyword argument named ``key``.

        Raises ``TypeError`` if the keyword arguments are not a mapping and
        ``KeyError`` if no such keyword argument exists.
        """
        value = self._lookup(key)
        if value is _MISSING:
            raise KeyError(f"{key} keyword argument doesn't exist")
        return value

    def kw_argument_or(self, key: str, fallback: T) -> Any:
        """Return the keyword argument named ``key``, or ``fallback`` if absent.

        Raises ``TypeError`` if the keyword arguments are not a mapping.
        """
        value = self._lookup(key)
        return fallback if value is _MISSING else value

    def set_details(self, details: Mapping) -> None:
        """Take the event URI from the ``topic`` entry of the event details.

        Raises ``TypeError`` if the details are not a mapping or the topic is
        not a string.
        """
        if not isinstance(details, Mapping):
            raise TypeError("event details must be a mapping")
        topic = details.get("topic", "")
        if not isinstance(topic, str):
            raise TypeError("event topic must be a string")
        self.uri = topic


# A subscription handler is called with each event received on the topic.
EventHandler = Any