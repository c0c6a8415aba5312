"""Core WAMP value types: message codes, authentication replies and registrations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Dict

__all__ = [
    "MessageType",
    "Authenticate",
    "Registration",
    "Procedure",
    "ProvideOptions",
    "message_type_name",
]


class MessageType(IntEnum):
    """WAMP message type codes."""

    HELLO = 1
    WELCOME = 2
    ABORT = 3
    CHALLENGE = 4
    AUTHENTICATE = 5
    GOODBYE = 6
    HEARTBEAT = 7
    ERROR = 8
    PUBLISH = 16
    PUBLISHED = 17
    SUBSCRIBE = 32
    SUBSCRIBED = 33
    UNSUBSCRIBE = 34
    UNSUBSCRIBED = 35
    EVENT = 36
    CALL = 48
    CANCEL = 49
    RESULT = 50
    REGISTER = 64
    REGISTERED = 65
    UNREGISTER = 66
    UNREGISTERED = 67
    INVOCATION = 68
    INTERRUPT = 69
    YIELD = 70

    def __str__(self) -> str:
        return message_type_name(self)


def message_type_name(code: int) -> str:
    """Return the lower-case name of a message type code, or ``"unknown"``."""
    try:
        return MessageType(code).name.lower()
    except ValueError:
        return "unknown"


@dataclass(frozen=True)
class Authenticate:
    """A signature answering an authentication challenge."""

    signature: str = ""


@dataclass(frozen=True)
class Registration:
    """A procedure registration held by the router."""

    id: int = 0


# A procedure is called with an invocation object and answers through it.
Procedure = Callable[[Any], None]

# Options sent along with a REGISTER message.
ProvideOptions = Dict[str, Any]