"""Validation and parsing of the WAMP messages a client receives from a router."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .event import Event
from .types import MessageType

__all__ = [
    "ProtocolError",
    "AbortError",
    "NoTransportError",
    "NoSessionError",
    "Challenge",
    "ErrorInfo",
    "message_code",
    "parse_challenge",
    "parse_abort",
    "parse_error",
    "parse_result",
    "parse_event",
    "parse_invocation",
    "parse_subscribed",
    "parse_unsubscribed",
    "parse_registered",
    "parse_unregistered",
]

log = logging.getLogger(__name__)


class ProtocolError(Exception):
    """A message broke the WAMP protocol or arrived when it should not."""


class AbortError(Exception):
    """The router aborted the session while joining."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class NoTransportError(Exception):
    """No connected transport is attached to the session."""

    def __init__(self, message: str = "no transport attached") -> None:
        super().__init__(message)


class NoSessionError(Exception):
    """The session has not joined a realm."""

    def __init__(self, message: str = "session not joined") -> None:
        super().__init__(message)


@dataclass
class Challenge:
    """An authentication challenge sent by the router."""

    authmethod: str
    challenge: str = ""
    salt: str = ""
    iterations: int = 0
    keylen: int = 0
    channel_id: str = ""


@dataclass
class ErrorInfo:
    """An ERROR reply to one of the client's requests.

    ``error`` is the error URI, followed by ``": <what>"`` when the keyword
    arguments carry a ``what`` entry.
    """

    request_type: MessageType
    request_id: int
    uri: str
    error: str
    details: Dict[str, Any] = field(default_factory=dict)
    arguments: List[Any] = field(default_factory=list)
    kw_arguments: Dict[str, Any] = field(default_factory=dict)


_ERROR_REQUEST_TYPES = frozenset(
    {
        MessageType.CALL,
        MessageType.REGISTER,
        MessageType.UNREGISTER,
        MessageType.PUBLISH,
        MessageType.SUBSCRIBE,
        MessageType.UNSUBSCRIBE,
    }
)


def _is_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_map(value: Any) -> bool:
    return isinstance(value, Mapping)


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _field_is(message: Sequence[Any], index: int, check: Callable[[Any], bool]) -> bool:
    return index < len(message) and check(message[index])


def _require(message: Sequence[Any], index: int, check: Callable[[Any], bool], text: str) -> Any:
    if not _field_is(message, index, check):
        raise ProtocolError(text)
    return message[index]


def _payload(
    message: Sequence[Any], start: int, args_text: str, kwargs_text: str
) -> Tuple[List[Any], Dict[str, Any]]:
    arguments: List[Any] = []
    kw_arguments: Dict[str, Any] = {}
    if len(message) > start:
        arguments = list(_require(message, start, _is_array, args_text))
        if len(message) > start + 1:
            kw_arguments = dict(_require(message, start + 1, _is_map, kwargs_text))
    return arguments, kw_arguments


def message_code(message: Sequence[Any]) -> int:
    """Return the type code of a message.

    Raises ``ProtocolError`` if the message is empty or its code is not a
    non-negative integer.
    """
    if len(message) < 1:
        raise ProtocolError("invalid message structure - missing message code")
    if not _is_id(message[0]):
        raise ProtocolError("invalid message code type - not an integer")
    return message[0]


def _detail_str(details: Mapping, key: str) -> str:
    value = details[key]
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string")
    return value


def _detail_int(details: Mapping, key: str) -> int:
    value = details[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key} must be an integer")
    return value


def _wampcra(details: Mapping) -> Challenge:
    if "challenge" not in details:
        raise ProtocolError("wampcra must always introduce a challenge ( in details )")
    result = Challenge("wampcra", _detail_str(details, "challenge"))
    if "salt" in details:
        result.salt = _detail_str(details, "salt")
        if "iterations" not in details:
            raise ProtocolError(
                "wampcra must always tell a number of iterations when introducing salting ( in details )"
            )
        result.iterations = _detail_int(details, "iterations")
        if "keylen" not in details:
            raise ProtocolError(
                "wampcra must always tell a key length (keylen) when introducing salting ( in details )"
            )
        result.keylen = _detail_int(details, "keylen")
    return result


def _cryptosign(details: Mapping) -> Challenge:
    if "challenge" not in details:
        raise ProtocolError("cryptosign must always introduce a challenge ( in details )")
    result = Challenge("cryptosign", _detail_str(details, "challenge"))
    if "channel_id" in details:
        result.channel_id = _detail_str(details, "channel_id")
    return result


def parse_challenge(message: Sequence[Any]) -> Challenge:
    """Parse ``[CHALLENGE, AuthMethod|string, Extra|dict]``.

    Supports the ``wampcra``, ``ticket`` and ``cryptosign`` methods and raises
    ``ProtocolError`` for any other method or malformed details.
    """
    method = _require(message, 1, _is_str, "CHALLENGE - AuthMethod must be a string")

    if method == "ticket":
        return Challenge("ticket")

    parsers = {"wampcra": _wampcra, "cryptosign": _cryptosign}
    parser = parsers.get(method)
    if parser is None:
        raise ProtocolError(
            "not supported challenge type - can now only handle "
            "'wampcra', 'ticket' and 'cryptosign'"
        )

    details = _require(message, 2, _is_map, "CHALLENGE - Details must be a dictionary")
    try:
        return parser(details)
    except Exception as exc:
        log.debug("failed to parse challenge details")
        if method == "wampcra":
            raise ProtocolError(
                "wampcra authentication: Failed parse challange details"
            ) from exc
        raise ProtocolError(
            "cryptosign authentication: Failed parse challenge details"
        ) from exc


def parse_abort(message: Sequence[Any]) -> str:
    """Parse ``[ABORT, Details|dict, Reason|uri]`` and return the reason URI."""
    if len(message) != 3:
        raise ProtocolError("ABORT - length must be 3")
    _require(message, 1, _is_map, "ABORT - Details must be a dictionary")
    return _require(message, 2, _is_str, "ABORT - REASON must be a string (URI)")


def _what_suffix(kw_arguments: Mapping) -> Optional[str]:
    if not all(isinstance(k, str) and isinstance(v, str) for k, v in kw_arguments.items()):
        log.debug("failed to parse error message keyword arguments")
        return "unknown exception"
    return kw_arguments.get("what")


def parse_error(message: Sequence[Any]) -> ErrorInfo:
    """Parse ``[ERROR, REQUEST.Type|int, REQUEST.Request|id, Details|dict, Error|uri, ...]``."""
    if len(message) < 5 or len(message) > 7:
        raise ProtocolError("invalid ERROR message structure - length must be 5, 6 or 7")

    code = _require(
        message, 1, _is_id,
        "invalid ERROR message structure - REQUEST.Type must be an integer",
    )
    if code not in _ERROR_REQUEST_TYPES:
        raise ProtocolError(
            "invalid ERROR message - ERROR.Type must one of CALL, REGISTER, "
            "UNREGISTER, SUBSCRIBE, UNSUBSCRIBE"
        )
    request_id = _require(
        message, 2, _is_id,
        "invalid ERROR message structure - REQUEST.Request must be an integer",
    )
    details = _require(
        message, 3, _is_map,
        "invalid ERROR message structure - Details must be a dictionary",
    )
    uri = _require(message, 4, _is_str, "invalid ERROR message - Error must be a string (URI)")
    arguments, kw_arguments = _payload(
        message, 5,
        "invalid ERROR message structure - Arguments must be a list",
        "invalid ERROR message structure - ArgumentsKw must be a dictionary",
    )

    error = uri
    if len(message) > 6:
        suffix = _what_suffix(kw_arguments)
        if suffix is not None:
            error = f"{uri}: {suffix}"

    return ErrorInfo(
        request_type=MessageType(code),
        request_id=request_id,
        uri=uri,
        error=error,
        details=dict(details),
        arguments=arguments,
        kw_arguments=kw_arguments,
    )


def parse_result(message: Sequence[Any]) -> Tuple[int, List[Any], Dict[str, Any]]:
    """Parse a RESULT message into ``(request_id, arguments, kw_arguments)``."""
    if len(message) < 3 or len(message) > 5:
        raise ProtocolError("RESULT - length must be 3, 4 or 5")
    request_id = _require(message, 1, _is_id, "RESULT - CALL.Request must be an id")
    _require(message, 2, _is_map, "RESULT - Details must be a dictionary")
    arguments, kw_arguments = _payload(
        message, 3,
        "RESULT - YIELD.Arguments must be a list",
        "RESULT - YIELD.ArgumentsKw must be a dictionary",
    )
    return request_id, arguments, kw_arguments


def parse_event(message: Sequence[Any]) -> Tuple[int, Event]:
    """Parse an EVENT message into ``(subscription_id, event)``."""
    if len(message) < 4 or len(message) > 6:
        raise ProtocolError("EVENT - length must be 4, 5 or 6")
    subscription_id = _require(
        message, 1, _is_id, "EVENT - SUBSCRIBED.Subscription must be an integer"
    )
    _require(message, 2, _is_id, "EVENT - PUBLISHED.Publication must be an id")
    details = _require(message, 3, _is_map, "EVENT - Details must be a dictionary")

    event = Event()
    try:
        event.set_details(details)
    except TypeError as exc:
        raise ProtocolError("EVENT - Details topic must be a string") from exc
    event.arguments, event.kw_arguments = _payload(
        message, 4,
        "EVENT - EVENT.Arguments must be a list",
        "EVENT - EVENT.ArgumentsKw must be a dictionary",
    )
    return subscription_id, event


def parse_invocation(
    message: Sequence[Any],
) -> Tuple[int, int, Dict[str, Any], List[Any], Dict[str, Any]]:
    """Parse an INVOCATION message.

    Returns ``(request_id, registration_id, details, arguments, kw_arguments)``.
    """
    if len(message) < 4 or len(message) > 6:
        raise ProtocolError("INVOCATION message length must be 4, 5 or 6")
    request_id = _require(message, 1, _is_id, "INVOCATION.Request must be an integer")
    registration_id = _require(
        message, 2, _is_id, "INVOCATION.Registration must be an integer"
    )
    details = _require(message, 3, _is_map, "INVOCATION.Details must be a map")
    arguments, kw_arguments = _payload(
        message, 4,
        "INVOCATION.Arguments must be an array/vector",
        "INVOCATION.KwArguments must be a map",
    )
    return request_id, registration_id, dict(details), arguments, kw_arguments


def parse_subscribed(message: Sequence[Any]) -> Tuple[int, int]:
    """Parse ``[SUBSCRIBED, Request|id, Subscription|id]`` into both ids."""
    if len(message) != 3:
        raise ProtocolError("SUBSCRIBED - length must be 3")
    request_id = _require(
        message, 1, _is_id, "SUBSCRIBED - SUBSCRIBED.Request must be an integer"
    )
    subscription_id = _require(
        message, 2, _is_id, "SUBSCRIBED - SUBSCRIBED.Subscription must be an integer"
    )
    return request_id, subscription_id


def parse_unsubscribed(message: Sequence[Any]) -> int:
    """Parse ``[UNSUBSCRIBED, Request|id]`` and return the request id."""
    if len(message) != 2:
        raise ProtocolError("UNSUBSCRIBED - length must be 2")
    return _require(
        message, 1, _is_id, "UNSUBSCRIBED - UNSUBSCRIBED.Request must be an integer"
    )


def parse_registered(message: Sequence[Any]) -> Tuple[int, int]:
    """Parse ``[REGISTERED, Request|id, Registration|id]`` into both ids."""
    if len(message) != 3:
        raise ProtocolError("REGISTERED - length must be 3")
    request_id = _require(
        message, 1, _is_id, "REGISTERED - REGISTERED.Request must be an integer"
    )
    registration_id = _require(
        message, 2, _is_id, "REGISTERED - REGISTERED.Registration must be an integer"
    )
    return request_id, registration_id


def parse_unregistered(message: Sequence[Any]) -> int:
    """Parse ``[UNREGISTERED, Request|id]`` and return the request id."""
    if len(message) != 2:
        raise ProtocolError("UNREGISTERED - length must be 2")
    return _require(
        message, 1, _is_id, "UNREGISTERED - UNREGISTERED.Request must be an integer"
    )