"""Builders for the WAMP messages a client sends to a router.

Every builder returns the message as a list, ready for serialization.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional

from .types import MessageType

__all__ = [
    "GOODBYE_AND_OUT",
    "RUNTIME_ERROR",
    "client_roles",
    "hello",
    "goodbye",
    "authenticate",
    "publish",
    "subscribe",
    "unsubscribe",
    "call",
    "register",
    "unregister",
    "yield_result",
    "invocation_error",
]

GOODBYE_AND_OUT = "wamp.error.goodbye_and_out"
RUNTIME_ERROR = "wamp.error.runtime_error"

Message = List[Any]


def client_roles() -> Dict[str, Any]:
    """Return the roles and features this client announces in HELLO."""
    return {
        "caller": {"features": {"call_timeout": True}},
        "callee": {"features": {"call_timeout": True}},
        "publisher": {},
        "subscriber": {},
    }


def _options(options: Any) -> Dict[str, Any]:
    """Turn an options object, mapping or ``None`` into a wire dictionary."""
    if options is None:
        return {}
    if isinstance(options, Mapping):
        return dict(options)
    to_dict = getattr(options, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"unsupported options type: {type(options).__name__}")


def _with_payload(
    message: Message,
    arguments: Optional[Iterable[Any]],
    kw_arguments: Optional[Mapping],
) -> Message:
    """Append positional and keyword arguments where they are given."""
    if kw_arguments is not None:
        if not isinstance(kw_arguments, Mapping):
            raise TypeError("keyword arguments must be a mapping")
        message.append([] if arguments is None else list(arguments))
        message.append(dict(kw_arguments))
    elif arguments is not None:
        message.append(list(arguments))
    return message


def hello(
    realm: str,
    authentication_methods: Iterable[str] = (),
    authentication_id: str = "",
    authentication_extra: Optional[Mapping] = None,
) -> Message:
    """Build ``[HELLO, Realm|uri, Details|dict]``.

    ``authextra`` is only included when the extra mapping is not empty.
    """
    details: Dict[str, Any] = {
        "roles": client_roles(),
        "authmethods": list(authentication_methods),
        "authid": authentication_id,
    }
    if authentication_extra:
        details["authextra"] = dict(authentication_extra)
    return [int(MessageType.HELLO), realm, details]


def goodbye(reason: str) -> Message:
    """Build ``[GOODBYE, Details|dict, Reason|uri]`` with empty details."""
    return [int(MessageType.GOODBYE), {}, reason]


def authenticate(signature: str) -> Message:
    """Build ``[AUTHENTICATE, Signature|string, Extra|dict]`` with empty extra."""
    return [int(MessageType.AUTHENTICATE), signature, {}]


def publish(
    request_id: int,
    topic: str,
    options: Any = None,
    arguments: Optional[Iterable[Any]] = None,
    kw_arguments: Optional[Mapping] = None,
) -> Message:
    """Build ``[PUBLISH, Request|id, Options|dict, Topic|uri, ...]``."""
    message = [int(MessageType.PUBLISH), request_id, _options(options), topic]
    return _with_payload(message, arguments, kw_arguments)


def subscribe(request_id: int, topic: str, options: Any = None) -> Message:
    """Build ``[SUBSCRIBE, Request|id, Options|dict, Topic|uri]``."""
    return [int(MessageType.SUBSCRIBE), request_id, _options(options), topic]


def unsubscribe(request_id: int, subscription_id: int) -> Message:
    """Build ``[UNSUBSCRIBE, Request|id, SUBSCRIBED.Subscription|id]``."""
    return [int(MessageType.UNSUBSCRIBE), request_id, subscription_id]


def call(
    request_id: int,
    procedure: str,
    options: Any = None,
    arguments: Optional[Iterable[Any]] = None,
    kw_arguments: Optional[Mapping] = None,
) -> Message:
    """Build ``[CALL, Request|id, Options|dict, Procedure|uri, ...]``."""
    message = [int(MessageType.CALL), request_id, _options(options), procedure]
    return _with_payload(message, arguments, kw_arguments)


def register(request_id: int, procedure: str, options: Any = None) -> Message:
    """Build ``[REGISTER, Request|id, Options|dict, Procedure|uri]``."""
    return [int(MessageType.REGISTER), request_id, _options(options), procedure]


def unregister(request_id: int, registration_id: int) -> Message:
    """Build ``[UNREGISTER, Request|id, REGISTERED.Registration|id]``."""
    return [int(MessageType.UNREGISTER), request_id, registration_id]


def yield_result(
    request_id: int,
    arguments: Optional[Iterable[Any]] = None,
    kw_arguments: Optional[Mapping] = None,
) -> Message:
    """Build ``[YIELD, INVOCATION.Request|id, Options|dict, ...]``."""
    message = [int(MessageType.YIELD), request_id, {}]
    return _with_payload(message, arguments, kw_arguments)


def invocation_error(
    request_id: int,
    error: str = RUNTIME_ERROR,
    arguments: Optional[Iterable[Any]] = None,
    kw_arguments: Optional[Mapping] = None,
) -> Message:
    """Build ``[ERROR, INVOCATION, Request|id, Details|dict, Error|uri, ...]``."""
    message = [
        int(MessageType.ERROR),
        int(MessageType.INVOCATION),
        request_id,
        {},
        error,
    ]
    return _with_payload(message, arguments, kw_arguments)