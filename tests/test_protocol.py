import pytest

from wampsession.protocol import (
    AbortError,
    Challenge,
    ProtocolError,
    message_code,
    parse_abort,
    parse_challenge,
    parse_error,
    parse_event,
    parse_invocation,
    parse_registered,
    parse_result,
    parse_subscribed,
    parse_unregistered,
    parse_unsubscribed,
)
from wampsession.types import MessageType


def test_message_code_returns_code():
    assert message_code([MessageType.WELCOME, 5, {}]) == MessageType.WELCOME


def test_message_code_empty():
    with pytest.raises(ProtocolError, match="missing message code"):
        message_code([])


@pytest.mark.parametrize("code", ["2", -1, True, 1.5])
def test_message_code_not_integer(code):
    with pytest.raises(ProtocolError, match="not an integer"):
        message_code([code])


def test_challenge_ticket():
    assert parse_challenge([4, "ticket", {}]) == Challenge("ticket")


def test_challenge_wampcra_salted():
    details = {"challenge": "abc", "salt": "pepper", "iterations": 100, "keylen": 32}
    result = parse_challenge([4, "wampcra", details])
    assert result.authmethod == "wampcra"
    assert result.challenge == "abc"
    assert result.salt == "pepper"
    assert result.iterations == 100
    assert result.keylen == 32


def test_challenge_wampcra_unsalted():
    result = parse_challenge([4, "wampcra", {"challenge": "abc"}])
    assert (result.salt, result.iterations, result.keylen) == ("", 0, 0)


@pytest.mark.parametrize(
    "details",
    [
        {},
        {"challenge": "abc", "salt": "pepper", "keylen": 32},
        {"challenge": "abc", "salt": "pepper", "iterations": 10},
        {"challenge": 5},
    ],
)
def test_challenge_wampcra_bad_details(details):
    with pytest.raises(ProtocolError, match="wampcra authentication"):
        parse_challenge([4, "wampcra", details])


def test_challenge_details_not_map():
    with pytest.raises(ProtocolError, match="Details must be a dictionary"):
        parse_challenge([4, "cryptosign", []])


def test_challenge_cryptosign_with_channel():
    result = parse_challenge([4, "cryptosign", {"challenge": "ff00", "channel_id": "ch"}])
    assert result.challenge == "ff00"
    assert result.channel_id == "ch"


def test_challenge_cryptosign_missing_challenge():
    with pytest.raises(ProtocolError, match="cryptosign authentication"):
        parse_challenge([4, "cryptosign", {}])


def test_challenge_unsupported():
    with pytest.raises(ProtocolError, match="not supported challenge type"):
        parse_challenge([4, "scram", {}])


def test_abort_reason():
    assert parse_abort([3, {}, "wamp.error.no_such_realm"]) == "wamp.error.no_such_realm"


def test_abort_error_carries_reason():
    error = AbortError("wamp.error.no_such_realm")
    assert error.reason == "wamp.error.no_such_realm"
    assert str(error) == "wamp.error.no_such_realm"


@pytest.mark.parametrize(
    "message, text",
    [
        ([3, {}], "length must be 3"),
        ([3, [], "x"], "Details must be a dictionary"),
        ([3, {}, 1], "REASON must be a string"),
    ],
)
def test_abort_invalid(message, text):
    with pytest.raises(ProtocolError, match=text):
        parse_abort(message)


def test_error_basic():
    info = parse_error([8, MessageType.CALL, 7, {}, "wamp.error.no_such_procedure"])
    assert info.request_type is MessageType.CALL
    assert info.request_id == 7
    assert info.error == "wamp.error.no_such_procedure"
    assert info.arguments == []


def test_error_with_what():
    info = parse_error([8, 48, 7, {}, "wamp.error.runtime_error", [], {"what": "boom"}])
    assert info.uri == "wamp.error.runtime_error"
    assert info.error == "wamp.error.runtime_error: boom"


def test_error_non_string_kwargs():
    info = parse_error([8, 48, 7, {}, "wamp.error.runtime_error", [], {"what": 1}])
    assert info.error == "wamp.error.runtime_error: unknown exception"


def test_error_kwargs_without_what_keeps_uri():
    info = parse_error([8, 64, 2, {}, "wamp.error.x", [1], {"other": "y"}])
    assert info.error == "wamp.error.x"
    assert info.kw_arguments == {"other": "y"}
    assert info.arguments == [1]


@pytest.mark.parametrize(
    "message, text",
    [
        ([8, 48, 1, {}], "length must be 5, 6 or 7"),
        ([8, "48", 1, {}, "e"], "REQUEST.Type must be an integer"),
        ([8, 68, 1, {}, "e"], "ERROR.Type must one of"),
        ([8, 48, "1", {}, "e"], "REQUEST.Request must be an integer"),
        ([8, 48, 1, [], "e"], "Details must be a dictionary"),
        ([8, 48, 1, {}, 5], "Error must be a string"),
        ([8, 48, 1, {}, "e", {}], "Arguments must be a list"),
        ([8, 48, 1, {}, "e", [], []], "ArgumentsKw must be a dictionary"),
    ],
)
def test_error_invalid(message, text):
    with pytest.raises(ProtocolError, match=text):
        parse_error(message)


def test_result_payload():
    assert parse_result([50, 3, {}, [1, 2], {"k": "v"}]) == (3, [1, 2], {"k": "v"})


def test_result_without_payload():
    assert parse_result([50, 3, {}]) == (3, [], {})


@pytest.mark.parametrize(
    "message, text",
    [
        ([50, 3], "length must be 3, 4 or 5"),
        ([50, -3, {}], "CALL.Request must be an id"),
        ([50, 3, []], "Details must be a dictionary"),
        ([50, 3, {}, {}], "YIELD.Arguments must be a list"),
        ([50, 3, {}, [], []], "YIELD.ArgumentsKw must be a dictionary"),
    ],
)
def test_result_invalid(message, text):
    with pytest.raises(ProtocolError, match=text):
        parse_result(message)


def test_event_parsed():
    subscription_id, event = parse_event(
        [36, 11, 22, {"topic": "com.example.topic"}, ["hello"], {"n": 1}]
    )
    assert subscription_id == 11
    assert event.uri == "com.example.topic"
    assert event.argument(0) == "hello"
    assert event.kw_argument("n") == 1


def test_event_without_payload():
    _, event = parse_event([36, 11, 22, {}])
    assert event.number_of_arguments == 0
    assert event.uri == ""


@pytest.mark.parametrize(
    "message, text",
    [
        ([36, 1, 2], "length must be 4, 5 or 6"),
        ([36, "1", 2, {}], "SUBSCRIBED.Subscription must be an integer"),
        ([36, 1, None, {}], "PUBLISHED.Publication must be an id"),
        ([36, 1, 2, []], "Details must be a dictionary"),
        ([36, 1, 2, {}, {}], "EVENT.Arguments must be a list"),
        ([36, 1, 2, {}, [], []], "EVENT.ArgumentsKw must be a dictionary"),
    ],
)
def test_event_invalid(message, text):
    with pytest.raises(ProtocolError, match=text):
        parse_event(message)


def test_invocation_parsed():
    result = parse_invocation([68, 5, 9, {"procedure": "com.example.add"}, [1, 2]])
    assert result == (5, 9, {"procedure": "com.example.add"}, [1, 2], {})


@pytest.mark.parametrize(
    "message, text",
    [
        ([68, 5, 9], "length must be 4, 5 or 6"),
        ([68, "5", 9, {}], "INVOCATION.Request must be an integer"),
        ([68, 5, "9", {}], "INVOCATION.Registration must be an integer"),
        ([68, 5, 9, []], "INVOCATION.Details must be a map"),
        ([68, 5, 9, {}, "x"], "INVOCATION.Arguments must be an array"),
        ([68, 5, 9, {}, [], "x"], "INVOCATION.KwArguments must be a map"),
    ],
)
def test_invocation_invalid(message, text):
    with pytest.raises(ProtocolError, match=text):
        parse_invocation(message)


def test_subscribed_and_registered():
    assert parse_subscribed([33, 4, 40]) == (4, 40)
    assert parse_registered([65, 6, 60]) == (6, 60)


def test_unsubscribed_and_unregistered():
    assert parse_unsubscribed([35, 4]) == 4
    assert parse_unregistered([67, 6]) == 6


@pytest.mark.parametrize(
    "parser, message, text",
    [
        (parse_subscribed, [33, 4], "SUBSCRIBED - length must be 3"),
        (parse_subscribed, [33, 4, "x"], "SUBSCRIBED.Subscription must be an integer"),
        (parse_registered, [65, "x", 1], "REGISTERED.Request must be an integer"),
        (parse_registered, [65, 1, "x"], "REGISTERED.Registration must be an integer"),
        (parse_unsubscribed, [35, 1, 2], "UNSUBSCRIBED - length must be 2"),
        (parse_unregistered, [67, "x"], "UNREGISTERED.Request must be an integer"),
    ],
)
def test_ack_invalid(parser, message, text):
    with pytest.raises(ProtocolError, match=text):
        parser(message)