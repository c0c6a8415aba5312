import pytest

from wampsession.event import Event


def test_defaults_are_empty():
    event = Event()
    assert event.number_of_arguments == 0
    assert event.number_of_kw_arguments == 0
    assert event.uri == ""


def test_argument_by_index():
    event = Event(arguments=["hello", 42])
    assert event.argument(0) == "hello"
    assert event.argument(1) == 42
    assert event.number_of_arguments == 2


@pytest.mark.parametrize("index", [2, 5, -1])
def test_argument_out_of_range(index):
    event = Event(arguments=["a", "b"])
    with pytest.raises(IndexError, match="no argument at index"):
        event.argument(index)


def test_argument_when_arguments_not_a_list():
    event = Event(arguments={"a": 1})
    assert event.number_of_arguments == 0
    with pytest.raises(IndexError):
        event.argument(0)


def test_kw_argument_found():
    event = Event(kw_arguments={"id": "abc", "count": 3})
    assert event.kw_argument("id") == "abc"
    assert event.kw_argument("count") == 3
    assert event.number_of_kw_arguments == 2


def test_kw_argument_missing_raises_key_error():
    event = Event(kw_arguments={"id": "abc"})
    with pytest.raises(KeyError, match="name keyword argument doesn't exist"):
        event.kw_argument("name")


def test_kw_argument_ignores_non_string_keys():
    event = Event(kw_arguments={1: "one"})
    with pytest.raises(KeyError):
        event.kw_argument("1")


def test_kw_argument_requires_mapping():
    event = Event(kw_arguments=[1, 2])
    assert event.number_of_kw_arguments == 0
    with pytest.raises(TypeError):
        event.kw_argument("id")
    with pytest.raises(TypeError):
        event.kw_argument_or("id", "fallback")


def test_kw_argument_or_returns_value_or_fallback():
    event = Event(kw_arguments={"id": "abc"})
    assert event.kw_argument_or("id", "") == "abc"
    assert event.kw_argument_or("missing", "fallback") == "fallback"


def test_set_details_takes_topic():
    event = Event()
    event.set_details({"topic": "com.examples.subscriptions.topic1"})
    assert event.uri == "com.examples.subscriptions.topic1"


def test_set_details_without_topic_gives_empty_uri():
    event = Event(uri="old")
    event.set_details({})
    assert event.uri == ""


def test_set_details_rejects_bad_input():
    event = Event()
    with pytest.raises(TypeError):
        event.set_details(["topic"])
    with pytest.raises(TypeError):
        event.set_details({"topic": 5})