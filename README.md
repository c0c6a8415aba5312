# wampsession

Building blocks for a WAMP client, in plain Python with no third-party
dependencies. The package builds the protocol messages a client sends,
validates and parses the messages a router sends back, and provides the
small value types, options and event objects that go with them.

## Modules

| Module                   | Contents                                                              |
|--------------------------|-----------------------------------------------------------------------|
| `wampsession.types`      | `MessageType`, `message_type_name`, `Authenticate`, `Registration`     |
| `wampsession.requests`   | `RegisterRequest`, a pending REGISTER holding a future `Registration`  |
| `wampsession.options`    | `CallOptions` and `PublishOptions` with wire-dictionary conversion     |
| `wampsession.parameters` | `Parameters` and `parse_parameters` for connection settings            |
| `wampsession.event`      | `Event`, the payload of a received EVENT                               |
| `wampsession.messages`   | builders for HELLO, GOODBYE, AUTHENTICATE, PUBLISH, CALL and others    |
| `wampsession.protocol`   | parsers for router messages and the protocol exceptions               |

## Message types

```python
from wampsession.types import MessageType, message_type_name

message_type_name(MessageType.CALL)   # "call"
message_type_name(999)                # "unknown"
str(MessageType.YIELD)                # "yield"
```

## Options

Options only carry what differs from the defaults. A call without a timeout
gives an empty dictionary, and publish options only mention `exclude_me`
when it is switched off:

```python
from datetime import timedelta
from wampsession.options import CallOptions, PublishOptions

CallOptions(timeout=timedelta(milliseconds=2500)).to_dict()   # {"timeout": 2500}
CallOptions().to_dict()                                        # {}
PublishOptions(exclude_me=False).to_dict()                     # {"exclude_me": False}
PublishOptions.from_dict({}).exclude_me                        # True
```

`from_dict` raises `TypeError` for values of the wrong type and, for
`CallOptions`, `ValueError` for a negative timeout.

## Building messages

Each builder in `wampsession.messages` returns the message as a list ready
for serialization. Options may be an options object, a mapping or `None`.

```python
from wampsession import messages
from wampsession.options import CallOptions

hello = messages.hello("realm1", ["cryptosign"], "", {"pubkey": "placeholder"})
call = messages.call(1, "com.examples.calculator.add2", CallOptions(), [2, 3], None)
bye = messages.goodbye(messages.GOODBYE_AND_OUT)
```

The HELLO details announce the `caller`, `callee`, `publisher` and
`subscriber` roles (see `client_roles()`); `authextra` is only included
when it is not empty. `yield_result` and `invocation_error` build the
replies a callee sends for an INVOCATION.

## Parsing what the router sends

`message_code` reads the type code of a received message, and the
`parse_*` functions in `wampsession.protocol` check a message's shape and
return its parts. A malformed message raises `ProtocolError`:

```python
from wampsession.protocol import ProtocolError, parse_error, parse_event

try:
    info = parse_error(received)
    print(info.request_type, info.request_id, info.error)
except ProtocolError as exc:
    print("malformed ERROR:", exc)

subscription_id, event = parse_event(
    [36, 5, 9, {"topic": "com.example.topic"}, ["hello"], {"n": 1}]
)
event.uri                    # "com.example.topic"
event.argument(0)            # "hello"
event.kw_argument_or("m", 0) # 0
```

`parse_challenge` understands the `wampcra`, `ticket` and `cryptosign`
methods and returns a `Challenge`. `AbortError`, `NoTransportError` and
`NoSessionError` are provided for code that drives a session.

## Connection settings

`parse_parameters` reads `--debug/-d`, `--realm/-r` (default `realm1`),
`--uds-path/-u` (default `/tmp/crossbar.sock`), `--rawsocket-ip/-h`
(default `127.0.0.1`) and `--rawsocket-port/-p` (default `8000`). `--help`
prints usage and exits; a malformed command line exits with an error.

```python
from wampsession.parameters import parse_parameters

params = parse_parameters(["--realm", "realm2", "-d"])
params.rawsocket_endpoint    # ("127.0.0.1", 8000)
```

## What this package does not do

It has no session object, no transport and no networking: it does not
connect to a router, dispatch incoming messages, track pending calls and
subscriptions, or run procedures. It does not compute authentication
signatures either; answering a challenge means producing an `Authenticate`
yourself and sending `messages.authenticate(...)`. Nor does it serialize
messages to bytes. It installs no command-line program.