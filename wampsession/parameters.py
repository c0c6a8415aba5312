"""Command-line parameters for connecting to a WAMP router."""

from __future__ import annotations

import argparse
import ipaddress
import sys
from dataclasses import dataclass
from typing import NoReturn, Sequence, Tuple

__all__ = [
    "Parameters",
    "parse_parameters",
    "DEFAULT_REALM",
    "DEFAULT_RAWSOCKET_IP",
    "DEFAULT_RAWSOCKET_PORT",
    "DEFAULT_UDS_PATH",
]

DEFAULT_RAWSOCKET_IP = "127.0.0.1"
DEFAULT_REALM = "realm1"
DEFAULT_RAWSOCKET_PORT = 8000
DEFAULT_UDS_PATH = "/tmp/crossbar.sock"


@dataclass
class Parameters:
    """Connection settings: debug flag, realm, raw-socket endpoint and socket path."""

    debug: bool = False
    realm: str = DEFAULT_REALM
    rawsocket_ip: str = DEFAULT_RAWSOCKET_IP
    rawsocket_port: int = DEFAULT_RAWSOCKET_PORT
    uds_path: str = DEFAULT_UDS_PATH

    def __post_init__(self) -> None:
        # Raises ValueError for a malformed address.
        self.rawsocket_ip = str(ipaddress.ip_address(self.rawsocket_ip))
        if not 0 <= self.rawsocket_port <= 0xFFFF:
            raise ValueError(f"port out of range: {self.rawsocket_port}")

    @property
    def rawsocket_endpoint(self) -> Tuple[str, int]:
        """The (address, port) pair of the raw-socket router endpoint."""
        return (self.rawsocket_ip, self.rawsocket_port)


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        sys.stderr.write(f"error: {message}\n\n")
        sys.stderr.write(self.format_help())
        sys.stderr.write("\n")
        raise SystemExit(-1)


def _port(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {text!r}") from None
    if not 0 <= value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"port out of range: {text!r}")
    return value


def _build_parser() -> _Parser:
    parser = _Parser(prog="wampsession", description="options", add_help=False)
    parser.add_argument("--help", action="store_true", help="Display this help message")
    parser.add_argument(
        "-d", "--debug", action="store_true", default=False, help="Enable debug logging."
    )
    parser.add_argument(
        "-r", "--realm", default=DEFAULT_REALM,
        help="The realm to join on the wamp router.",
    )
    parser.add_argument(
        "-u", "--uds-path", default=DEFAULT_UDS_PATH,
        help="The unix domain socket path the wamp router is listening for connections on.",
    )
    parser.add_argument(
        "-h", "--rawsocket-ip", default=DEFAULT_RAWSOCKET_IP,
        help="The ip address of the host running the wamp router.",
    )
    parser.add_argument(
        "-p", "--rawsocket-port", type=_port, default=DEFAULT_RAWSOCKET_PORT,
        help="The port that the wamp router is listening for connections on.",
    )
    return parser


def parse_parameters(argv: Sequence[str] | None = None) -> Parameters:
    """Parse command-line arguments into :class:`Parameters`.

    ``--help`` prints usage and exits with status 0; a malformed command line
    prints an error with usage and exits with status -1. A malformed IP
    address raises ``ValueError``.
    """
    parser = _build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else list(argv))
    if args.help:
        sys.stdout.write("Example Parameters\n")
        sys.stdout.write(parser.format_help())
        sys.stdout.write("\n")
        raise SystemExit(0)
    return Parameters(
        debug=args.debug,
        realm=args.realm,
        rawsocket_ip=args.rawsocket_ip,
        rawsocket_port=args.rawsocket_port,
        uds_path=args.uds_path,
    )