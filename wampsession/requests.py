"""Pending requests awaiting a reply from the router."""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field

from .types import Procedure, Registration

__all__ = ["RegisterRequest"]


@dataclass
class RegisterRequest:
    """An outstanding REGISTER request: the procedure and the future registration."""

    procedure: Procedure | None = None
    response: "Future[Registration]" = field(default_factory=Future)

    def set_response(self, registration: Registration) -> None:
        """Resolve the request with the registration the router assigned.

        Raises ``concurrent.futures.InvalidStateError`` if already resolved.
        """
        self.response.set_result(registration)