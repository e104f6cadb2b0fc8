from __future__ import annotations

from typing import Protocol

from .model import SessionUser


class AuthGateway(Protocol):
    def authenticate(self, email: str, password: str) -> SessionUser:
        """Raise AuthenticationError on bad credentials."""

        raise NotImplementedError
