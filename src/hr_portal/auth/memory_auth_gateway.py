from __future__ import annotations

from typing import Iterable

from werkzeug.security import check_password_hash

from ..core.exceptions import AuthenticationError
from .model import LocalAccount, SessionUser
from .repository import AuthGateway


class InMemoryAuthGateway(AuthGateway):
    def __init__(self, accounts: Iterable[LocalAccount]):
        self._by_email = {a.email.lower(): a for a in accounts}

    def authenticate(self, email: str, password: str) -> SessionUser:
        account = self._by_email.get(email.strip().lower())
        if not account:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(account.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME'
            ok = False
        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(user_id=account.user_id, email=account.email, role=account.role)
