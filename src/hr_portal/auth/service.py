from __future__ import annotations

import logging

from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from .model import SessionUser
from .repository import AuthGateway

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, gateway: AuthGateway):
        self._gateway = gateway

    def login(self, email: str, password: str) -> SessionUser:
        email = require_non_empty(email, "email")
        if not password or not isinstance(password, str):
            raise ValidationError("password is required", field="password")
        user = self._gateway.authenticate(email, password)
        logger.info("User %s logged in as %s", user.user_id, user.role.value)
        return user
