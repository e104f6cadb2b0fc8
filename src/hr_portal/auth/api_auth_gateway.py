from __future__ import annotations

from ..api.client import ApiClient
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ExternalServiceError
from .model import SessionUser
from .repository import AuthGateway


class ApiAuthGateway(AuthGateway):
    """Exchanges credentials for a bearer token at the backend's login endpoint."""

    def __init__(self, client: ApiClient):
        self._client = client

    def authenticate(self, email: str, password: str) -> SessionUser:
        try:
            body = self._client.post("/user/login", json={"email": email, "password": password})
        except ExternalServiceError as e:
            if e.status_code is not None and 400 <= e.status_code < 500:
                raise AuthenticationError(str(e) or "Login failed") from e
            raise

        details = body.get("details") or {}
        token = details.get("token")
        if not token:
            raise ExternalServiceError("Login response did not include a token")

        role = Role.ADMIN if str(details.get("role") or "").lower() == Role.ADMIN.value else Role.USER
        user_id = str(details.get("_id") or details.get("userId") or details.get("id") or email)
        return SessionUser(user_id=user_id, email=email, role=role, token=token)
