from __future__ import annotations

from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthorizationError


class AdminGate:
    """Equality check of a presented admin token against the configured one.

    The configured token is kept only as a salted hash. With no token
    configured, every write is refused.
    """

    def __init__(self, token: Optional[str]):
        token = (token or "").strip()
        self._token_hash = generate_password_hash(token) if token else None

    @property
    def enabled(self) -> bool:
        return self._token_hash is not None

    def require(self, credential: Optional[str]) -> None:
        if not self._token_hash or not credential:
            raise AuthorizationError("Admin token required")
        if not check_password_hash(self._token_hash, credential.strip()):
            raise AuthorizationError("Invalid admin token")
