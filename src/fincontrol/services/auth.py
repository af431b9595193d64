"""Registration, login and bearer-token verification."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

from ..domain.entities import TokenIdentity
from ..domain.repositories import UserRepository
from ..errors import AuthError, ForbiddenError, ValidationError
from ..logging_config import get_logger

logger = get_logger("auth")

BAD_CREDENTIALS = "Credenciales incorrectas."
MISSING_FIELDS = "Usuario y contraseña son requeridos."


def token_from_header(header_value: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization`` header.

    Returns None when the header is absent or empty. A header without a
    second space-separated part yields an empty token, which ``verify``
    rejects as malformed rather than missing.
    """

    if not header_value:
        return None
    parts = header_value.split(" ")
    return parts[1] if len(parts) > 1 else ""


class AuthService:
    """Hashes passwords with argon2 and signs HS256 tokens with PyJWT."""

    def __init__(
        self,
        users: UserRepository,
        *,
        secret_key: str,
        token_ttl: timedelta = timedelta(hours=1),
        algorithm: str = "HS256",
        hasher: PasswordHasher | None = None,
    ) -> None:
        self.users = users
        self.secret_key = secret_key
        self.token_ttl = token_ttl
        self.algorithm = algorithm
        self.hasher = hasher or PasswordHasher()

    def register(self, username: str, password: str) -> int:
        """Create a user and return its id."""

        username = (username or "").strip()
        if not username or not password:
            raise ValidationError(MISSING_FIELDS)
        user = self.users.create(username, self.hasher.hash(password))
        logger.info("User registered", extra={"user_id": user.id, "username": username})
        return user.id  # type: ignore[return-value]

    def login(self, username: str, password: str) -> str:
        """Return a signed token; unknown user and wrong password fail identically."""

        username = (username or "").strip()
        user = self.users.get_by_username(username) if username else None
        if user is None:
            logger.info("Login rejected", extra={"username": username})
            raise AuthError(BAD_CREDENTIALS)
        try:
            self.hasher.verify(user.password_hash, password or "")
        except (VerifyMismatchError, InvalidHash, VerificationError):
            logger.info("Login rejected", extra={"username": username})
            raise AuthError(BAD_CREDENTIALS) from None
        return self.issue_token(user.id, user.username)  # type: ignore[arg-type]

    def issue_token(self, user_id: int, username: str, *, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.token_ttl,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> TokenIdentity:
        """Decode a bearer token into the identity it carries."""

        if token is None:
            raise AuthError("No se proporcionó un token.")
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.PyJWTError as exc:
            raise ForbiddenError("Token inválido o expirado.") from exc
        user_id = payload.get("userId")
        username = payload.get("username")
        if not isinstance(user_id, int) or not isinstance(username, str):
            raise ForbiddenError("Token inválido o expirado.")
        return TokenIdentity(user_id=user_id, username=username)
