"""Signed, time-bounded session tokens (JWT)."""
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Callable, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from taskflow.errors import ExpiredToken, InvalidToken, MissingToken
from taskflow.models.enums import Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Claims:
    """The authenticated identity carried by a validated token."""

    id: int
    email: str
    name: str
    role: Role
    issued_at: datetime
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Issues and validates tokens with a fixed secret and time-to-live.

    The secret and ttl are passed in once at construction; nothing here
    reads the environment.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret_key:
            raise ValueError("secret_key is required")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl
        self._clock = clock or _utcnow

    @classmethod
    def from_settings(cls, settings) -> "TokenService":
        return cls(
            settings.secret_key,
            algorithm=settings.algorithm,
            ttl=timedelta(minutes=settings.access_token_expire_minutes),
        )

    def issue(self, user) -> str:
        issued = self._clock()
        expire = issued + self.ttl
        payload = {
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "role": Role(user.role).value,
            # JWT uses Unix timestamps
            "iat": int(issued.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def validate(self, token: Optional[str]) -> Claims:
        if not token:
            raise MissingToken()
        try:
            # jwt.decode validates exp automatically
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise ExpiredToken()
        except JWTError as e:
            logger.debug("Rejected token: %s", e)
            raise InvalidToken()

        try:
            return Claims(
                id=int(payload["id"]),
                email=str(payload["email"]),
                name=str(payload["name"]),
                role=Role(payload["role"]),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), UTC),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), UTC),
            )
        except (KeyError, TypeError, ValueError):
            raise InvalidToken("Invalid token: malformed claims")
