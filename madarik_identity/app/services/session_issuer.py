from datetime import UTC, datetime, timedelta
from uuid import UUID

from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from libs.result import Error, Result, Return
from madarik_identity.app.services.clock import IClock
from madarik_identity.domain.entities import User, UserRole

ALGORITHM = "HS256"


class SessionCredential(BaseModel):
    """Signed bearer token handed to the client after authentication"""

    access_token: str
    token_type: str = "bearer"
    expires_at: datetime


class SessionClaims(BaseModel):
    """Verified contents of a session credential"""

    user_id: UUID
    email: str
    role: UserRole
    issued_at: datetime
    expires_at: datetime


def _to_epoch(value: datetime) -> int:
    # Clock values are naive UTC
    return int(value.replace(tzinfo=UTC).timestamp())


def _from_epoch(value: int) -> datetime:
    return datetime.fromtimestamp(value, UTC).replace(tzinfo=None)


class SessionIssuer:
    """
    Mints and verifies stateless session credentials (JWT, HS256).

    Claims: sub (user id), email, role, iat, exp. Expiry is checked against
    the injected clock rather than the library's wall clock.
    """

    def __init__(self, secret: str, ttl: timedelta, clock: IClock):
        self.secret = secret
        self.ttl = ttl
        self.clock = clock

    def issue(self, user: User) -> SessionCredential:
        issued_at = self.clock.now().replace(microsecond=0)
        expires_at = issued_at + self.ttl
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value,
            "iat": _to_epoch(issued_at),
            "exp": _to_epoch(expires_at),
        }
        token = jwt.encode(payload, self.secret, algorithm=ALGORITHM)
        return SessionCredential(access_token=token, expires_at=expires_at)

    def verify(self, token: str) -> Result[SessionClaims]:
        """
        Verify signature and expiry of a session credential.

        Errors:
            - INVALID_TOKEN: Bad signature, malformed token or claims
            - TOKEN_EXPIRED: Credential is past its exp claim
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                options={"verify_exp": False},
            )
            claims = SessionClaims(
                user_id=payload["sub"],
                email=payload["email"],
                role=payload["role"],
                issued_at=_from_epoch(payload["iat"]),
                expires_at=_from_epoch(payload["exp"]),
            )
        except (JWTError, KeyError, TypeError, ValueError, ValidationError):
            return Return.err(Error("INVALID_TOKEN", "Invalid session token"))

        if self.clock.now() >= claims.expires_at:
            return Return.err(Error("TOKEN_EXPIRED", "Session has expired"))

        return Return.ok(claims)
