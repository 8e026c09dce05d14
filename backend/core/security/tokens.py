"""
Bearer token handling.

Access tokens are issued by the identity service and signed with the shared
``JWT_SECRET_KEY``. This service only reads the acting user id out of them;
``create_access_token`` is kept for local tooling and the test suite.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

ACCESS_TOKEN_TYPE = "access"
_REQUIRED_CLAIMS = ("sub", "exp", "type")


@dataclass
class TokenPayload:
    """Claims of a verified access token."""

    sub: str  # user id
    exp: datetime
    iat: datetime
    type: str
    email: str | None = None


class TokenService:
    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 30,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl = timedelta(minutes=access_token_expire_minutes)

    def create_access_token(self, user_id: str, email: str | None = None) -> str:
        issued_at = datetime.now(UTC)
        claims = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
            "type": ACCESS_TOKEN_TYPE,
        }
        if email:
            claims["email"] = email
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify_access_token(self, token: str) -> TokenPayload | None:
        """
        Return the claims of a valid, unexpired access token.

        Returns None for a bad signature, an expired token, a token of another
        type (e.g. refresh) or one missing a required claim.
        """
        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError:
            return None

        if any(name not in claims for name in _REQUIRED_CLAIMS):
            return None
        if claims["type"] != ACCESS_TOKEN_TYPE:
            return None

        return TokenPayload(
            sub=claims["sub"],
            exp=datetime.fromtimestamp(claims["exp"], tz=UTC),
            iat=datetime.fromtimestamp(claims.get("iat", 0), tz=UTC),
            type=claims["type"],
            email=claims.get("email"),
        )
