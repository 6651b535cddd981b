from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import jwt
from jose.exceptions import JWTError

from orgjoin.application.errors import AuthError
from orgjoin.config.settings import Settings

ACCESS_TOKEN_TYPE = "access"


class JWTService:
    """Bearer tokens whose subject is the id of the calling user."""

    def __init__(
        self,
        *,
        secret_key: str,
        algorithm: str,
        access_token_expires_minutes: int,
        issuer: str | None = None,
        audience: str | None = None,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = timedelta(minutes=access_token_expires_minutes)
        self.issuer = issuer
        self.audience = audience

    @classmethod
    def from_settings(cls, settings: Settings) -> JWTService:
        return cls(
            secret_key=settings.jwt_secret_key.get_secret_value(),
            algorithm=settings.jwt_algorithm,
            access_token_expires_minutes=settings.jwt_access_token_expires_minutes,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        )

    def create_access_token(self, *, subject: UUID) -> str:
        issued_at = datetime.now(timezone.utc)
        claims = {
            "sub": str(subject),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
            "typ": ACCESS_TOKEN_TYPE,
        }
        if self.issuer:
            claims["iss"] = self.issuer
        if self.audience:
            claims["aud"] = self.audience
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def decode_subject(self, token: str) -> UUID:
        """Verify `token` and return the user id it was issued for."""
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
            )
        except JWTError as exc:
            raise AuthError("Token validation failed") from exc

        if claims.get("typ") != ACCESS_TOKEN_TYPE:
            raise AuthError("Not an access token")
        subject = claims.get("sub")
        if not subject:
            raise AuthError("Token missing subject")
        try:
            return UUID(str(subject))
        except ValueError as exc:
            raise AuthError("Token subject is not a valid UUID") from exc
