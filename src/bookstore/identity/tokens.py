"""Stateless bearer tokens.

Tokens are HS256-signed JWTs whose subject is the user's email and which carry
the user's role. Nothing is kept server-side: verification needs only the
secret key.
"""

import os
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt

from bookstore.errors import ExpiredToken, InvalidSignature, MalformedToken
from bookstore.identity.user import Role
from bookstore.utils.settings import custom_setting

DEFAULT_ALGORITHM = "HS256"
DEFAULT_TTL_MINUTES = 24 * 60


@dataclass(frozen=True)
class Identity:
    """Who is calling: the token subject (email) and the role it was issued with."""

    subject: str
    role: str

    @classmethod
    def of(cls, user) -> "Identity":
        return cls(subject=user.email, role=user.role)

    def has_role(self, role: str) -> bool:
        return self.role == role


class TokenService:
    def __init__(self, secret_key: str, algorithm: str = DEFAULT_ALGORITHM, ttl_minutes: int = DEFAULT_TTL_MINUTES):
        if not secret_key:
            raise ValueError("A secret key is required to sign tokens")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl = timedelta(minutes=ttl_minutes)

    @classmethod
    def from_config(cls, config) -> "TokenService":
        return cls(
            secret_key=os.environ.get("SECRET_KEY") or config["secret_key"],
            algorithm=custom_setting("token_algorithm", DEFAULT_ALGORITHM, config=config),
            ttl_minutes=int(custom_setting("token_ttl_minutes", DEFAULT_TTL_MINUTES, config=config)),
        )

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, identity: Identity, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(UTC)
        claims = {
            "sub": identity.subject,
            "role": identity.role,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> Identity:
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "role", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise ExpiredToken() from exc
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignature() from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedToken() from exc

        if claims["role"] not in Role.__members__ or not claims["sub"]:
            raise MalformedToken()

        return Identity(subject=claims["sub"], role=claims["role"])
