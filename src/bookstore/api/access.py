"""Access-control gate.

Every request is matched against ``ROUTING_TABLE``, an ordered tuple of
``(method, path pattern, requirement)`` rules; the first matching rule decides
and paths no rule matches require authentication. A bearer token, when sent,
is always verified, so a bad token is refused even on public routes. The
verified ``Identity`` is left on ``request.state.identity`` for the handlers.

Patterns are literal paths where ``{name}`` matches one path segment and a
trailing ``/**`` matches the path itself and anything below it.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from fastapi import Request

from bookstore.api.errors import error_response
from bookstore.errors import BookstoreError, Forbidden, MalformedToken, Unauthenticated
from bookstore.identity.tokens import Identity, TokenService


class Requirement(Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    USER = "user"
    ADMIN = "admin"

    def admits(self, identity: Identity | None) -> bool:
        if self is Requirement.PUBLIC:
            return True
        if identity is None:
            return False
        if self is Requirement.AUTHENTICATED:
            return True
        return identity.has_role(self.name)


_SEGMENT = re.compile(r"\{[^/{}]+\}")


def _compile(pattern: str) -> re.Pattern:
    if pattern.endswith("/**"):
        prefix, suffix = pattern[:-3], r"(?:/.*)?"
    else:
        prefix, suffix = pattern, ""

    parts = _SEGMENT.split(prefix)
    regex = "[^/]+".join(re.escape(part) for part in parts)
    return re.compile(f"^{regex}{suffix}/?$")


@dataclass(frozen=True)
class Rule:
    method: str
    pattern: str
    requirement: Requirement
    regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", _compile(self.pattern))

    def matches(self, method: str, path: str) -> bool:
        return self.method in ("*", method.upper()) and self.regex.match(path) is not None


PUBLIC = Requirement.PUBLIC
AUTHENTICATED = Requirement.AUTHENTICATED
USER = Requirement.USER
ADMIN = Requirement.ADMIN

ROUTING_TABLE: tuple[Rule, ...] = (
    # Service
    Rule("GET", "/health", PUBLIC),
    Rule("GET", "/docs/**", PUBLIC),
    Rule("GET", "/redoc", PUBLIC),
    Rule("GET", "/openapi.json", PUBLIC),
    # Authentication
    Rule("POST", "/auth/register", PUBLIC),
    Rule("POST", "/auth/login", PUBLIC),
    Rule("POST", "/auth/logout", PUBLIC),
    Rule("GET", "/auth/me", AUTHENTICATED),
    # Catalogue
    Rule("GET", "/books/**", PUBLIC),
    Rule("*", "/books/**", ADMIN),
    # Cart and orders
    Rule("*", "/cart/**", USER),
    Rule("POST", "/orders/checkout", USER),
    Rule("GET", "/orders/me", USER),
    Rule("GET", "/orders", ADMIN),
    Rule("PUT", "/orders/{order_id}/status", ADMIN),
    # Administration
    Rule("*", "/admin/**", ADMIN),
)


def resolve(method: str, path: str, table: tuple[Rule, ...] = ROUTING_TABLE) -> Requirement:
    """Requirement of the first rule matching the request; authentication when none does."""
    for rule in table:
        if rule.matches(method, path):
            return rule.requirement
    return AUTHENTICATED


def bearer_token(request: Request) -> str | None:
    """The bearer token of the request, ``None`` when no Authorization header is sent."""
    header = request.headers.get("authorization")
    if header is None:
        return None

    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise MalformedToken("Authorization header must be 'Bearer <token>'")
    return token.strip()


class AccessGate:
    """HTTP middleware enforcing the routing table."""

    def __init__(self, tokens: TokenService, table: tuple[Rule, ...] = ROUTING_TABLE):
        self.tokens = tokens
        self.table = table

    def authorize(self, request: Request) -> Identity | None:
        token = bearer_token(request)
        identity = self.tokens.verify(token) if token is not None else None

        requirement = resolve(request.method, request.url.path, self.table)
        if not requirement.admits(identity):
            if identity is None:
                raise Unauthenticated()
            raise Forbidden(f"This operation requires the {requirement.name} role")
        return identity

    async def __call__(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return await call_next(request)

        try:
            identity = self.authorize(request)
        except BookstoreError as exc:
            return error_response(exc)

        request.state.identity = identity
        return await call_next(request)
