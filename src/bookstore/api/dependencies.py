"""FastAPI dependencies resolving the caller."""

from fastapi import Depends, Request
from protean.utils.globals import current_domain

from bookstore.errors import Unauthenticated
from bookstore.identity.tokens import Identity, TokenService
from bookstore.identity.user import User


def token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def current_identity(request: Request) -> Identity:
    """Identity verified by the access gate for this request."""
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise Unauthenticated()
    return identity


def current_user(identity: Identity = Depends(current_identity)) -> User:
    """The account behind the token; tokens of deleted accounts no longer authenticate."""
    user = current_domain.repository_for(User).find_by_email(identity.subject)
    if user is None:
        raise Unauthenticated("Account no longer exists")
    if user.role != identity.role:
        raise Unauthenticated("Token no longer matches the account role")
    return user
