"""Password hashing and credential checks."""

from functools import lru_cache

from passlib.context import CryptContext
from protean.utils.globals import current_domain

from bookstore.errors import InvalidCredentials
from bookstore.identity.tokens import Identity
from bookstore.identity.user import User
from bookstore.utils.logging import get_logger
from bookstore.utils.settings import custom_setting

logger = get_logger(__name__)

DEFAULT_BCRYPT_ROUNDS = 12


@lru_cache(maxsize=4)
def _crypt_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def password_context() -> CryptContext:
    return _crypt_context(int(custom_setting("bcrypt_rounds", DEFAULT_BCRYPT_ROUNDS)))


def hash_password(plain: str) -> str:
    return password_context().hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    if not plain or not hashed:
        return False
    return password_context().verify(plain, hashed)


def authenticate(email: str, password: str) -> Identity:
    """Check an email/password pair and return the caller's identity.

    Unknown emails and wrong passwords fail identically with
    ``InvalidCredentials``; a dummy hash comparison keeps the timing alike.
    """
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None:
        password_context().dummy_verify()
        logger.info("auth.login_rejected", reason="unknown_email")
        raise InvalidCredentials()

    if not verify_password(password, user.password_hash):
        logger.info("auth.login_rejected", reason="bad_password", user_id=str(user.id))
        raise InvalidCredentials()

    logger.info("auth.login_succeeded", user_id=str(user.id))
    return Identity.of(user)
