"""User aggregate: an account that can sign in with email and password."""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from bookstore.domain import bookstore
from bookstore.identity.email import normalize_email, validate_email
from bookstore.identity.events import UserRegistered, UserRemoved, UserUpdated


class Role(Enum):
    USER = "USER"
    ADMIN = "ADMIN"

    @classmethod
    def parse(cls, value: str) -> "Role":
        """Case-insensitive lookup by name; raises ``ValueError`` for unknown roles."""
        try:
            return cls[(value or "").strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown role {value!r}") from None


@bookstore.aggregate
class User:
    """A registered account.

    Username and email are each unique across all users. Emails are kept
    lower-cased so that lookups and the uniqueness check are case-insensitive.
    Only the bcrypt hash of the password is ever stored.
    """

    username: String(required=True, max_length=50, unique=True)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    role: String(choices=Role, default=Role.USER.value)
    registered_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        validate_email(self.email)

    @invariant.post
    def username_cannot_be_blank(self):
        if not (self.username or "").strip():
            raise ValidationError({"username": ["Username cannot be blank"]})

    @classmethod
    def register(cls, username, email, password_hash, role=Role.USER.value):
        user = cls(
            username=username.strip(),
            email=normalize_email(email),
            password_hash=password_hash,
            role=role,
            registered_at=datetime.now(UTC),
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                username=user.username,
                email=user.email,
                role=user.role,
                registered_at=user.registered_at,
            )
        )
        return user

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def update_details(self, username=None, email=None, role=None):
        """Overwrite whichever of username, email and role are given."""
        with atomic_change(self):
            if username is not None:
                self.username = username.strip()
            if email is not None:
                self.email = normalize_email(email)
            if role is not None:
                self.role = role

        self.raise_(
            UserUpdated(
                user_id=str(self.id),
                username=self.username,
                email=self.email,
                role=self.role,
            )
        )

    def remove(self):
        self.raise_(UserRemoved(user_id=str(self.id), email=self.email))
