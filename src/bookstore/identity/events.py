"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from bookstore.domain import bookstore


@bookstore.event(part_of="User")
class UserRegistered:
    """A new account was created, by self-registration or by an administrator."""

    __version__ = 1

    user_id: Identifier(required=True)
    username: String(required=True)
    email: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@bookstore.event(part_of="User")
class UserUpdated:
    """An administrator changed a user's username, email or role."""

    __version__ = 1

    user_id: Identifier(required=True)
    username: String(required=True)
    email: String(required=True)
    role: String(required=True)


@bookstore.event(part_of="User")
class UserRemoved:
    """An account was deleted by an administrator."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
