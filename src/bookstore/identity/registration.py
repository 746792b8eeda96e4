"""Account creation: self-registration and administrator-created users."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from bookstore.domain import bookstore
from bookstore.errors import InvalidInput, UserAlreadyExists
from bookstore.identity.user import Role, User
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


@bookstore.command(part_of="User")
class RegisterUser:
    """A visitor signs up; the new account always gets the USER role."""

    username: String(required=True, max_length=50)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)


@bookstore.command(part_of="User")
class CreateUser:
    """An administrator creates an account with a role of their choosing."""

    username: String(required=True, max_length=50)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    role: String(max_length=10, default=Role.USER.value)


def ensure_available(repo, username=None, email=None, exclude_id=None):
    """Raise ``UserAlreadyExists`` when another account holds the username or email."""
    if username is not None:
        holder = repo.find_by_username(username)
        if holder is not None and str(holder.id) != str(exclude_id):
            raise UserAlreadyExists("Username is already taken")

    if email is not None:
        holder = repo.find_by_email(email)
        if holder is not None and str(holder.id) != str(exclude_id):
            raise UserAlreadyExists("Email is already registered")


def save_account(repo, user) -> None:
    """Persist ``user``, reporting a unique-field clash with a concurrent writer as ``UserAlreadyExists``."""
    try:
        repo.add(user)
    except ValidationError as exc:
        if "username" in exc.messages:
            raise UserAlreadyExists("Username is already taken") from exc
        if "email" in exc.messages:
            raise UserAlreadyExists("Email is already registered") from exc
        raise


def parse_role(value) -> str:
    try:
        return Role.parse(value).value
    except ValueError as exc:
        raise InvalidInput(str(exc)) from exc


@bookstore.command_handler(part_of=User)
class UserRegistrationHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        return self._create(command, Role.USER.value)

    @handle(CreateUser)
    def create_user(self, command):
        return self._create(command, parse_role(command.role))

    def _create(self, command, role):
        repo = current_domain.repository_for(User)
        ensure_available(repo, username=command.username, email=command.email)

        user = User.register(
            username=command.username,
            email=command.email,
            password_hash=command.password_hash,
            role=role,
        )
        save_account(repo, user)

        logger.info("user.registered", user_id=str(user.id), role=role)
        return str(user.id)
