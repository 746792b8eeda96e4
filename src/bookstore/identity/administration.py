"""Administrator maintenance of existing accounts."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from bookstore.domain import bookstore
from bookstore.errors import UserHasOrders, UserNotFound
from bookstore.identity.registration import ensure_available, parse_role, save_account
from bookstore.identity.user import User
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


@bookstore.command(part_of="User")
class UpdateUser:
    user_id: Identifier(required=True)
    username: String(max_length=50)
    email: String(max_length=254)
    role: String(max_length=10)


@bookstore.command(part_of="User")
class RemoveUser:
    user_id: Identifier(required=True)


def load_user(repo, user_id) -> User:
    try:
        return repo.get(user_id)
    except ObjectNotFoundError as exc:
        raise UserNotFound(f"User {user_id} not found") from exc


@bookstore.command_handler(part_of=User)
class UserAdministrationHandler:
    @handle(UpdateUser)
    def update_user(self, command):
        repo = current_domain.repository_for(User)
        user = load_user(repo, command.user_id)

        role = parse_role(command.role) if command.role is not None else None
        ensure_available(repo, username=command.username, email=command.email, exclude_id=user.id)

        user.update_details(username=command.username, email=command.email, role=role)
        save_account(repo, user)

        logger.info("user.updated", user_id=str(user.id), role=user.role)

    @handle(RemoveUser)
    def remove_user(self, command):
        # Imported here: ordering depends on identity, not the other way round
        from bookstore.ordering.cart.cart import Cart
        from bookstore.ordering.order.order import Order

        repo = current_domain.repository_for(User)
        user = load_user(repo, command.user_id)

        if current_domain.repository_for(Order).exists_for_user(user.id):
            raise UserHasOrders()

        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.for_user(user.id)
        if cart is not None:
            cart.clear()
            cart_repo.add(cart)
            cart_repo._dao.delete(cart)

        user.remove()
        repo.add(user)
        repo._dao.delete(user)

        logger.info("user.removed", user_id=str(user.id))
