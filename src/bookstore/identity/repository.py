from bookstore.domain import bookstore
from bookstore.identity.email import normalize_email
from bookstore.identity.user import User
from bookstore.utils.queries import fetch_all


@bookstore.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email) -> User | None:
        return self._dao.query.filter(email=normalize_email(email)).all().first

    def find_by_username(self, username) -> User | None:
        return self._dao.query.filter(username=(username or "").strip()).all().first

    def all_users(self) -> list[User]:
        return fetch_all(self._dao.query.order_by("username"))
