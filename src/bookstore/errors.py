"""Error taxonomy of the bookstore.

Every domain rejection derives from :class:`BookstoreError` and carries the HTTP
status it maps to at the API boundary. Errors are raised where the violation is
detected and only translated into responses by the FastAPI exception handlers.
"""


class BookstoreError(Exception):
    """Base class for every rejection the bookstore raises on purpose."""

    status_code = 500
    default_message = "Request could not be completed"

    def __init__(self, message: str | None = None, **details):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__


# 401
class Unauthenticated(BookstoreError):
    status_code = 401
    default_message = "Authentication required"


class InvalidCredentials(Unauthenticated):
    default_message = "Invalid email or password"


class TokenError(Unauthenticated):
    default_message = "Invalid token"


class MalformedToken(TokenError):
    default_message = "Malformed token"


class ExpiredToken(TokenError):
    default_message = "Token has expired"


class InvalidSignature(TokenError):
    default_message = "Token signature is invalid"


# 403
class Forbidden(BookstoreError):
    status_code = 403
    default_message = "You are not allowed to perform this operation"


# 404
class NotFound(BookstoreError):
    status_code = 404
    default_message = "Resource not found"


class BookNotFound(NotFound):
    default_message = "Book not found"


class CartItemNotFound(NotFound):
    default_message = "Cart item not found"


class OrderNotFound(NotFound):
    default_message = "Order not found"


class UserNotFound(NotFound):
    default_message = "User not found"


# 409
class Conflict(BookstoreError):
    status_code = 409
    default_message = "Conflicting state"


class UserAlreadyExists(Conflict):
    default_message = "Username or email is already taken"


class BookAlreadyExists(Conflict):
    default_message = "A book with this ISBN already exists"


class ReferentialConflict(Conflict):
    default_message = "Resource is still referenced"


class BookInUse(ReferentialConflict):
    default_message = "Book is referenced by existing orders or carts"


class UserHasOrders(ReferentialConflict):
    default_message = "User has existing orders"


class CartAlreadyCheckedOut(Conflict):
    default_message = "Cart has already been checked out"


# 400
class InvalidInput(BookstoreError):
    status_code = 400
    default_message = "Invalid input"


class InvalidStatus(InvalidInput):
    default_message = "Unknown order status"


class EmptyCart(BookstoreError):
    status_code = 400
    default_message = "Cart is empty"


# 500
class InternalError(BookstoreError):
    status_code = 500
    default_message = "Internal error"


class CheckoutFailed(InternalError):
    default_message = "Checkout could not be completed"
