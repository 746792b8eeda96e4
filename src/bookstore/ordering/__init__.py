"""Cart and order context.

Domain initialisation only walks one directory level below the domain, so the
element modules of ``cart/`` and ``order/`` are imported here to register
them whenever any ordering module loads.
"""

from bookstore.ordering.cart import cart, events, items, repository  # noqa: F401
from bookstore.ordering.order import checkout, order, status  # noqa: F401
from bookstore.ordering.order import events as order_events  # noqa: F401
from bookstore.ordering.order import repository as order_repository  # noqa: F401
