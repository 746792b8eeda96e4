"""BDD tests for order status administration."""

from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when

from bookstore.errors import InvalidStatus
from bookstore.ordering.order.status import UpdateOrderStatus

scenarios("features/order_status.feature")


@when(parsers.cfparse('the administrator sets the order status to "{name}"'))
def set_status(shop, error, name):
    try:
        current_domain.process(UpdateOrderStatus(order_id=shop["order_id"], status=name), asynchronous=False)
    except InvalidStatus as exc:
        error["exc"] = exc


@then("the status change is refused")
def status_refused(error):
    assert isinstance(error["exc"], InvalidStatus)
