"""Mixed storefront workload scenario.

Combines anonymous browsing, shopper checkouts and admin upkeep with
weights that model a bookstore's traffic. This is the recommended
scenario for a load baseline.
"""

from locust import HttpUser, between

from loadtests.scenarios.admin import CatalogueStockingJourney
from loadtests.scenarios.browsing import CatalogueBrowsing
from loadtests.scenarios.shopping import CheckoutJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload.

    Browsing (70%): catalogue reads, the bulk of storefront traffic.
    Checkout (25%): registration through to a placed order.
    Admin (5%): stocking books and advancing order status.
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        CatalogueBrowsing: 70,
        CheckoutJourney: 25,
        CatalogueStockingJourney: 5,
    }
