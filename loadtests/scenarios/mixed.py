"""Mixed storefront and back-office workload.

The recommended scenario for a load baseline: storefront reads dominate,
checkouts and staff activity add write pressure on orders, stock and tasks.
"""

from locust import HttpUser, between

from loadtests.scenarios.back_office import CatalogueJourney, DashboardJourney, PackingJourney
from loadtests.scenarios.storefront import BrowsingJourney, CheckoutJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload.

    Storefront (85%):
    - Browsing: home, listing and product pages (most common)
    - Checkout: register, sign in, place a COD order

    Back-office (15%):
    - Dashboard polling
    - Packing workflow on confirmed orders
    - Catalogue edits (least frequent)
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        BrowsingJourney: 70,
        CheckoutJourney: 15,
        DashboardJourney: 8,
        PackingJourney: 5,
        CatalogueJourney: 2,
    }
