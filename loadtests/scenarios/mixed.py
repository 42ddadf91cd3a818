"""Mixed marketplace workload.

Weights model a storefront where most traffic is browsing, a smaller
share buys, and vendors and administrators act in the background.
"""

from locust import HttpUser, between

from loadtests.scenarios.shopper import BrowsingJourney, CheckoutJourney
from loadtests.scenarios.vendor import FulfilmentJourney, StoreSetupJourney


class MixedWorkloadUser(HttpUser):
    wait_time = between(0.5, 3.0)
    tasks = {
        BrowsingJourney: 10,
        CheckoutJourney: 4,
        StoreSetupJourney: 2,
        FulfilmentJourney: 1,
    }


class ShopperUser(HttpUser):
    wait_time = between(1.0, 4.0)
    tasks = {BrowsingJourney: 3, CheckoutJourney: 1}


class VendorUser(HttpUser):
    wait_time = between(2.0, 5.0)
    tasks = {StoreSetupJourney: 3, FulfilmentJourney: 1}
