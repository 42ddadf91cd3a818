"""Vendor journeys: opening a store, listing products and fulfilling orders."""

import random

from locust import SequentialTaskSet, task

from loadtests.data_generators import product_data, store_data, user_data, zone_data
from loadtests.helpers.response import fail
from loadtests.helpers.state import VendorState, headers

_FULFILMENT_PATH = ["Confirmed", "Processing", "Shipped", "Delivered"]


class StoreSetupJourney(SequentialTaskSet):
    """Register -> Open store -> Delivery zones -> List products -> Restock -> Analytics."""

    def on_start(self):
        self.state = VendorState()

    @property
    def auth(self):
        return headers(self.state.user_id, "Professional")

    @task
    def register(self):
        with self.client.post("/users", json=user_data(), catch_response=True, name="POST /users") as resp:
            if resp.status_code == 201:
                self.state.user_id = resp.json()["user_id"]
            else:
                fail(resp, "Registration")
                self.interrupt()

    @task
    def open_store(self):
        with self.client.post(
            "/stores", json=store_data(), headers=self.auth, catch_response=True, name="POST /stores"
        ) as resp:
            if resp.status_code == 201:
                self.state.store_id = resp.json()["store_id"]
            else:
                fail(resp, "Open store")
                self.interrupt()

    @task
    def add_zones(self):
        for zone in random.sample(["Westlands", "Kilimani", "CBD", "Karen"], k=2):
            with self.client.post(
                f"/stores/{self.state.store_id}/zones",
                json=zone_data(zone),
                headers=self.auth,
                catch_response=True,
                name="POST /stores/{id}/zones",
            ) as resp:
                if resp.status_code != 201:
                    fail(resp, "Add zone")

    @task
    def list_products(self):
        for _ in range(random.randint(2, 5)):
            with self.client.post(
                "/products", json=product_data(), headers=self.auth, catch_response=True, name="POST /products"
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["product_id"])
                else:
                    fail(resp, "Create product")

    @task
    def restock(self):
        if not self.state.product_ids:
            self.interrupt()
            return
        self.client.put(
            f"/products/{random.choice(self.state.product_ids)}/restock",
            json={"quantity": random.randint(1, 20)},
            headers=self.auth,
            name="PUT /products/{id}/restock",
        )

    @task
    def analytics(self):
        self.client.get(
            "/analytics/professional",
            params={"period": random.choice(["7d", "30d", "90d"]), "compare": True},
            headers=self.auth,
            name="GET /analytics/professional",
        )
        self.interrupt()


class FulfilmentJourney(SequentialTaskSet):
    """Admin view: pending orders are walked through to Delivered."""

    @property
    def auth(self):
        return headers("loadtest-admin", "Admin")

    @task
    def fulfil_pending_order(self):
        with self.client.get(
            "/orders", params={"status": "Pending", "limit": 5}, headers=self.auth, catch_response=True, name="GET /orders"
        ) as resp:
            if resp.status_code != 200:
                fail(resp, "List orders")
                self.interrupt()
                return
            orders = resp.json()["orders"]
        if not orders:
            self.interrupt()
            return

        order_id = random.choice(orders)["order_id"]
        for status in _FULFILMENT_PATH:
            with self.client.put(
                f"/orders/{order_id}/status",
                json={"status": status},
                headers=self.auth,
                catch_response=True,
                name="PUT /orders/{id}/status",
            ) as resp:
                if resp.status_code != 200:
                    fail(resp, f"Move to {status}")
                    break

    @task
    def release_escrows(self):
        self.client.post("/escrows/release-due", headers=self.auth, name="POST /escrows/release-due")
        self.client.get("/analytics/dashboard", headers=self.auth, name="GET /analytics/dashboard")
        self.interrupt()
