"""Shopper journeys: browsing, cart, wishlist and checkout.

Checkout needs the customer's address to have reached the marketplace's
delivery address projection, so PlaceOrder may be rejected with "Invalid
address" while the Identity event is still in flight. Those rejections
are reported as failures like any other.
"""

import random

from locust import SequentialTaskSet, task

from loadtests.data_generators import ZONES, address_data, order_lines, user_data
from loadtests.helpers.response import fail
from loadtests.helpers.state import ShopperState, headers


class BrowsingJourney(SequentialTaskSet):
    """Showcase -> Filtered listing -> Product detail -> Stores -> Collections."""

    def on_start(self):
        self.product_ids = []

    @task
    def showcase(self):
        with self.client.get("/products/showcase", catch_response=True, name="GET /products/showcase") as resp:
            if resp.status_code != 200:
                fail(resp, "Showcase")

    @task
    def browse(self):
        params = {"sort_by": random.choice(["created_at", "price", "view_count"]), "limit": 12}
        with self.client.get("/products", params=params, catch_response=True, name="GET /products") as resp:
            if resp.status_code == 200:
                self.product_ids = [p["product_id"] for p in resp.json()["products"]]
            else:
                fail(resp, "Browse")

    @task
    def product_detail(self):
        if not self.product_ids:
            self.interrupt()
            return
        product_id = random.choice(self.product_ids)
        with self.client.get(f"/products/{product_id}", catch_response=True, name="GET /products/{id}") as resp:
            if resp.status_code != 200:
                fail(resp, "Product detail")

    @task
    def stores(self):
        self.client.get("/stores", params={"verified": True}, name="GET /stores")

    @task
    def collections(self):
        self.client.get("/collections", name="GET /collections")
        self.interrupt()


class CheckoutJourney(SequentialTaskSet):
    """Register -> Add address -> Wishlist -> Cart -> Place order -> Track."""

    def on_start(self):
        self.state = ShopperState()

    @property
    def auth(self):
        return headers(self.state.user_id)

    @task
    def register(self):
        with self.client.post("/users", json=user_data(), catch_response=True, name="POST /users") as resp:
            if resp.status_code == 201:
                self.state.user_id = resp.json()["user_id"]
            else:
                fail(resp, "Registration")
                self.interrupt()

    @task
    def add_address(self):
        with self.client.post(
            "/users/me/addresses",
            json=address_data(),
            headers=self.auth,
            catch_response=True,
            name="POST /users/me/addresses",
        ) as resp:
            if resp.status_code == 201:
                self.state.address_id = resp.json()["address_id"]
            else:
                fail(resp, "Add address")
                self.interrupt()

    @task
    def pick_products(self):
        with self.client.get("/products", params={"limit": 20}, catch_response=True, name="GET /products") as resp:
            if resp.status_code != 200:
                fail(resp, "Browse")
                self.interrupt()
                return
            self.state.product_ids = [p["product_id"] for p in resp.json()["products"] if p["stock_quantity"] > 2]
        if not self.state.product_ids:
            self.interrupt()

    @task
    def save_to_wishlist(self):
        self.client.post(
            "/wishlist",
            json={"product_id": random.choice(self.state.product_ids)},
            headers=self.auth,
            name="POST /wishlist",
        )

    @task
    def fill_cart(self):
        for line in order_lines(self.state.product_ids):
            with self.client.post(
                "/cart/items", json=line, headers=self.auth, catch_response=True, name="POST /cart/items"
            ) as resp:
                if resp.status_code == 201:
                    self.state.cart_item_ids.append(resp.json()["item_id"])
                else:
                    fail(resp, "Add to cart")
        self.client.get("/cart", headers=self.auth, name="GET /cart")

    @task
    def place_order(self):
        payload = {
            "address_id": self.state.address_id,
            "items": order_lines(self.state.product_ids),
            "delivery_zone": random.choice(ZONES),
        }
        with self.client.post(
            "/orders", json=payload, headers=self.auth, catch_response=True, name="POST /orders"
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
            else:
                fail(resp, "Place order")
                self.interrupt()

    @task
    def track_order(self):
        self.client.get(f"/orders/{self.state.order_id}", headers=self.auth, name="GET /orders/{id}")
        self.client.get("/orders", headers=self.auth, name="GET /orders")
        if random.random() < 0.2:
            self.client.put(
                f"/orders/{self.state.order_id}/cancel",
                json={"reason": "Changed my mind"},
                headers=self.auth,
                name="PUT /orders/{id}/cancel",
            )
        self.interrupt()
