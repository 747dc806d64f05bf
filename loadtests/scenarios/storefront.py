"""Storefront load test scenarios.

Two shopper journeys (window shopping, and browse → cart → checkout) plus an
admin journey that keeps the catalog stocked. Shopper steps execute in order;
each depends on the previous step succeeding.
"""

import os
import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    cart_quantity,
    category_data,
    product_data,
    profile_data,
    shipping_form_data,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CatalogAdminState, ShopperState

# Profile that has been promoted with `python src/manage.py grant-admin <id>`
ADMIN_USER_ID = os.getenv("LOADTEST_ADMIN_ID", "loadtest-admin")


class CheckoutJourney(SequentialTaskSet):
    """Sign Up -> Browse -> Add to Cart (x2) -> Adjust Quantity -> Checkout -> Order History."""

    def on_start(self):
        self.state = ShopperState()

    def _headers(self):
        return {"X-User-Id": self.state.user_id}

    @task
    def sign_up(self):
        payload = profile_data()
        with self.client.post("/profiles", json=payload, catch_response=True, name="POST /profiles") as resp:
            if resp.status_code == 201:
                self.state.user_id = payload["user_id"]
            else:
                resp.failure(f"Sign up failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse_products(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code != 200:
                resp.failure(f"List products failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()
                return

            in_stock = [p["id"] for p in resp.json() if p["in_stock"]]
            if not in_stock:
                resp.success()
                self.interrupt()
                return
            self.state.product_ids = random.sample(in_stock, min(2, len(in_stock)))

    @task
    def add_to_cart(self):
        for product_id in self.state.product_ids:
            with self.client.post(
                "/cart/items",
                json={"product_id": product_id, "quantity": cart_quantity()},
                headers=self._headers(),
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code == 200:
                    self.state.cart_item_ids = [line["id"] for line in resp.json()["items"]]
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def adjust_quantity(self):
        if not self.state.cart_item_ids:
            return
        with self.client.put(
            f"/cart/items/{self.state.cart_item_ids[0]}",
            json={"quantity": 1},
            headers=self._headers(),
            catch_response=True,
            name="PUT /cart/items/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update quantity failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def checkout(self):
        with self.client.post(
            "/checkout",
            json=shipping_form_data(),
            headers=self._headers(),
            allow_redirects=False,
            catch_response=True,
            name="POST /checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_number = resp.json()["order_number"]
            elif resp.status_code == 303:
                resp.success()
            else:
                resp.failure(f"Checkout failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def order_history(self):
        with self.client.get("/orders", headers=self._headers(), catch_response=True, name="GET /orders") as resp:
            if resp.status_code != 200:
                resp.failure(f"Order history failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class WindowShoppingJourney(SequentialTaskSet):
    """Categories -> Products in a category -> Product detail -> Blog."""

    def on_start(self):
        self.category_id = None
        self.slug = None

    @task
    def categories(self):
        with self.client.get("/categories", catch_response=True, name="GET /categories") as resp:
            if resp.status_code != 200:
                resp.failure(f"List categories failed: {resp.status_code}")
                self.interrupt()
                return
            categories = resp.json()
            self.category_id = random.choice(categories)["id"] if categories else None

    @task
    def products(self):
        params = {"category_id": self.category_id} if self.category_id else {}
        with self.client.get("/products", params=params, catch_response=True, name="GET /products") as resp:
            if resp.status_code != 200:
                resp.failure(f"List products failed: {resp.status_code}")
                self.interrupt()
                return
            products = resp.json()
            self.slug = random.choice(products)["slug"] if products else None

    @task
    def product_detail(self):
        if not self.slug:
            return
        with self.client.get(f"/products/{self.slug}", catch_response=True, name="GET /products/{slug}") as resp:
            if resp.status_code != 200:
                resp.failure(f"Product detail failed: {resp.status_code}")

    @task
    def blog(self):
        with self.client.get("/blog", catch_response=True, name="GET /blog") as resp:
            if resp.status_code != 200:
                resp.failure(f"Blog failed: {resp.status_code}")

    @task
    def done(self):
        self.interrupt()


class CatalogAdminJourney(SequentialTaskSet):
    """Create Category -> Create Products (x2) -> Restock -> Reprice."""

    def on_start(self):
        self.state = CatalogAdminState()
        self.headers = {"X-User-Id": ADMIN_USER_ID}

    @task
    def create_category(self):
        with self.client.post(
            "/admin/categories",
            json=category_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /admin/categories",
        ) as resp:
            if resp.status_code == 201:
                self.state.category_ids.append(resp.json()["id"])
            else:
                resp.failure(f"Create category failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def create_products(self):
        for _ in range(2):
            payload = {**product_data(), "category_id": self.state.category_ids[-1]}
            with self.client.post(
                "/admin/products",
                json=payload,
                headers=self.headers,
                catch_response=True,
                name="POST /admin/products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["id"])
                else:
                    resp.failure(f"Create product failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def restock(self):
        for product_id in self.state.product_ids:
            with self.client.put(
                f"/admin/products/{product_id}/stock",
                json={"delta": random.randint(5, 20), "reason": "Load test restock"},
                headers=self.headers,
                catch_response=True,
                name="PUT /admin/products/{id}/stock",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Restock failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def reprice(self):
        if not self.state.product_ids:
            return
        with self.client.put(
            f"/admin/products/{self.state.product_ids[0]}/price",
            json={"price": round(random.uniform(5.0, 120.0), 2)},
            headers=self.headers,
            catch_response=True,
            name="PUT /admin/products/{id}/price",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Reprice failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Locust user simulating storefront shoppers.

    Weighted distribution:
    - 60% Window shopping (reads only)
    - 40% Full checkout journey
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        WindowShoppingJourney: 3,
        CheckoutJourney: 2,
    }


class CatalogAdminUser(HttpUser):
    """Locust user simulating an admin maintaining the catalog."""

    wait_time = between(2.0, 5.0)
    tasks = [CatalogAdminJourney]
