"""Integration tests for the storefront HTTP surface via TestClient."""

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from protean import current_domain
from storefront.api import (
    admin_router,
    blog_router,
    cart_router,
    category_router,
    checkout_router,
    order_router,
    product_router,
    profile_router,
)
from storefront.auth.registration import GrantAdmin
from storefront.domain import storefront
from storefront.order.numbering import set_generator
from storefront.order.numbering.fake_adapter import FakeOrderNumbers
from storefront.order.order import Order

SHOPPER = {"X-User-Id": "shopper-001"}
ADMIN = {"X-User-Id": "admin-001"}

SHIPPING = {
    "full_name": "Sam Shopper",
    "email": "shopper@example.com",
    "phone": "+1-555-0100",
    "address": "1 Market Street",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
    "country": "US",
}


@pytest.fixture()
def client():
    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with storefront.domain_context():
            return await call_next(request)

    for router in (
        product_router,
        category_router,
        profile_router,
        cart_router,
        checkout_router,
        order_router,
        blog_router,
        admin_router,
    ):
        app.include_router(router)
    return TestClient(app)


@pytest.fixture()
def admin(client):
    client.post("/profiles", json={"user_id": "admin-001", "email": "admin@example.com"})
    current_domain.process(GrantAdmin(user_id="admin-001"), asynchronous=False)
    return ADMIN


@pytest.fixture()
def shopper(client):
    response = client.post("/profiles", json={"user_id": "shopper-001", "email": "shopper@example.com"})
    assert response.status_code == 201
    return SHOPPER


def _create_product(client, headers, **overrides):
    payload = {"title": "Product A", "slug": "product-a", "price": 20.0, "stock_quantity": 10}
    payload.update(overrides)
    response = client.post("/admin/products", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()["id"]


class TestCatalogEndpoints:
    def test_list_and_get_products(self, client, admin):
        _create_product(client, admin, images=["a.jpg"], compare_price=25.0)

        listed = client.get("/products").json()
        assert [p["slug"] for p in listed] == ["product-a"]
        assert listed[0]["discount_percentage"] == 20
        assert listed[0]["primary_image"] == "a.jpg"

        detail = client.get("/products/product-a")
        assert detail.status_code == 200
        assert detail.json()["in_stock"] is True

    def test_unknown_slug_is_404(self, client):
        assert client.get("/products/nope").status_code == 404

    def test_categories_alphabetical(self, client, admin):
        for name in ("Mugs", "Bags"):
            response = client.post("/admin/categories", json={"name": name, "slug": name.lower()}, headers=admin)
            assert response.status_code == 201

        assert [c["name"] for c in client.get("/categories").json()] == ["Bags", "Mugs"]


class TestCartEndpoints:
    def test_anonymous_cart_is_401(self, client):
        assert client.get("/cart").status_code == 401
        assert client.post("/cart/items", json={"product_id": "x"}).status_code == 401

    def test_add_update_remove(self, client, admin, shopper):
        product_id = _create_product(client, admin)

        added = client.post("/cart/items", json={"product_id": product_id, "quantity": 3}, headers=shopper)
        assert added.status_code == 200
        body = added.json()
        assert body["item_count"] == 3
        assert body["total"] == pytest.approx(60.0)
        assert body["summary"]["display"] == {
            "subtotal": "60.00",
            "shipping": "Free",
            "tax": "6.00",
            "total": "66.00",
        }

        item_id = body["items"][0]["id"]
        updated = client.put(f"/cart/items/{item_id}", json={"quantity": 1}, headers=shopper).json()
        assert updated["item_count"] == 1
        assert updated["summary"]["shipping"] == 5.0

        removed = client.put(f"/cart/items/{item_id}", json={"quantity": 0}, headers=shopper).json()
        assert removed["items"] == []

    def test_unknown_product_is_404(self, client, shopper):
        response = client.post("/cart/items", json={"product_id": "missing"}, headers=shopper)
        assert response.status_code == 404

    def test_clear_cart_twice(self, client, admin, shopper):
        product_id = _create_product(client, admin)
        client.post("/cart/items", json={"product_id": product_id}, headers=shopper)

        assert client.delete("/cart", headers=shopper).json()["items"] == []
        assert client.delete("/cart", headers=shopper).status_code == 200


class TestCheckoutEndpoints:
    def test_empty_cart_redirects_to_cart(self, client, shopper):
        summary = client.get("/checkout", headers=shopper, follow_redirects=False)
        assert summary.status_code == 303
        assert summary.headers["location"] == "/cart"

        placed = client.post("/checkout", json=SHIPPING, headers=shopper, follow_redirects=False)
        assert placed.status_code == 303
        assert current_domain.repository_for(Order)._dao.query.all().items == []

    def test_place_order(self, client, admin, shopper):
        set_generator(FakeOrderNumbers(prefix="ORD"))
        product_id = _create_product(client, admin)
        client.post("/cart/items", json={"product_id": product_id, "quantity": 3}, headers=shopper)

        summary = client.get("/checkout", headers=shopper).json()
        assert summary["total"] == pytest.approx(66.0)

        placed = client.post("/checkout", json=SHIPPING, headers=shopper)
        assert placed.status_code == 201
        body = placed.json()
        assert body["order_number"] == "ORD-00001"
        assert body["redirect_to"] == "/dashboard"
        assert body["message"] == "Order placed successfully! Order number: ORD-00001"

        assert client.get("/cart", headers=shopper).json()["items"] == []

        orders = client.get("/orders", headers=shopper).json()
        assert len(orders) == 1
        assert orders[0]["total_amount"] == pytest.approx(66.0)
        assert orders[0]["billing_address"] == orders[0]["shipping_address"]

    def test_missing_form_field_is_422(self, client, admin, shopper):
        product_id = _create_product(client, admin)
        client.post("/cart/items", json={"product_id": product_id}, headers=shopper)

        incomplete = {**SHIPPING, "zip_code": ""}
        assert client.post("/checkout", json=incomplete, headers=shopper).status_code == 422

    def test_failure_is_502_with_generic_message(self, client, admin, shopper):
        numbers = FakeOrderNumbers()
        numbers.configure(should_succeed=False)
        set_generator(numbers)
        product_id = _create_product(client, admin)
        client.post("/cart/items", json={"product_id": product_id}, headers=shopper)

        response = client.post("/checkout", json=SHIPPING, headers=shopper)

        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to place order. Please try again."
        assert client.get("/cart", headers=shopper).json()["item_count"] == 1


class TestOrderEndpoints:
    def test_anonymous_orders_is_401(self, client):
        assert client.get("/orders").status_code == 401


class TestAdminEndpoints:
    def test_non_admin_is_403(self, client, shopper):
        response = client.post("/admin/categories", json={"name": "Bags", "slug": "bags"}, headers=shopper)
        assert response.status_code == 403

    def test_anonymous_admin_is_401(self, client):
        assert client.post("/admin/categories", json={"name": "Bags", "slug": "bags"}).status_code == 401

    def test_invalid_slug_is_422(self, client, admin):
        response = client.post(
            "/admin/products", json={"title": "Bad", "slug": "Bad Slug", "price": 1.0}, headers=admin
        )
        assert response.status_code == 422

    def test_duplicate_product_slug_is_422(self, client, admin):
        _create_product(client, admin)

        response = client.post(
            "/admin/products", json={"title": "Product B", "slug": "product-a", "price": 5.0}, headers=admin
        )

        assert response.status_code == 422
        assert client.get("/products/product-a").json()["title"] == "Product A"

    def test_order_status_transitions(self, client, admin, shopper):
        product_id = _create_product(client, admin)
        client.post("/cart/items", json={"product_id": product_id}, headers=shopper)
        order_id = client.post("/checkout", json=SHIPPING, headers=shopper).json()["order_id"]

        assert client.put(f"/admin/orders/{order_id}/status/delivered", headers=admin).status_code == 422
        assert client.put(f"/admin/orders/{order_id}/status/processing", headers=admin).status_code == 200
        assert client.put(f"/admin/orders/{order_id}/status/bogus", headers=admin).status_code == 422

        assert client.get("/orders", headers=shopper).json()[0]["status"] == "processing"

    def test_stock_and_visibility(self, client, admin):
        product_id = _create_product(client, admin, stock_quantity=2)

        response = client.put(f"/admin/products/{product_id}/stock", json={"delta": -5}, headers=admin)
        assert response.status_code == 422

        client.put(f"/admin/products/{product_id}/deactivate", headers=admin)
        assert client.get("/products").json() == []

    def test_blog_publish_flow(self, client, admin):
        post_id = client.post(
            "/admin/blog",
            json={"title": "Hello", "slug": "hello", "content": "First post"},
            headers=admin,
        ).json()["id"]
        assert client.get("/blog/hello").status_code == 404

        client.put(f"/admin/blog/{post_id}/publish", headers=admin)

        post = client.get("/blog/hello").json()
        assert post["author_id"] == "admin-001"
        assert [p["slug"] for p in client.get("/blog").json()] == ["hello"]
