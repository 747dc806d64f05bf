"""Tests for the PlaceOrder command handler."""

import json
import re

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.cart.cart import ShoppingCart
from storefront.cart.store import CartStore
from storefront.checkout.placement import PlaceOrder
from storefront.order.numbering import set_generator
from storefront.order.numbering.fake_adapter import FakeOrderNumbers
from storefront.order.numbering.port import OrderNumberGenerator
from storefront.order.order import Order
from storefront.order.sequence import OrderSequence
from storefront.shared.errors import BackendError


@pytest.fixture()
def cart(session, create_product):
    store = CartStore(session)
    tote = create_product(title="Canvas Tote", price=20.0, stock_quantity=10, images=json.dumps(["tote.jpg"]))
    mug = create_product(title="Enamel Mug", price=7.5, stock_quantity=3)
    store.add_to_cart(tote.id, 3)
    store.add_to_cart(mug.id, 2)
    return store


def _place(shipping_form, user_id="shopper-001"):
    command = PlaceOrder(user_id=user_id, shipping_address=json.dumps(shipping_form.to_address()))
    return current_domain.process(command, asynchronous=False)


def _orders():
    return current_domain.repository_for(Order)._dao.query.all().items


class TestPlaceOrder:
    def test_returns_order_id_and_number(self, cart, shipping_form):
        placed = _place(shipping_form)
        order = current_domain.repository_for(Order).get(placed["order_id"])
        assert order.order_number == placed["order_number"]
        assert re.fullmatch(r"ORD-\d{8}-\d{5}", placed["order_number"])

    def test_order_snapshot(self, cart, shipping_form):
        placed = _place(shipping_form)
        order = current_domain.repository_for(Order).get(placed["order_id"])

        assert order.user_id == "shopper-001"
        assert order.status == "pending"
        assert order.payment_status == "pending"
        assert order.payment_method == "card"
        assert order.shipping_address.full_name == "Sam Shopper"
        assert order.billing_address == order.shipping_address

        titles = sorted((i.product_title, i.quantity, i.total_price) for i in order.items)
        assert titles == [("Canvas Tote", 3, 60.0), ("Enamel Mug", 2, 15.0)]
        tote_line = next(i for i in order.items if i.product_title == "Canvas Tote")
        assert tote_line.product_image == "tote.jpg"

    def test_amounts_recomputed_from_cart(self, cart, shipping_form):
        placed = _place(shipping_form)
        order = current_domain.repository_for(Order).get(placed["order_id"])

        assert order.subtotal == pytest.approx(75.0)
        assert order.shipping_amount == 0.0
        assert order.tax_amount == pytest.approx(7.5)
        assert order.total_amount == pytest.approx(82.5)
        line_sum = sum(i.total_price for i in order.items)
        assert line_sum - order.discount_amount + order.tax_amount + order.shipping_amount == pytest.approx(
            order.total_amount
        )

    def test_uses_current_prices(self, cart, shipping_form):
        from storefront.catalog.management import ChangePrice

        mug_line = next(line for line in cart.items if line.product.title == "Enamel Mug")
        current_domain.process(ChangePrice(product_id=mug_line.product_id, price=10.0), asynchronous=False)

        placed = _place(shipping_form)
        order = current_domain.repository_for(Order).get(placed["order_id"])
        assert order.subtotal == pytest.approx(80.0)

    def test_clears_the_cart(self, cart, shipping_form):
        _place(shipping_form)
        persisted = current_domain.repository_for(ShoppingCart).for_customer("shopper-001")
        assert len(persisted.items) == 0

    def test_email_is_not_part_of_address(self, cart, shipping_form):
        placed = _place(shipping_form)
        order = current_domain.repository_for(Order).get(placed["order_id"])
        assert "email" not in order.shipping_address.to_dict()

    def test_empty_cart_is_rejected(self, session, shipping_form):
        with pytest.raises(ValidationError) as exc:
            _place(shipping_form)
        assert "empty cart" in str(exc.value)
        assert _orders() == []

    def test_consecutive_orders_get_consecutive_numbers(self, session, create_product, shipping_form):
        store = CartStore(session)
        product = create_product(price=12.0)

        store.add_to_cart(product.id, 1)
        first = _place(shipping_form)["order_number"]
        store.add_to_cart(product.id, 1)
        second = _place(shipping_form)["order_number"]

        assert first.endswith("-00001")
        assert second.endswith("-00002")
        assert first[:-6] == second[:-6]

    def test_reissued_order_number_is_rejected(self, session, create_product, shipping_form):
        class RepeatingNumbers(OrderNumberGenerator):
            def generate(self):
                return "ORD-REPEAT"

        set_generator(RepeatingNumbers())
        store = CartStore(session)
        product = create_product(price=12.0)

        store.add_to_cart(product.id, 1)
        _place(shipping_form)
        store.add_to_cart(product.id, 2)

        with pytest.raises(ValidationError) as exc:
            _place(shipping_form)

        assert exc.value.messages["order_number"] == ["Order number ORD-REPEAT has already been issued"]
        assert len(_orders()) == 1
        store.fetch()
        assert store.item_count == 2


class TestAtomicity:
    def test_number_failure_leaves_cart_untouched(self, cart, shipping_form):
        numbers = FakeOrderNumbers()
        numbers.configure(should_succeed=False)
        set_generator(numbers)

        with pytest.raises(BackendError):
            _place(shipping_form)

        assert _orders() == []
        cart.fetch()
        assert cart.item_count == 5

    def test_failure_after_number_issued_rolls_everything_back(self, cart, shipping_form, monkeypatch):
        def _boom(*args, **kwargs):
            raise RuntimeError("order insert failed")

        monkeypatch.setattr(Order, "place", _boom)

        with pytest.raises(RuntimeError):
            _place(shipping_form)

        assert _orders() == []
        assert current_domain.repository_for(OrderSequence)._dao.query.all().items == []
        cart.fetch()
        assert cart.item_count == 5

    def test_fake_numbers_are_used_when_configured(self, cart, shipping_form):
        set_generator(FakeOrderNumbers(prefix="TEST"))
        placed = _place(shipping_form)
        assert placed["order_number"] == "TEST-00001"
