"""Shared BDD fixtures and step definitions for cart and checkout."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then, when
from storefront.auth.session import AuthSession
from storefront.cart.cart import ShoppingCart
from storefront.cart.store import CartStore
from storefront.order.order import Order
from storefront.shared.errors import Unauthenticated


@pytest.fixture()
def products():
    """Products created by the Background, keyed by title."""
    return {}


@pytest.fixture()
def error():
    """Container for an exception captured in a When step."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{title}" priced at {price:f} with {stock:d} in stock'))
def product_in_catalog(create_product, products, title, price, stock):
    products[title] = create_product(title=title, price=price, stock_quantity=stock)


@given("a signed-in shopper", target_fixture="cart")
def signed_in_shopper(session):
    return CartStore(session)


@given("a signed-out visitor", target_fixture="cart")
def signed_out_visitor():
    return CartStore(AuthSession())


@given(parsers.cfparse('the shopper has {qty:d} of "{title}" in the cart'))
def shopper_has_items(cart, products, qty, title):
    cart.add_to_cart(str(products[title].id), qty)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the shopper adds {qty:d} of "{title}" to the cart'))
def shopper_adds(cart, products, qty, title):
    cart.add_to_cart(str(products[title].id), qty)


@when(parsers.cfparse('the visitor tries to add {qty:d} of "{title}" to the cart'))
def visitor_adds(cart, products, error, qty, title):
    try:
        cart.add_to_cart(str(products[title].id), qty)
    except Unauthenticated as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_n_lines_singular(cart, count):
    assert len(cart.items) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_n_lines(cart, count):
    assert len(cart.items) == count


@then(parsers.cfparse("the cart item count is {count:d}"))
def cart_item_count(cart, count):
    assert cart.item_count == count


@then(parsers.cfparse("the cart total is {total:f}"))
def cart_total(cart, total):
    assert cart.total == pytest.approx(total)


@then("no order exists")
def no_order_exists():
    assert current_domain.repository_for(Order)._dao.query.all().items == []


@then("no cart exists for the visitor")
def no_cart_exists():
    assert current_domain.repository_for(ShoppingCart)._dao.query.all().items == []
