"""BDD tests for the shopper's cart."""

from pytest_bdd import parsers, scenarios, then, when
from storefront.shared.errors import Unauthenticated

scenarios("features/cart_items.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the shopper sets the "{title}" quantity to {qty:d}'))
def set_quantity(cart, products, title, qty):
    line = next(line for line in cart.items if line.product_id == str(products[title].id))
    cart.update_quantity(line.id, qty)


@when("the shopper clears the cart")
def clear_cart(cart):
    cart.clear_cart()


@when("the shopper signs out")
def sign_out(cart):
    cart.session.sign_out()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the action fails asking the visitor to sign in")
def action_fails_unauthenticated(error):
    assert isinstance(error["exc"], Unauthenticated)
    assert error["exc"].message == "Please sign in to add items to cart"
