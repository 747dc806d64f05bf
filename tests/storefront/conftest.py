import os
import uuid

import pytest


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain
    from storefront.order.numbering import reset_generator

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    reset_generator()
    ctx.pop()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def create_product():
    """Create a product through the admin command and return it."""
    from protean import current_domain
    from storefront.catalog.management import CreateProduct
    from storefront.catalog.product import Product

    def _create(**overrides):
        defaults = {
            "title": "Test Product",
            "slug": f"test-product-{uuid.uuid4().hex[:8]}",
            "price": 20.0,
            "stock_quantity": 10,
        }
        defaults.update(overrides)
        product_id = current_domain.process(CreateProduct(**defaults), asynchronous=False)
        return current_domain.repository_for(Product).get(product_id)

    return _create


@pytest.fixture()
def session():
    """A signed-in shopper with a registered profile."""
    from storefront.auth.session import AuthSession

    auth = AuthSession()
    auth.sign_up("shopper-001", "shopper@example.com", full_name="Sam Shopper")
    return auth


@pytest.fixture()
def shipping_form():
    from storefront.checkout.form import ShippingForm

    return ShippingForm(
        full_name="Sam Shopper",
        email="shopper@example.com",
        phone="+1-555-0100",
        address="1 Market Street",
        city="Springfield",
        state="IL",
        zip_code="62701",
        country="US",
    )
