"""Tests for shopper-facing catalog reads."""

import pytest
from protean import current_domain
from storefront.catalog.category import Category
from storefront.catalog.management import CreateCategory, DeactivateProduct
from storefront.catalog.product import Product
from storefront.catalog.store import CatalogStore
from storefront.shared.errors import NotFound
from storefront.shared.result import Err, ErrorKind, Ok


@pytest.fixture()
def store():
    return CatalogStore()


def _create_category(name, slug):
    return current_domain.process(CreateCategory(name=name, slug=slug), asynchronous=False)


class TestListProducts:
    def test_newest_first(self, store, create_product):
        create_product(title="First")
        create_product(title="Second")
        create_product(title="Third")

        result = store.list_products()

        assert isinstance(result, Ok)
        assert [p.title for p in result.value] == ["Third", "Second", "First"]

    def test_only_active_products(self, store, create_product):
        visible = create_product(title="Visible")
        hidden = create_product(title="Hidden")
        current_domain.process(DeactivateProduct(product_id=hidden.id), asynchronous=False)

        products = store.list_products().unwrap()

        assert [p.id for p in products] == [visible.id]

    def test_filter_by_category(self, store, create_product):
        bags = _create_category("Bags", "bags")
        mugs = _create_category("Mugs", "mugs")
        create_product(title="Tote", category_id=bags)
        create_product(title="Mug", category_id=mugs)

        products = store.list_products(category_id=bags).unwrap()

        assert [p.title for p in products] == ["Tote"]

    def test_empty_catalog(self, store):
        assert store.list_products().unwrap() == []


class TestGetProduct:
    def test_by_slug(self, store, create_product):
        create_product(title="Canvas Tote", slug="canvas-tote")
        product = store.get_product("canvas-tote").unwrap()
        assert product.title == "Canvas Tote"

    def test_missing_slug_is_not_found(self, store):
        result = store.get_product("nope")
        assert isinstance(result, Err)
        assert result.kind == ErrorKind.NOT_FOUND
        with pytest.raises(NotFound):
            result.unwrap()

    def test_inactive_product_is_not_found(self, store, create_product):
        create_product(slug="retired", is_active=False)
        assert store.get_product("retired").kind == ErrorKind.NOT_FOUND


class TestListCategories:
    def test_alphabetical(self, store):
        _create_category("Mugs", "mugs")
        _create_category("apparel", "apparel")
        _create_category("Bags", "bags")

        names = [c.name for c in store.list_categories().unwrap()]

        assert names == ["apparel", "Bags", "Mugs"]


class TestFailures:
    def test_backend_failure_is_an_err_and_remembered(self, store, monkeypatch):
        repo = current_domain.repository_for(Product)

        def _boom(self, category_id=None):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(type(repo), "find_active", _boom)

        result = store.list_products()

        assert isinstance(result, Err)
        assert result.kind == ErrorKind.BACKEND
        assert store.error == result

    def test_successful_read_clears_error(self, store, monkeypatch):
        repo = current_domain.repository_for(Category)

        def _boom(self):
            raise RuntimeError("timeout")

        with monkeypatch.context() as patch:
            patch.setattr(type(repo), "find_all_by_name", _boom)
            store.list_categories()
        assert store.error is not None

        assert store.list_categories().is_ok()
        assert store.error is None
