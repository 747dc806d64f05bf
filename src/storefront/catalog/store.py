"""Shopper-facing catalog reads.

Every read returns a `Result`. A failed read is also remembered on
`CatalogStore.error` so a view can show it next to the last good data; the
caller re-invokes to retry.
"""

from protean.utils.globals import current_domain

from storefront.catalog.category import Category
from storefront.catalog.product import Product
from storefront.shared.result import Err, ErrorKind, Ok, Result
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogStore:
    def __init__(self):
        self.error: Err | None = None

    def list_products(self, category_id: str | None = None) -> Result[list[Product]]:
        try:
            products = current_domain.repository_for(Product).find_active(category_id)
        except Exception as exc:
            return self._failed("catalog.list_products_failed", exc, category_id=category_id)

        self.error = None
        logger.debug("catalog.products_listed", count=len(products), category_id=category_id)
        return Ok(products)

    def get_product(self, slug: str) -> Result[Product]:
        try:
            product = current_domain.repository_for(Product).find_active_by_slug(slug)
        except Exception as exc:
            return self._failed("catalog.get_product_failed", exc, slug=slug)

        if product is None:
            self.error = Err(ErrorKind.NOT_FOUND, f"Product '{slug}' not found")
            return self.error

        self.error = None
        return Ok(product)

    def list_categories(self) -> Result[list[Category]]:
        try:
            categories = current_domain.repository_for(Category).find_all_by_name()
        except Exception as exc:
            return self._failed("catalog.list_categories_failed", exc)

        self.error = None
        return Ok(categories)

    def _failed(self, event: str, exc: Exception, **context) -> Err:
        logger.error(event, error=str(exc), exc_info=True, **context)
        self.error = Err(ErrorKind.BACKEND, str(exc))
        return self.error
