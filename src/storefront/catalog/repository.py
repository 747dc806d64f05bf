"""Custom repositories for shopper-facing catalog reads."""

from storefront.catalog.category import Category
from storefront.catalog.product import Product
from storefront.domain import storefront


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_active(self, category_id: str | None = None) -> list[Product]:
        """Active products, newest first, optionally within one category."""
        criteria = {"is_active": True}
        if category_id:
            criteria["category_id"] = category_id

        products = self._dao.query.filter(**criteria).all().items
        return sorted(products, key=lambda p: p.created_at, reverse=True)

    def find_active_by_slug(self, slug: str) -> Product | None:
        product = self.find_by_slug(slug)
        return product if product and product.is_active else None

    def find_by_slug(self, slug: str) -> Product | None:
        """Any product with this slug, active or not. Slugs are unique."""
        matches = self._dao.query.filter(slug=slug).all().items
        return matches[0] if matches else None


@storefront.repository(part_of=Category)
class CategoryRepository:
    def find_all_by_name(self) -> list[Category]:
        categories = self._dao.query.all().items
        return sorted(categories, key=lambda c: (c.name or "").lower())

    def find_by_slug(self, slug: str) -> Category | None:
        matches = self._dao.query.filter(slug=slug).all().items
        return matches[0] if matches else None
