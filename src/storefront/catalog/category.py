"""Category aggregate: flat or nested grouping of catalog products."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String, Text

from storefront.catalog.events import CategoryCreated
from storefront.domain import storefront


@storefront.aggregate
class Category:
    name = String(required=True, max_length=100)
    slug = String(required=True, max_length=120, unique=True)
    description = Text()
    parent_id = Identifier()
    created_at = DateTime()

    @classmethod
    def create(cls, name, slug, description=None, parent_id=None):
        category = cls(
            name=name,
            slug=slug,
            description=description,
            parent_id=parent_id,
            created_at=datetime.now(UTC),
        )
        category.raise_(
            CategoryCreated(
                category_id=str(category.id),
                name=name,
                slug=slug,
                parent_id=parent_id,
            )
        )
        return category
