"""Product aggregate root with its ordered image gallery.

Products are read-only from the storefront's point of view; only the admin
commands in `catalog.management` mutate them.
"""

import re
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from storefront.catalog.events import (
    ProductActivated,
    ProductCreated,
    ProductDeactivated,
    ProductPriceChanged,
    ProductStockAdjusted,
)
from storefront.domain import storefront

LOW_STOCK_THRESHOLD = 5

_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@storefront.entity(part_of="Product")
class ProductImage:
    url = String(required=True, max_length=500)
    display_order = Integer(default=0)


@storefront.aggregate
class Product:
    title = String(required=True, max_length=255)
    slug = String(required=True, max_length=200, unique=True)
    description = Text()
    price = Float(required=True, min_value=0.0)
    compare_price = Float(min_value=0.0)
    category_id = Identifier()
    images = HasMany(ProductImage)
    stock_quantity = Integer(default=0, min_value=0)
    sku = String(max_length=50)
    is_active = Boolean(default=True)
    seo_title = String(max_length=70)
    seo_description = String(max_length=160)
    seo_keywords = String(max_length=255)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def slug_must_be_url_safe(self):
        if self.slug and not _SLUG_PATTERN.match(self.slug):
            raise ValidationError({"slug": ["Slug must contain only lowercase alphanumerics separated by hyphens"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        title,
        slug,
        price,
        stock_quantity=0,
        compare_price=None,
        category_id=None,
        description=None,
        images=None,
        sku=None,
        is_active=True,
        seo_title=None,
        seo_description=None,
        seo_keywords=None,
    ):
        now = datetime.now(UTC)
        product = cls(
            title=title,
            slug=slug,
            price=price,
            compare_price=compare_price,
            category_id=category_id,
            description=description,
            stock_quantity=stock_quantity,
            sku=sku,
            is_active=is_active,
            seo_title=seo_title,
            seo_description=seo_description,
            seo_keywords=seo_keywords,
            created_at=now,
            updated_at=now,
        )
        with atomic_change(product):
            for position, url in enumerate(images or []):
                product.add_images(ProductImage(url=url, display_order=position))

        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                title=title,
                slug=slug,
                price=price,
                category_id=category_id,
                stock_quantity=stock_quantity,
                created_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Presentation helpers
    # -------------------------------------------------------------------
    @property
    def image_urls(self) -> list[str]:
        return [image.url for image in sorted(self.images, key=lambda i: i.display_order or 0)]

    @property
    def primary_image(self) -> str | None:
        urls = self.image_urls
        return urls[0] if urls else None

    @property
    def discount_percentage(self) -> int | None:
        """Whole-number saving against the compare-at price, if any."""
        if not self.compare_price or self.compare_price <= self.price:
            return None
        return round((self.compare_price - self.price) / self.compare_price * 100)

    @property
    def in_stock(self) -> bool:
        return (self.stock_quantity or 0) > 0

    @property
    def low_stock(self) -> bool:
        return 0 < (self.stock_quantity or 0) <= LOW_STOCK_THRESHOLD

    def clamp_quantity(self, requested: int) -> int:
        """Bound a picker quantity to [1, stock_quantity]."""
        return max(1, min(self.stock_quantity or 0, requested))

    # -------------------------------------------------------------------
    # Admin mutations
    # -------------------------------------------------------------------
    def change_price(self, price, compare_price=None):
        previous_price = self.price
        self.price = price
        self.compare_price = compare_price
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductPriceChanged(
                product_id=str(self.id),
                previous_price=previous_price,
                new_price=price,
                compare_price=compare_price,
            )
        )

    def adjust_stock(self, delta, reason=None):
        previous_quantity = self.stock_quantity or 0
        new_quantity = previous_quantity + delta
        if new_quantity < 0:
            raise ValidationError(
                {"stock_quantity": [f"Cannot reduce stock below zero (on hand {previous_quantity}, change {delta})"]}
            )

        self.stock_quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductStockAdjusted(
                product_id=str(self.id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
                reason=reason,
            )
        )

    def activate(self):
        if self.is_active:
            raise ValidationError({"is_active": ["Product is already active"]})
        now = datetime.now(UTC)
        self.is_active = True
        self.updated_at = now
        self.raise_(ProductActivated(product_id=str(self.id), activated_at=now))

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"is_active": ["Product is already inactive"]})
        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(ProductDeactivated(product_id=str(self.id), deactivated_at=now))
