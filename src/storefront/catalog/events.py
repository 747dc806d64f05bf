"""Domain events for the Product and Category aggregates."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A product was added to the catalog by an admin."""

    __version__ = 1

    product_id = Identifier(required=True)
    title = String(required=True)
    slug = String(required=True)
    price = Float(required=True)
    category_id = Identifier()
    stock_quantity = Integer(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductPriceChanged:
    """A product's selling price or compare-at price was changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_price = Float(required=True)
    new_price = Float(required=True)
    compare_price = Float()


@storefront.event(part_of="Product")
class ProductStockAdjusted:
    """A product's stock level was corrected by an admin."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    reason = String()


@storefront.event(part_of="Product")
class ProductActivated:
    """A product became visible to shoppers."""

    __version__ = 1

    product_id = Identifier(required=True)
    activated_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDeactivated:
    """A product was hidden from shoppers."""

    __version__ = 1

    product_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)


@storefront.event(part_of="Category")
class CategoryCreated:
    """A new catalog category was created."""

    __version__ = 1

    category_id = Identifier(required=True)
    name = String(required=True)
    slug = String(required=True)
    parent_id = Identifier()
