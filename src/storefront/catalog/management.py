"""Catalog back-office: admin commands and handlers for products and categories."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalog.category import Category
from storefront.catalog.product import Product
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    """Add a product to the catalog."""

    title = String(required=True, max_length=255)
    slug = String(required=True, max_length=200)
    price = Float(required=True, min_value=0.0)
    compare_price = Float(min_value=0.0)
    category_id = Identifier()
    description = Text()
    images = Text()  # JSON: list of image URLs, primary first
    stock_quantity = Integer(default=0, min_value=0)
    sku = String(max_length=50)
    is_active = Boolean(default=True)
    seo_title = String(max_length=70)
    seo_description = String(max_length=160)
    seo_keywords = String(max_length=255)


@storefront.command(part_of="Product")
class ChangePrice:
    product_id = Identifier(required=True)
    price = Float(required=True, min_value=0.0)
    compare_price = Float(min_value=0.0)


@storefront.command(part_of="Product")
class AdjustStock:
    """Correct a product's stock level by a signed delta."""

    product_id = Identifier(required=True)
    delta = Integer(required=True)
    reason = String(max_length=255)


@storefront.command(part_of="Product")
class ActivateProduct:
    product_id = Identifier(required=True)


@storefront.command(part_of="Product")
class DeactivateProduct:
    product_id = Identifier(required=True)


@storefront.command(part_of="Category")
class CreateCategory:
    name = String(required=True, max_length=100)
    slug = String(required=True, max_length=120)
    description = Text()
    parent_id = Identifier()


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        repo = current_domain.repository_for(Product)
        if repo.find_by_slug(command.slug) is not None:
            raise ValidationError({"slug": [f"A product with slug '{command.slug}' already exists"]})

        images = json.loads(command.images) if isinstance(command.images, str) else (command.images or [])

        product = Product.create(
            title=command.title,
            slug=command.slug,
            price=command.price,
            compare_price=command.compare_price,
            category_id=command.category_id,
            description=command.description,
            images=images,
            stock_quantity=command.stock_quantity,
            sku=command.sku,
            is_active=command.is_active,
            seo_title=command.seo_title,
            seo_description=command.seo_description,
            seo_keywords=command.seo_keywords,
        )
        repo.add(product)
        logger.info("catalog.product_created", product_id=str(product.id), slug=product.slug)
        return str(product.id)

    @handle(ChangePrice)
    def change_price(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.change_price(command.price, compare_price=command.compare_price)
        repo.add(product)

    @handle(AdjustStock)
    def adjust_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.adjust_stock(command.delta, reason=command.reason)
        repo.add(product)

    @handle(ActivateProduct)
    def activate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.activate()
        repo.add(product)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        if repo.find_by_slug(command.slug) is not None:
            raise ValidationError({"slug": [f"A category with slug '{command.slug}' already exists"]})

        category = Category.create(
            name=command.name,
            slug=command.slug,
            description=command.description,
            parent_id=command.parent_id,
        )
        repo.add(category)
        logger.info("catalog.category_created", category_id=str(category.id), slug=category.slug)
        return str(category.id)
