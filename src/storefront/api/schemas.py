"""Pydantic request/response schemas for the storefront API.

These are external contracts, kept separate from the Protean aggregates and
commands they are built from.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from storefront.pricing.calculator import PriceBreakdown


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class IdResponse(BaseModel):
    id: str


class PriceSummary(BaseModel):
    subtotal: float
    shipping: float
    tax: float
    total: float
    display: dict[str, str]

    @classmethod
    def from_breakdown(cls, breakdown: PriceBreakdown) -> "PriceSummary":
        return cls(
            subtotal=breakdown.subtotal,
            shipping=breakdown.shipping,
            tax=breakdown.tax,
            total=breakdown.total,
            display=breakdown.as_display(),
        )


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------
class ProductResponse(BaseModel):
    id: str
    title: str
    slug: str
    description: str | None = None
    price: float
    compare_price: float | None = None
    discount_percentage: int | None = None
    category_id: str | None = None
    images: list[str] = []
    primary_image: str | None = None
    stock_quantity: int
    in_stock: bool
    low_stock: bool
    sku: str | None = None
    seo_title: str | None = None
    seo_description: str | None = None
    seo_keywords: str | None = None

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            id=str(product.id),
            title=product.title,
            slug=product.slug,
            description=product.description,
            price=product.price,
            compare_price=product.compare_price,
            discount_percentage=product.discount_percentage,
            category_id=str(product.category_id) if product.category_id else None,
            images=product.image_urls,
            primary_image=product.primary_image,
            stock_quantity=product.stock_quantity or 0,
            in_stock=product.in_stock,
            low_stock=product.low_stock,
            sku=product.sku,
            seo_title=product.seo_title,
            seo_description=product.seo_description,
            seo_keywords=product.seo_keywords,
        )


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    parent_id: str | None = None

    @classmethod
    def from_category(cls, category) -> "CategoryResponse":
        return cls(
            id=str(category.id),
            name=category.name,
            slug=category.slug,
            description=category.description,
            parent_id=str(category.parent_id) if category.parent_id else None,
        )


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class CartLineResponse(BaseModel):
    id: str
    product_id: str
    title: str
    slug: str
    image: str | None = None
    unit_price: float
    quantity: int
    line_total: float
    stock_quantity: int
    can_increment: bool

    @classmethod
    def from_line(cls, line) -> "CartLineResponse":
        return cls(
            id=line.id,
            product_id=line.product_id,
            title=line.product.title,
            slug=line.product.slug,
            image=line.product.primary_image,
            unit_price=line.unit_price,
            quantity=line.quantity,
            line_total=line.line_total,
            stock_quantity=line.product.stock_quantity or 0,
            can_increment=line.can_increment,
        )


class CartResponse(BaseModel):
    items: list[CartLineResponse]
    item_count: int
    total: float
    summary: PriceSummary

    @classmethod
    def from_store(cls, store) -> "CartResponse":
        return cls(
            items=[CartLineResponse.from_line(line) for line in store.items],
            item_count=store.item_count,
            total=store.total,
            summary=PriceSummary.from_breakdown(store.pricing()),
        )


# ---------------------------------------------------------------------------
# Checkout & orders
# ---------------------------------------------------------------------------
class PlaceOrderResponse(BaseModel):
    order_id: str
    order_number: str
    message: str
    redirect_to: str


class AddressResponse(BaseModel):
    full_name: str
    phone: str
    address: str
    city: str
    state: str
    zip_code: str
    country: str


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    product_title: str
    product_image: str | None = None
    unit_price: float
    quantity: int
    total_price: float


class OrderResponse(BaseModel):
    id: str
    order_number: str
    status: str
    payment_status: str
    payment_method: str
    subtotal: float
    discount_amount: float
    tax_amount: float
    shipping_amount: float
    total_amount: float
    shipping_address: AddressResponse
    billing_address: AddressResponse
    items: list[OrderItemResponse]
    created_at: datetime

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            order_number=order.order_number,
            status=order.status,
            payment_status=order.payment_status,
            payment_method=order.payment_method,
            subtotal=order.subtotal,
            discount_amount=order.discount_amount,
            tax_amount=order.tax_amount,
            shipping_amount=order.shipping_amount,
            total_amount=order.total_amount,
            shipping_address=AddressResponse(**_address_dict(order.shipping_address)),
            billing_address=AddressResponse(**_address_dict(order.billing_address)),
            items=[
                OrderItemResponse(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    product_title=item.product_title,
                    product_image=item.product_image,
                    unit_price=item.unit_price,
                    quantity=item.quantity,
                    total_price=item.total_price,
                )
                for item in order.items
            ],
            created_at=order.created_at,
        )


def _address_dict(address) -> dict:
    return {
        "full_name": address.full_name,
        "phone": address.phone,
        "address": address.address,
        "city": address.city,
        "state": address.state,
        "zip_code": address.zip_code,
        "country": address.country,
    }


# ---------------------------------------------------------------------------
# Blog
# ---------------------------------------------------------------------------
class BlogPostResponse(BaseModel):
    id: str
    title: str
    slug: str
    excerpt: str | None = None
    content: str
    featured_image: str | None = None
    author_id: str
    published_at: datetime | None = None

    @classmethod
    def from_post(cls, post) -> "BlogPostResponse":
        return cls(
            id=str(post.id),
            title=post.title,
            slug=post.slug,
            excerpt=post.excerpt,
            content=post.content,
            featured_image=post.featured_image,
            author_id=str(post.author_id),
            published_at=post.published_at,
        )


# ---------------------------------------------------------------------------
# Admin requests
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    title: str = Field(..., max_length=255)
    slug: str = Field(..., max_length=200)
    price: float = Field(ge=0)
    compare_price: float | None = Field(None, ge=0)
    category_id: str | None = None
    description: str | None = None
    images: list[str] = []
    stock_quantity: int = Field(ge=0, default=0)
    sku: str | None = Field(None, max_length=50)
    is_active: bool = True
    seo_title: str | None = Field(None, max_length=70)
    seo_description: str | None = Field(None, max_length=160)
    seo_keywords: str | None = Field(None, max_length=255)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Canvas Tote",
                    "slug": "canvas-tote",
                    "price": 24.0,
                    "compare_price": 30.0,
                    "images": ["https://cdn.example.com/tote.jpg"],
                    "stock_quantity": 40,
                }
            ]
        }
    }


class ChangePriceRequest(BaseModel):
    price: float = Field(ge=0)
    compare_price: float | None = Field(None, ge=0)


class AdjustStockRequest(BaseModel):
    delta: int
    reason: str | None = None


class CreateCategoryRequest(BaseModel):
    name: str = Field(..., max_length=100)
    slug: str = Field(..., max_length=120)
    description: str | None = None
    parent_id: str | None = None


class DraftBlogPostRequest(BaseModel):
    title: str = Field(..., max_length=255)
    slug: str = Field(..., max_length=200)
    content: str
    excerpt: str | None = None
    featured_image: str | None = None


class GrantAdminRequest(BaseModel):
    user_id: str


class SignUpRequest(BaseModel):
    user_id: str
    email: str = Field(..., max_length=254)
    full_name: str | None = Field(None, max_length=255)
