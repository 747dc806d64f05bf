"""FastAPI endpoints for the storefront: catalog, cart, checkout, orders, blog and admin."""

import json

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.api.deps import get_session, http_error, require_admin, unwrap_or_raise
from storefront.api.schemas import (
    AddToCartRequest,
    AdjustStockRequest,
    BlogPostResponse,
    CartResponse,
    CategoryResponse,
    ChangePriceRequest,
    CreateCategoryRequest,
    CreateProductRequest,
    DraftBlogPostRequest,
    GrantAdminRequest,
    IdResponse,
    OrderResponse,
    PlaceOrderResponse,
    PriceSummary,
    ProductResponse,
    SignUpRequest,
    StatusResponse,
    UpdateCartQuantityRequest,
)
from storefront.auth.registration import GrantAdmin, RegisterProfile
from storefront.auth.session import AuthSession
from storefront.blog.management import DraftBlogPost, PublishBlogPost
from storefront.blog.store import BlogStore
from storefront.cart.store import CartStore
from storefront.catalog.management import (
    ActivateProduct,
    AdjustStock,
    ChangePrice,
    CreateCategory,
    CreateProduct,
    DeactivateProduct,
)
from storefront.catalog.store import CatalogStore
from storefront.checkout.form import ShippingForm
from storefront.checkout.orchestrator import CheckoutOrchestrator
from storefront.order.history import OrderHistory
from storefront.order.status import CancelOrder, DeliverOrder, ShipOrder, StartProcessing
from storefront.shared.errors import BackendError, StorefrontError

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
profile_router = APIRouter(prefix="/profiles", tags=["profiles"])
cart_router = APIRouter(prefix="/cart", tags=["cart"])
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
blog_router = APIRouter(prefix="/blog", tags=["blog"])
admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _process(command):
    try:
        return current_domain.process(command, asynchronous=False)
    except (ValidationError, ObjectNotFoundError, StorefrontError) as exc:
        raise http_error(exc) from exc


# --- Catalog endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def list_products(category_id: str | None = None) -> list[ProductResponse]:
    products = unwrap_or_raise(CatalogStore().list_products(category_id))
    return [ProductResponse.from_product(p) for p in products]


@product_router.get("/{slug}", response_model=ProductResponse)
async def get_product(slug: str) -> ProductResponse:
    return ProductResponse.from_product(unwrap_or_raise(CatalogStore().get_product(slug)))


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    categories = unwrap_or_raise(CatalogStore().list_categories())
    return [CategoryResponse.from_category(c) for c in categories]


# --- Profile endpoints ---


@profile_router.post("", status_code=201, response_model=IdResponse)
async def sign_up(body: SignUpRequest) -> IdResponse:
    command = RegisterProfile(user_id=body.user_id, email=body.email, full_name=body.full_name)
    return IdResponse(id=_process(command))


# --- Cart endpoints ---


def _cart_for(session: AuthSession) -> CartStore:
    try:
        session.require_user()
    except StorefrontError as exc:
        raise http_error(exc) from exc
    return CartStore(session)


def _mutate_cart(store: CartStore, mutation, *args) -> CartResponse:
    try:
        mutation(*args)
    except (ValidationError, StorefrontError) as exc:
        raise http_error(exc) from exc
    return CartResponse.from_store(store)


@cart_router.get("", response_model=CartResponse)
async def get_cart(session: AuthSession = Depends(get_session)) -> CartResponse:
    return CartResponse.from_store(_cart_for(session))


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(body: AddToCartRequest, session: AuthSession = Depends(get_session)) -> CartResponse:
    store = _cart_for(session)
    return _mutate_cart(store, store.add_to_cart, body.product_id, body.quantity)


@cart_router.put("/items/{item_id}", response_model=CartResponse)
async def update_cart_item(
    item_id: str, body: UpdateCartQuantityRequest, session: AuthSession = Depends(get_session)
) -> CartResponse:
    store = _cart_for(session)
    return _mutate_cart(store, store.update_quantity, item_id, body.quantity)


@cart_router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_cart_item(item_id: str, session: AuthSession = Depends(get_session)) -> CartResponse:
    store = _cart_for(session)
    return _mutate_cart(store, store.remove_from_cart, item_id)


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(session: AuthSession = Depends(get_session)) -> CartResponse:
    store = _cart_for(session)
    return _mutate_cart(store, store.clear_cart)


# --- Checkout endpoints ---


@checkout_router.get("", response_model=PriceSummary)
async def checkout_summary(session: AuthSession = Depends(get_session)):
    checkout = CheckoutOrchestrator(session, _cart_for(session))
    redirect = checkout.enter()
    if redirect:
        return RedirectResponse(url=redirect, status_code=303)
    return PriceSummary.from_breakdown(checkout.summary())


@checkout_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(body: ShippingForm, session: AuthSession = Depends(get_session)):
    checkout = CheckoutOrchestrator(session, _cart_for(session))
    redirect = checkout.enter()
    if redirect:
        return RedirectResponse(url=redirect, status_code=303)

    outcome = checkout.submit(body)
    if not outcome.succeeded:
        raise http_error(BackendError(outcome.message))

    return PlaceOrderResponse(
        order_id=outcome.order_id,
        order_number=outcome.order_number,
        message=outcome.message,
        redirect_to=outcome.redirect_to,
    )


# --- Order history endpoints ---


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(session: AuthSession = Depends(get_session)) -> list[OrderResponse]:
    orders = unwrap_or_raise(OrderHistory(session).list_orders())
    return [OrderResponse.from_order(o) for o in orders]


# --- Blog endpoints ---


@blog_router.get("", response_model=list[BlogPostResponse])
async def list_posts() -> list[BlogPostResponse]:
    return [BlogPostResponse.from_post(p) for p in unwrap_or_raise(BlogStore().list_posts())]


@blog_router.get("/{slug}", response_model=BlogPostResponse)
async def get_post(slug: str) -> BlogPostResponse:
    return BlogPostResponse.from_post(unwrap_or_raise(BlogStore().get_post(slug)))


# --- Admin endpoints ---


@admin_router.post("/products", status_code=201, response_model=IdResponse)
async def create_product(body: CreateProductRequest) -> IdResponse:
    command = CreateProduct(
        title=body.title,
        slug=body.slug,
        price=body.price,
        compare_price=body.compare_price,
        category_id=body.category_id,
        description=body.description,
        images=json.dumps(body.images),
        stock_quantity=body.stock_quantity,
        sku=body.sku,
        is_active=body.is_active,
        seo_title=body.seo_title,
        seo_description=body.seo_description,
        seo_keywords=body.seo_keywords,
    )
    return IdResponse(id=_process(command))


@admin_router.put("/products/{product_id}/price", response_model=StatusResponse)
async def change_price(product_id: str, body: ChangePriceRequest) -> StatusResponse:
    _process(ChangePrice(product_id=product_id, price=body.price, compare_price=body.compare_price))
    return StatusResponse()


@admin_router.put("/products/{product_id}/stock", response_model=StatusResponse)
async def adjust_stock(product_id: str, body: AdjustStockRequest) -> StatusResponse:
    _process(AdjustStock(product_id=product_id, delta=body.delta, reason=body.reason))
    return StatusResponse()


@admin_router.put("/products/{product_id}/activate", response_model=StatusResponse)
async def activate_product(product_id: str) -> StatusResponse:
    _process(ActivateProduct(product_id=product_id))
    return StatusResponse()


@admin_router.put("/products/{product_id}/deactivate", response_model=StatusResponse)
async def deactivate_product(product_id: str) -> StatusResponse:
    _process(DeactivateProduct(product_id=product_id))
    return StatusResponse()


@admin_router.post("/categories", status_code=201, response_model=IdResponse)
async def create_category(body: CreateCategoryRequest) -> IdResponse:
    command = CreateCategory(
        name=body.name,
        slug=body.slug,
        description=body.description,
        parent_id=body.parent_id,
    )
    return IdResponse(id=_process(command))


_STATUS_COMMANDS = {
    "processing": StartProcessing,
    "shipped": ShipOrder,
    "delivered": DeliverOrder,
    "cancelled": CancelOrder,
}


@admin_router.put("/orders/{order_id}/status/{status}", response_model=StatusResponse)
async def change_order_status(order_id: str, status: str) -> StatusResponse:
    command_cls = _STATUS_COMMANDS.get(status)
    if command_cls is None:
        raise http_error(ValidationError({"status": [f"Unknown order status '{status}'"]}))
    _process(command_cls(order_id=order_id))
    return StatusResponse()


@admin_router.post("/blog", status_code=201, response_model=IdResponse)
async def draft_post(body: DraftBlogPostRequest, session: AuthSession = Depends(get_session)) -> IdResponse:
    command = DraftBlogPost(
        title=body.title,
        slug=body.slug,
        content=body.content,
        author_id=session.user_id,
        excerpt=body.excerpt,
        featured_image=body.featured_image,
    )
    return IdResponse(id=_process(command))


@admin_router.put("/blog/{post_id}/publish", response_model=StatusResponse)
async def publish_post(post_id: str) -> StatusResponse:
    _process(PublishBlogPost(post_id=post_id))
    return StatusResponse()


@admin_router.post("/admins", response_model=StatusResponse)
async def grant_admin(body: GrantAdminRequest) -> StatusResponse:
    _process(GrantAdmin(user_id=body.user_id))
    return StatusResponse()
