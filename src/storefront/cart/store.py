"""Session-bound view of the signed-in customer's cart.

`CartStore` keeps a list of `CartLine`s, each joined with the current
Product, and re-reads it after every mutation. Totals are computed from that
list on every access.
"""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.auth.session import AuthSession
from storefront.cart.cart import ShoppingCart
from storefront.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity
from storefront.catalog.product import Product
from storefront.pricing.calculator import PriceBreakdown, calculate
from storefront.shared.errors import BackendError, NotFound, StorefrontError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CartLine:
    id: str
    product_id: str
    quantity: int
    product: Product

    @property
    def unit_price(self) -> float:
        return self.product.price

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity

    @property
    def can_increment(self) -> bool:
        return self.quantity < (self.product.stock_quantity or 0)


class CartStore:
    def __init__(self, session: AuthSession):
        self.session = session
        self.items: list[CartLine] = []
        session.subscribe(self._on_session_change)
        if session.is_authenticated:
            self.fetch()

    def close(self) -> None:
        """Stop following the session. The current lines stay as they are."""
        self.session.unsubscribe(self._on_session_change)

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def total(self) -> float:
        return sum(line.line_total for line in self.items)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def pricing(self) -> PriceBreakdown:
        return calculate(self.total)

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def fetch(self) -> None:
        """Reload the cart. On failure the previous lines are kept."""
        if not self.session.is_authenticated:
            self.items = []
            return

        try:
            self.items = self._load_lines(self.session.user_id)
        except Exception as exc:
            logger.error("cart.fetch_failed", user_id=self.session.user_id, error=str(exc), exc_info=True)

    def _load_lines(self, customer_id) -> list[CartLine]:
        cart = current_domain.repository_for(ShoppingCart).for_customer(customer_id)
        if cart is None:
            return []

        product_repo = current_domain.repository_for(Product)
        lines = []
        for item in sorted(cart.items, key=lambda i: i.added_at):
            try:
                product = product_repo.get(item.product_id)
            except ObjectNotFoundError:
                logger.warning("cart.product_missing", item_id=str(item.id), product_id=str(item.product_id))
                continue
            lines.append(
                CartLine(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    quantity=item.quantity,
                    product=product,
                )
            )
        return lines

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_to_cart(self, product_id: str, quantity: int = 1) -> None:
        user_id = self.session.require_user("Please sign in to add items to cart")
        self._process(AddToCart(customer_id=user_id, product_id=product_id, quantity=quantity))
        self.fetch()

    def update_quantity(self, cart_item_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_from_cart(cart_item_id)
            return

        user_id = self.session.require_user()
        self._process(UpdateCartQuantity(customer_id=user_id, item_id=cart_item_id, quantity=quantity))
        self.fetch()

    def remove_from_cart(self, cart_item_id: str) -> None:
        user_id = self.session.require_user()
        self._process(RemoveFromCart(customer_id=user_id, item_id=cart_item_id))
        self.fetch()

    def clear_cart(self) -> None:
        user_id = self.session.require_user()
        self._process(ClearCart(customer_id=user_id))
        self.items = []

    def _process(self, command):
        try:
            return current_domain.process(command, asynchronous=False)
        except (StorefrontError, ValidationError):
            raise
        except ObjectNotFoundError as exc:
            raise NotFound(str(exc)) from exc
        except Exception as exc:
            logger.error(
                "cart.mutation_failed",
                command=command.__class__.__name__,
                user_id=self.session.user_id,
                error=str(exc),
                exc_info=True,
            )
            raise BackendError("Cart update failed", details={"cause": str(exc)}) from exc

    def _on_session_change(self, session: AuthSession) -> None:
        if session.is_authenticated:
            self.fetch()
        else:
            self.items = []
