"""Storefront bounded context: catalog, cart, checkout, orders, and blog.

Handles the shopper-facing catalog reads, the per-user shopping cart, the
checkout flow that turns a cart into an order, order history, and the small
admin back-office that maintains products, categories, orders and posts.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_file_prefix="storefront")

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
