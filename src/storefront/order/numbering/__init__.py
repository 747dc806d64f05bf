"""Order number generator factory.

Provides get_generator() / set_generator() to swap implementations:
- SequentialOrderNumbers (default), backed by the OrderSequence aggregate
- FakeOrderNumbers for tests
"""

from storefront.order.numbering.port import OrderNumberGenerator
from storefront.order.numbering.sequential import SequentialOrderNumbers

_current_generator: OrderNumberGenerator | None = None


def get_generator() -> OrderNumberGenerator:
    """Return the current generator. Defaults to SequentialOrderNumbers."""
    global _current_generator
    if _current_generator is None:
        _current_generator = SequentialOrderNumbers()
    return _current_generator


def set_generator(generator: OrderNumberGenerator) -> None:
    """Override the active generator (useful for tests)."""
    global _current_generator
    _current_generator = generator


def reset_generator() -> None:
    global _current_generator
    _current_generator = None
