"""Order number generator port (abstract interface).

Order placement asks a generator for a fresh, unique, human-readable number.
Adapters are swapped through `storefront.order.numbering.set_generator`.
"""

from abc import ABC, abstractmethod


class OrderNumberGenerator(ABC):
    @abstractmethod
    def generate(self) -> str:
        """Return a number no other order has been given."""
