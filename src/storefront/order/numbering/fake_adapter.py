"""Configurable fake order number generator for testing.

Issues predictable numbers (`TEST-00001`, `TEST-00002`, ...) without touching
persistence, and can be told to fail so checkout error paths can be driven.
"""

from storefront.order.numbering.port import OrderNumberGenerator
from storefront.shared.errors import BackendError


class FakeOrderNumbers(OrderNumberGenerator):
    def __init__(self, prefix: str = "TEST") -> None:
        self.prefix = prefix
        self.should_succeed: bool = True
        self.failure_reason: str = "Order number service unavailable"
        self.issued: list[str] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Order number service unavailable") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def generate(self) -> str:
        if not self.should_succeed:
            raise BackendError(self.failure_reason)

        number = f"{self.prefix}-{len(self.issued) + 1:05d}"
        self.issued.append(number)
        return number
