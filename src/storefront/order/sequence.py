"""OrderSequence aggregate: a per-day counter behind order numbers."""

from protean.fields import Integer, String

from storefront.domain import storefront
from storefront.order.events import OrderNumberIssued


@storefront.aggregate
class OrderSequence:
    day = String(identifier=True, max_length=8)  # YYYYMMDD
    last_value = Integer(default=0, min_value=0)

    def next_value(self) -> int:
        self.last_value = (self.last_value or 0) + 1
        self.raise_(OrderNumberIssued(day=self.day, value=self.last_value))
        return self.last_value
