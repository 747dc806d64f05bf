"""Order numbers backed by the persisted `OrderSequence` aggregate.

Numbers look like `ORD-20260115-00042`: the UTC date and that day's running
counter. The sequence is saved through the active unit of work, so a failed
checkout does not consume a number.
"""

from collections.abc import Callable
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.order.numbering.port import OrderNumberGenerator
from storefront.order.sequence import OrderSequence

PREFIX = "ORD"


class SequentialOrderNumbers(OrderNumberGenerator):
    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self.clock = clock or (lambda: datetime.now(UTC))

    def generate(self) -> str:
        day = self.clock().strftime("%Y%m%d")
        repo = current_domain.repository_for(OrderSequence)
        try:
            sequence = repo.get(day)
        except ObjectNotFoundError:
            sequence = OrderSequence(day=day)

        value = sequence.next_value()
        repo.add(sequence)
        return f"{PREFIX}-{day}-{value:05d}"
