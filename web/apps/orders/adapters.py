"""In-process adapters for the orders domain ports.

``InMemoryOrderRepository`` implements ``OrderRepositoryPort`` without a
database. It is intended for unit tests and local experiments where
deterministic behavior is useful; it enforces the same unique keys and
applies the same ``OrderQuery`` semantics as the Django repository.
"""

import threading
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import List

from .domain import DuplicateKeyError, Order, OrderQuery


class InMemoryOrderRepository:
    """Dictionary-backed implementation of ``OrderRepositoryPort``.

    Args:
        orders: Optional initial orders. They are stored as given, so
            seeding may bypass the ``order_id`` requirement.
    """

    def __init__(self, orders: List[Order] | None = None):
        self._lock = threading.Lock()
        self._rows: dict[int, Order] = {}
        self._next_id = 1
        for o in orders or []:
            self._insert(o)

    def _insert(self, order: Order) -> Order:
        now = datetime.now(timezone.utc)
        stored = replace(order, id=self._next_id, created_at=now, updated_at=now)
        self._rows[stored.id] = stored
        self._next_id += 1
        return stored

    def create(self, order: Order) -> Order:
        """Store a copy of ``order`` and return it with store fields set.

        Raises:
            DuplicateKeyError: When ``order_id`` or ``order_number`` is
                already used by a stored order. ``None`` never collides.
        """
        with self._lock:
            for field in ("order_number", "order_id"):
                value = getattr(order, field)
                if value is not None and any(getattr(o, field) == value for o in self._rows.values()):
                    raise DuplicateKeyError(field, value)
            return replace(self._insert(order))

    def count(self, **predicate) -> int:
        return sum(
            1 for o in self._rows.values()
            if all(getattr(o, k) == v for k, v in predicate.items())
        )

    def query(self, spec: OrderQuery) -> List[Order]:
        rows = list(self._rows.values())
        if spec.payment_description:
            needle = spec.payment_description.lower()
            rows = [o for o in rows if o.payment_description and needle in o.payment_description.lower()]
        if spec.country:
            rows = [o for o in rows if o.country == spec.country]

        rows.sort(key=lambda o: (
            o.country != spec.priority_country,
            o.payment_due_date is None,
            o.payment_due_date or date.min,
            o.id,
        ))
        return [replace(o) for o in rows]

    def distinct_countries(self) -> List[str]:
        return sorted({o.country for o in self._rows.values() if o.country})
