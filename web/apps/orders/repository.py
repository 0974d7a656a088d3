"""Repository layer for persisting orders.

``DjangoOrderRepository`` implements ``OrderRepositoryPort`` with the
Django ORM. It returns domain ``Order`` objects so the domain layer is
not coupled to ORM types, executes ``OrderQuery`` specifications, and
turns unique constraint violations into ``DuplicateKeyError``.
"""

from dataclasses import fields
from typing import List

from django.db import IntegrityError, transaction
from django.db.models import Case, F, IntegerField, Value, When

from .domain import DuplicateKeyError, Order, OrderQuery
from .models import OrderModel

ORDER_FIELDS = [f.name for f in fields(Order)]
# Writable columns; id and timestamps belong to the store
WRITABLE_FIELDS = [n for n in ORDER_FIELDS if n not in ("id", "created_at", "updated_at")]
UNIQUE_FIELDS = ("order_number", "order_id")


def to_domain(obj: OrderModel) -> Order:
    """Map an ``OrderModel`` row to a domain ``Order``."""
    return Order(**{name: getattr(obj, name) for name in ORDER_FIELDS})


def _violated_field(exc: IntegrityError) -> str | None:
    # SQLite: "UNIQUE constraint failed: orders.order_number"
    # PostgreSQL: 'duplicate key value violates unique constraint "orders_order_number_..._uniq"'
    # NOT NULL and other integrity failures are not duplicates
    message = str(exc)
    if "unique constraint" not in message.lower():
        return None
    for name in UNIQUE_FIELDS:
        if name in message:
            return name
    return None


class DjangoOrderRepository:
    """Repository that persists Order domain objects using Django ORM."""

    def create(self, order: Order) -> Order:
        """Insert a new order row.

        The insert runs in its own atomic block so a rejected row rolls
        back to a savepoint and leaves any outer transaction usable.

        Args:
            order: Domain ``Order`` with ``order_id`` already allocated.

        Returns:
            The stored order including ``id``, ``created_at`` and
            ``updated_at``.

        Raises:
            DuplicateKeyError: When ``order_id`` or ``order_number`` is
                already taken.
            IntegrityError: For any other integrity failure.
        """
        try:
            with transaction.atomic():
                obj = OrderModel.objects.create(**{name: getattr(order, name) for name in WRITABLE_FIELDS})
        except IntegrityError as e:
            field = _violated_field(e)
            if field is None:
                raise
            raise DuplicateKeyError(field, getattr(order, field)) from e
        return to_domain(obj)

    def count(self, **predicate) -> int:
        return OrderModel.objects.filter(**predicate).count()

    def query(self, spec: OrderQuery) -> List[Order]:
        """Execute an ``OrderQuery``.

        ``payment_description`` uses ``icontains``. PostgreSQL folds case for
        any letter; SQLite only folds ASCII letters, so there "äri" does not
        match "ÄRI" while ``InMemoryOrderRepository`` does.

        Args:
            spec: Filters and the priority country.

        Returns:
            Matching orders, priority country first, then by due date
            ascending with missing dates last.
        """
        qs = OrderModel.objects.all()
        if spec.payment_description:
            qs = qs.filter(payment_description__icontains=spec.payment_description)
        if spec.country:
            qs = qs.filter(country=spec.country)

        qs = qs.annotate(
            country_rank=Case(
                When(country=spec.priority_country, then=Value(0)),
                default=Value(1),
                output_field=IntegerField(),
            )
        ).order_by("country_rank", F("payment_due_date").asc(nulls_last=True), "id")
        return [to_domain(o) for o in qs]

    def distinct_countries(self) -> List[str]:
        qs = (
            OrderModel.objects.exclude(country__isnull=True)
            .exclude(country="")
            .order_by("country")
            .values_list("country", flat=True)
            .distinct()
        )
        return list(qs)
