"""Domain models, ports and services for orders.

This module contains the dataclasses used as DTOs for orders, the query
specification handed to repositories, protocol definitions (ports) for
persistence, and the two domain services: ``OrderService`` creates orders
with a unique generated ``order_id`` and ``OrderQueryService`` lists them.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Protocol, List

logger = logging.getLogger(__name__)

PRIORITY_COUNTRY = "Estonia"


# ---- Errors ----
class DuplicateKeyError(Exception):
    """A unique key of an order is already taken in the store.

    Raised by repositories when the database rejects an insert on one of
    its unique constraints.

    Attributes:
        field: Domain field name, ``order_number`` or ``order_id``.
        value: The rejected value.
    """

    def __init__(self, field: str, value):
        super().__init__(f"{field} '{value}' already exists")
        self.field = field
        self.value = value


class OrderIdExhaustedError(Exception):
    """Every generated order id candidate collided with a stored one."""

    def __init__(self, attempts: int):
        super().__init__(f"Failed to generate unique order ID after {attempts} attempts")
        self.attempts = attempts


# ---- Enums ----
class CreateOutcome(str, Enum):
    """Possible results of ``OrderService.create``."""

    CREATED = "CREATED"
    DUPLICATE_ORDER_NUMBER = "DUPLICATE_ORDER_NUMBER"
    DUPLICATE_ORDER_ID = "DUPLICATE_ORDER_ID"
    ORDER_ID_EXHAUSTED = "ORDER_ID_EXHAUSTED"


# ---- Entities / DTOs ----
@dataclass
class Order:
    """Container for order data.

    Attributes:
        order_number: Client supplied business key, unique when present.
        order_id: Generated public identifier, None until allocated.
        payment_description: Free text shown to the payer.
        street: Billing address street.
        town: Billing address town.
        country: Billing address country, also used for sorting.
        amount: Amount with two decimal places.
        currency: Currency code (e.g. 'EUR').
        payment_due_date: Date the payment is due.
        id: Store surrogate key, or None if not yet saved.
        created_at: Set by the store on insert.
        updated_at: Set by the store on every save.
    """

    order_number: str | None = None
    order_id: str | None = None
    payment_description: str | None = None
    street: str | None = None
    town: str | None = None
    country: str | None = None
    amount: Decimal | None = None
    currency: str | None = None
    payment_due_date: date | None = None
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class OrderQuery:
    """Filter and sort specification for listing orders.

    Repositories must return orders matching every non-empty filter,
    sorted with ``priority_country`` orders first and then by
    ``payment_due_date`` ascending with missing dates last.

    Attributes:
        payment_description: Case-insensitive substring of the payment
            description.
        country: Exact (case-sensitive) country.
        priority_country: Country whose orders are listed first.
    """

    payment_description: str | None = None
    country: str | None = None
    priority_country: str = PRIORITY_COUNTRY


@dataclass(frozen=True)
class CreateOrderResult:
    """Tagged result of an order creation.

    Attributes:
        outcome: Which case occurred.
        order: The persisted order when ``outcome`` is CREATED.
        value: The colliding key for the DUPLICATE_* outcomes.
        attempts: The exhausted attempt budget for ORDER_ID_EXHAUSTED.
    """

    outcome: CreateOutcome
    order: Order | None = None
    value: str | None = None
    attempts: int | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is CreateOutcome.CREATED


# ---- Ports (DIP) ----
class OrderRepositoryPort(Protocol):
    """Port describing order persistence used by the domain."""

    def create(self, order: Order) -> Order:
        """Insert ``order`` and return it with store-assigned fields.

        Raises:
            DuplicateKeyError: If a unique constraint rejects the insert.
        """
        raise NotImplementedError()

    def count(self, **predicate) -> int:
        """Count orders whose fields equal every ``predicate`` item."""
        raise NotImplementedError()

    def query(self, spec: OrderQuery) -> List[Order]:
        """Return orders matching and sorted according to ``spec``."""
        raise NotImplementedError()

    def distinct_countries(self) -> List[str]:
        """Return distinct non-empty countries sorted ascending."""
        raise NotImplementedError()


class OrderIdAllocatorPort(Protocol):
    def allocate(self) -> str:
        """Return an order id no stored order uses.

        Raises:
            OrderIdExhaustedError: When no free id was found.
        """
        raise NotImplementedError()


# ---- Uniqueness checks ----
class UniquenessOracle:
    """Read-only existence checks for the unique keys of an order."""

    def __init__(self, repository: OrderRepositoryPort):
        self.repository = repository

    def order_number_exists(self, order_number: str) -> bool:
        return self.repository.count(order_number=order_number) > 0

    def order_id_exists(self, order_id: str) -> bool:
        return self.repository.count(order_id=order_id) > 0


# ---- Domain services ----
class OrderService:
    """Domain service responsible for creating orders.

    The service checks the business key, allocates an order id and
    persists the order. Expected failures are returned as
    ``CreateOrderResult`` outcomes; the store is left untouched in every
    case but CREATED.
    """

    def __init__(self, repository: OrderRepositoryPort, allocator: OrderIdAllocatorPort, oracle: UniquenessOracle | None = None):
        """Initialize the service with required dependencies.

        Args:
            repository: OrderRepositoryPort used to persist orders.
            allocator: Produces unique order ids.
            oracle: Existence checks; built over ``repository`` if omitted.
        """
        self.repository = repository
        self.allocator = allocator
        self.oracle = oracle or UniquenessOracle(repository)

    def create(self, order: Order) -> CreateOrderResult:
        """Create an order: check order number, allocate id, persist.

        The order number check is a pre-check for a friendly error. Two
        concurrent requests may both pass it, so a unique constraint
        violation raised by the repository is mapped to the same outcome.

        Args:
            order: Order data from the client. ``order_id`` is ignored and
                replaced by the allocated one.

        Returns:
            CreateOrderResult: CREATED with the stored order, or one of
            DUPLICATE_ORDER_NUMBER, DUPLICATE_ORDER_ID, ORDER_ID_EXHAUSTED.

        Raises:
            Exception: Any other repository error, unchanged.
        """
        # 1) Business key
        if order.order_number and self.oracle.order_number_exists(order.order_number):
            return CreateOrderResult(CreateOutcome.DUPLICATE_ORDER_NUMBER, value=order.order_number)

        # 2) Order id
        try:
            order_id = self.allocator.allocate()
        except OrderIdExhaustedError as e:
            return CreateOrderResult(CreateOutcome.ORDER_ID_EXHAUSTED, attempts=e.attempts)

        # 3) Persist
        try:
            saved = self.repository.create(replace(order, order_id=order_id, id=None))
        except DuplicateKeyError as e:
            logger.warning("Unique constraint rejected order: %s", e)
            if e.field == "order_number":
                return CreateOrderResult(CreateOutcome.DUPLICATE_ORDER_NUMBER, value=e.value)
            return CreateOrderResult(CreateOutcome.DUPLICATE_ORDER_ID, value=e.value)
        except Exception:
            logger.exception("Error creating order")
            raise

        logger.info("Created order with ID: %s", order_id, extra={"order_id": order_id})
        return CreateOrderResult(CreateOutcome.CREATED, order=saved)


class OrderQueryService:
    """Read side for orders: filtered listing and the country facet."""

    def __init__(self, repository: OrderRepositoryPort):
        self.repository = repository

    def list(self, payment_description: str | None = None, country: str | None = None) -> List[Order]:
        """List orders, priority country first, then by due date.

        Empty filter values count as absent.

        Args:
            payment_description: Case-insensitive substring filter.
            country: Exact country filter.

        Returns:
            List of matching orders, possibly empty.
        """
        spec = OrderQuery(
            payment_description=payment_description or None,
            country=country or None,
        )
        return self.repository.query(spec)

    def countries(self) -> List[str]:
        """Distinct countries used by orders, for the country filter."""
        return self.repository.distinct_countries()
