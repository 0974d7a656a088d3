"""Service provider helpers for wiring the order services.

The factories below build the domain services over the Django ORM
repository. Order id allocation parameters come from settings
(``ORDER_ID_LENGTH`` and ``ORDER_ID_MAX_ATTEMPTS``).
"""

from django.conf import settings

from .domain import OrderQueryService, OrderService, UniquenessOracle
from .ids import DEFAULT_LENGTH, DEFAULT_MAX_ATTEMPTS, OrderIdAllocator
from .repository import DjangoOrderRepository


def get_order_service() -> OrderService:
    """Return an ``OrderService`` backed by the database.

    Returns:
        OrderService: Service with a Django repository and an allocator
        checking candidates against the same repository.
    """
    repository = DjangoOrderRepository()
    oracle = UniquenessOracle(repository)
    allocator = OrderIdAllocator(
        oracle.order_id_exists,
        base_length=getattr(settings, "ORDER_ID_LENGTH", DEFAULT_LENGTH),
        max_attempts=getattr(settings, "ORDER_ID_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
    )
    return OrderService(repository=repository, allocator=allocator, oracle=oracle)


def get_query_service() -> OrderQueryService:
    return OrderQueryService(DjangoOrderRepository())
