"""Shared fixtures for the orders test-suite."""
import pytest

from apps.orders.adapters import InMemoryOrderRepository
from apps.orders.domain import OrderService, UniquenessOracle
from apps.orders.ids import OrderIdAllocator


@pytest.fixture
def memory_repo():
    return InMemoryOrderRepository()


@pytest.fixture
def make_service():
    """Build an ``OrderService`` over a repository, optionally with a custom generator."""
    def _make(repo, generate=None, **allocator_kwargs):
        oracle = UniquenessOracle(repo)
        if generate is not None:
            allocator_kwargs["generate"] = generate
        allocator = OrderIdAllocator(oracle.order_id_exists, **allocator_kwargs)
        return OrderService(repository=repo, allocator=allocator, oracle=oracle)
    return _make
