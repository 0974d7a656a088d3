"""Unit tests for OrderQueryService over the in-memory repository."""
from datetime import date

from apps.orders.adapters import InMemoryOrderRepository
from apps.orders.domain import Order, OrderQuery, OrderQueryService


def seed(*orders):
    return OrderQueryService(InMemoryOrderRepository(list(orders)))


def test_list_description_filter_is_case_insensitive_substring():
    svc = seed(
        Order(order_number="A", order_id="A", payment_description="Test payment"),
        Order(order_number="B", order_id="B", payment_description="other"),
        Order(order_number="C", order_id="C"),
    )
    assert [o.order_number for o in svc.list(payment_description="test")] == ["A"]
    assert [o.order_number for o in svc.list(payment_description="PAYM")] == ["A"]


def test_list_country_filter_is_exact():
    svc = seed(
        Order(order_number="A", order_id="A", country="Latvia"),
        Order(order_number="B", order_id="B", country="latvia"),
        Order(order_number="C", order_id="C", country="Latvian"),
    )
    assert [o.order_number for o in svc.list(country="Latvia")] == ["A"]


def test_list_filters_combine_with_and():
    svc = seed(
        Order(order_number="A", order_id="A", country="Latvia", payment_description="rent"),
        Order(order_number="B", order_id="B", country="Estonia", payment_description="rent"),
        Order(order_number="C", order_id="C", country="Latvia", payment_description="food"),
    )
    assert [o.order_number for o in svc.list(payment_description="RENT", country="Latvia")] == ["A"]


def test_list_estonia_first_then_due_date():
    d1, d2, d3 = date(2024, 1, 1), date(2024, 3, 1), date(2024, 2, 1)
    svc = seed(
        Order(order_number="LV", order_id="1", country="Latvia", payment_due_date=d1),
        Order(order_number="EE-late", order_id="2", country="Estonia", payment_due_date=d2),
        Order(order_number="EE-early", order_id="3", country="Estonia", payment_due_date=d3),
    )
    assert [o.order_number for o in svc.list()] == ["EE-early", "EE-late", "LV"]


def test_list_missing_due_dates_sort_last_within_partition():
    svc = seed(
        Order(order_number="EE-none", order_id="1", country="Estonia"),
        Order(order_number="LV", order_id="2", country="Latvia", payment_due_date=date(2020, 1, 1)),
        Order(order_number="EE", order_id="3", country="Estonia", payment_due_date=date(2030, 1, 1)),
        Order(order_number="none", order_id="4"),
    )
    assert [o.order_number for o in svc.list()] == ["EE", "EE-none", "LV", "none"]


def test_list_empty_filters_are_ignored():
    svc = seed(Order(order_number="A", order_id="A", country="Latvia"))
    assert len(svc.list(payment_description="", country="")) == 1


def test_list_no_match_is_empty_list():
    assert seed().list(country="Estonia") == []


def test_list_builds_query_spec():
    class SpyRepo:
        def query(self, spec):
            self.spec = spec
            return []

    repo = SpyRepo()
    OrderQueryService(repo).list(payment_description="x", country="")
    assert repo.spec == OrderQuery(payment_description="x", country=None, priority_country="Estonia")


def test_countries_distinct_sorted_without_blanks():
    svc = seed(*[
        Order(order_number=str(i), order_id=str(i), country=c)
        for i, c in enumerate(["Estonia", "", None, "Latvia", "Estonia"])
    ])
    assert svc.countries() == ["Estonia", "Latvia"]
    assert svc.countries() == svc.countries()


def test_countries_are_case_sensitive():
    svc = seed(
        Order(order_number="1", order_id="1", country="estonia"),
        Order(order_number="2", order_id="2", country="Estonia"),
    )
    assert svc.countries() == ["Estonia", "estonia"]


def test_list_description_filter_folds_non_ascii_letters():
    svc = seed(Order(order_number="A", order_id="A", payment_description="ÄRI makse"))
    assert [o.order_number for o in svc.list(payment_description="äri")] == ["A"]
