"""Unit tests for order id generation and allocation.

The allocator is driven with a scripted generator and a set of taken ids
so the escalation and exhaustion rules can be checked without randomness
or a database.
"""
import logging

import pytest

from apps.orders.domain import OrderIdExhaustedError
from apps.orders.ids import (
    DEFAULT_CHARSET,
    OrderIdAllocator,
    effective_length,
    generate_order_id,
)
from apps.orders.tests.stubs import ScriptedGenerator


def test_default_charset_has_32_unambiguous_symbols():
    assert len(DEFAULT_CHARSET) == 32
    assert len(set(DEFAULT_CHARSET)) == 32
    for confusable in "0O1I":
        assert confusable not in DEFAULT_CHARSET


@pytest.mark.parametrize("length", [0, 1, 8, 13, 64])
def test_generate_length_and_membership(length):
    value = generate_order_id(length)
    assert len(value) == length
    assert set(value) <= set(DEFAULT_CHARSET)


def test_generate_custom_charset():
    value = generate_order_id(50, "xyz")
    assert len(value) == 50
    assert set(value) <= {"x", "y", "z"}


def test_generate_single_symbol_charset():
    assert generate_order_id(5, "A") == "AAAAA"


def test_generate_zero_length_is_empty():
    assert generate_order_id(0) == ""


def test_generate_uses_secrets(monkeypatch):
    calls = []

    def fake_choice(seq):
        calls.append(seq)
        return seq[0]

    monkeypatch.setattr("apps.orders.ids.secrets.choice", fake_choice)
    assert generate_order_id(3) == "222"
    assert calls == [DEFAULT_CHARSET] * 3


def test_generate_rejects_bad_arguments():
    with pytest.raises(ValueError):
        generate_order_id(-1)
    with pytest.raises(ValueError):
        generate_order_id(4, "")


def test_effective_length_keeps_base_on_first_retry():
    assert [effective_length(a, 8) for a in range(5)] == [8, 8, 9, 10, 11]


def test_allocate_escalates_after_second_collision():
    gen = ScriptedGenerator()
    taken = {"ID1", "ID2"}
    allocator = OrderIdAllocator(taken.__contains__, generate=gen)

    assert allocator.allocate(base_length=4, max_attempts=3) == "ID3"
    assert gen.lengths == [4, 4, 5]


def test_allocate_returns_first_free_candidate():
    gen = ScriptedGenerator()
    allocator = OrderIdAllocator(lambda _: False, generate=gen)
    assert allocator.allocate() == "ID1"
    assert gen.lengths == [8]


def test_allocate_exhausts_after_max_attempts(caplog):
    gen = ScriptedGenerator()
    allocator = OrderIdAllocator(lambda _: True, generate=gen)

    with caplog.at_level(logging.WARNING, logger="apps.orders.ids"):
        with pytest.raises(OrderIdExhaustedError) as e:
            allocator.allocate(base_length=6, max_attempts=4)

    assert e.value.attempts == 4
    assert gen.lengths == [6, 6, 7, 8]
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 4
    assert any(r.levelno == logging.ERROR for r in caplog.records)


def test_allocate_uses_constructor_defaults():
    gen = ScriptedGenerator()
    allocator = OrderIdAllocator(lambda _: True, generate=gen, base_length=3, max_attempts=2)
    with pytest.raises(OrderIdExhaustedError) as e:
        allocator.allocate()
    assert e.value.attempts == 2
    assert gen.lengths == [3, 3]


@pytest.mark.parametrize("kwargs", [{"base_length": 0}, {"max_attempts": 0}])
def test_allocate_rejects_bad_budget(kwargs):
    allocator = OrderIdAllocator(lambda _: False)
    with pytest.raises(ValueError):
        allocator.allocate(**kwargs)
