"""Tests for item, transaction and itemset utilities."""

from __future__ import annotations

import pytest

from huopm import (
    Transaction,
    item_utility,
    itemset_utility,
    itemset_utility_in_transaction,
    transaction_utility,
)


def test_item_utility(database, profits) -> None:
    assert item_utility("A", database[0], profits) == 8
    assert item_utility("D", database[0], profits) == 0


def test_item_missing_from_profit_table() -> None:
    t = Transaction({"A": 3, "Z": 10})
    assert item_utility("Z", t, {"A": 1}) == 0
    assert transaction_utility(t, {"A": 1}) == 3


@pytest.mark.parametrize("tid, expected", [(0, 17), (1, 6), (2, 13), (3, 11)])
def test_transaction_utility(database, profits, tid, expected) -> None:
    assert transaction_utility(database[tid], profits) == expected


def test_itemset_utility_in_transaction(database, profits) -> None:
    assert itemset_utility_in_transaction(["A", "B"], database[0], profits) == 14
    assert itemset_utility_in_transaction(["A", "B", "C"], database[0], profits) == 17


@pytest.mark.parametrize(
    "itemset, expected",
    [
        (["A"], 16),
        (["B"], 12),
        (["C"], 18),
        (["D"], 1),
        (["A", "B"], 20),
        (["A", "C"], 21),
        (["B", "C"], 22),
        (["A", "D"], 5),
        (["A", "B", "C"], 17),
    ],
)
def test_itemset_utility(database, profits, itemset, expected) -> None:
    assert itemset_utility(itemset, database, profits) == expected


def test_itemset_utility_is_order_independent(database, profits) -> None:
    assert itemset_utility(["C", "A", "B"], database, profits) == itemset_utility(["A", "B", "C"], database, profits)


def test_unsupported_itemset_has_zero_utility(database, profits) -> None:
    assert itemset_utility(["B", "D"], database, profits) == 0
    assert itemset_utility(["Z"], database, profits) == 0


def test_utility_sums_supporting_transactions(database, profits) -> None:
    itemset = ["A", "C"]
    per_transaction = [
        itemset_utility_in_transaction(itemset, t, profits) for t in database if t.contains_all(itemset)
    ]
    assert per_transaction == [11, 10]
    assert itemset_utility(itemset, database, profits) == sum(per_transaction)


def test_empty_database(profits) -> None:
    assert itemset_utility(["A"], [], profits) == 0


def test_float_profits() -> None:
    db = [Transaction({"A": 2, "B": 1})]
    assert itemset_utility(["A", "B"], db, {"A": 0.25, "B": 1.5}) == 2.0
