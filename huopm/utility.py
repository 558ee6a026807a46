"""Utility of items, transactions and itemsets.

Definitions::

    u(i, T) = q(i, T) * p(i)
    tu(T)   = sum of u(i, T) for i in T
    u(X, T) = sum of u(i, T) for i in X        (X a subset of T)
    u(X)    = sum of u(X, T) for T containing X

Items missing from the profit table have profit 0.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .transactions import Item, Transaction


def item_utility(item: Item, transaction: Transaction, profits: Mapping[Item, float]) -> float:
    """Utility of a single item inside *transaction*; 0 when the item is absent."""
    return transaction.get(item, 0) * profits.get(item, 0)


def transaction_utility(transaction: Transaction, profits: Mapping[Item, float]) -> float:
    total = 0
    for item, quantity in transaction.items():
        total += quantity * profits.get(item, 0)
    return total


def itemset_utility_in_transaction(
    itemset: Sequence[Item], transaction: Transaction, profits: Mapping[Item, float]
) -> float:
    """Utility of *itemset* inside one transaction.

    Callers are expected to pass an itemset contained in *transaction*; any
    item that is absent simply contributes nothing.
    """
    total = 0
    for item in itemset:
        total += item_utility(item, transaction, profits)
    return total


def itemset_utility(itemset: Sequence[Item], database: Sequence[Transaction], profits: Mapping[Item, float]) -> float:
    """Utility of *itemset* over the whole database.

    Scans every transaction once. Returns 0 when no transaction contains the
    itemset.
    """
    total = 0
    for transaction in database:
        if transaction.contains_all(itemset):
            total += itemset_utility_in_transaction(itemset, transaction, profits)
    return total
