"""Occupancy of itemsets.

``o(X, T) = |X| / |T|`` for ``X`` contained in ``T``, and ``o(X)`` is the mean
of ``o(X, T)`` over the transactions that contain ``X``. Values are exact
:class:`fractions.Fraction` instances.
"""

from __future__ import annotations

from collections.abc import Sequence
from fractions import Fraction
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .transactions import Item, Transaction


def itemset_occupancy_in_transaction(itemset: Sequence[Item], transaction: Transaction) -> Fraction:
    if not transaction:
        return Fraction(0)
    return Fraction(len(itemset), len(transaction))


def itemset_occupancy(itemset: Sequence[Item], database: Sequence[Transaction]) -> Fraction:
    """Average occupancy of *itemset* across the transactions containing it.

    An itemset without support has occupancy ``Fraction(0)``. That value only
    avoids a division by zero; it says nothing about how rare the itemset is.
    """
    count = 0
    total = Fraction(0)
    for transaction in database:
        if transaction.contains_all(itemset):
            count += 1
            total += itemset_occupancy_in_transaction(itemset, transaction)
    if count == 0:
        return Fraction(0)
    return total / count
