"""Transaction-weighted utility (TWU) upper bounds.

``twu(X)`` is the summed transaction utility of every transaction that
contains ``X``. It bounds the utility of ``X`` and of every superset of ``X``
from above, so a branch whose TWU is below ``min_util`` can be dropped
without computing exact utilities.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from fractions import Fraction
from typing import TYPE_CHECKING

from .occupancy import itemset_occupancy_in_transaction
from .utility import itemset_utility_in_transaction, transaction_utility

if TYPE_CHECKING:
    from .transactions import Item, Transaction


def compute_twu(database: Sequence[Transaction], profits: Mapping[Item, float]) -> dict[Item, float]:
    """TWU of every item, keyed in order of first appearance."""
    twu: dict[Item, float] = {}
    for transaction in database:
        tu = transaction_utility(transaction, profits)
        for item in transaction:
            twu[item] = twu.get(item, 0) + tu
    return twu


def itemset_twu(itemset: Sequence[Item], database: Sequence[Transaction], profits: Mapping[Item, float]) -> float:
    """TWU of *itemset*; 0 when no transaction contains it."""
    total = 0
    for transaction in database:
        if transaction.contains_all(itemset):
            total += transaction_utility(transaction, profits)
    return total


class TidsetIndex:
    """Posting lists from item to the indices of the transactions containing it.

    Extending an itemset by one item intersects its tidset with the item's
    posting list instead of rescanning the database. Every aggregate walks
    the tids in ascending order, so sums are accumulated in the same order as
    the scanning functions and the results are identical.

    Parameters
    ----------
    database
        Parsed transactions. Not copied and never mutated.
    profits
        Validated profit table.
    """

    def __init__(self, database: Sequence[Transaction], profits: Mapping[Item, float]):
        self.database = database
        self.profits = profits
        self.transaction_utilities = [transaction_utility(t, profits) for t in database]
        postings: dict[Item, list[int]] = {}
        for tid, transaction in enumerate(database):
            for item in transaction:
                postings.setdefault(item, []).append(tid)
        self._postings = {item: frozenset(tids) for item, tids in postings.items()}

    def __len__(self) -> int:
        return len(self.database)

    @property
    def items(self) -> list[Item]:
        """Every item in the database, in order of first appearance."""
        return list(self._postings)

    def all_tids(self) -> frozenset[int]:
        return frozenset(range(len(self.database)))

    def tidset(self, item: Item) -> frozenset[int]:
        return self._postings.get(item, frozenset())

    def tidset_of(self, itemset: Sequence[Item]) -> frozenset[int]:
        """Indices of the transactions that contain every item of *itemset*."""
        tids = self.all_tids()
        for item in itemset:
            tids = tids & self.tidset(item)
            if not tids:
                break
        return tids

    def twu_of(self, tids: frozenset[int]) -> float:
        total = 0
        for tid in sorted(tids):
            total += self.transaction_utilities[tid]
        return total

    def item_twu(self) -> dict[Item, float]:
        """Same values as :func:`compute_twu`, computed from the posting lists."""
        return {item: self.twu_of(tids) for item, tids in self._postings.items()}

    def utility_of(self, itemset: Sequence[Item], tids: frozenset[int]) -> float:
        total = 0
        for tid in sorted(tids):
            total += itemset_utility_in_transaction(itemset, self.database[tid], self.profits)
        return total

    def occupancy_of(self, itemset: Sequence[Item], tids: frozenset[int]) -> Fraction:
        if not tids:
            return Fraction(0)
        total = Fraction(0)
        for tid in sorted(tids):
            total += itemset_occupancy_in_transaction(itemset, self.database[tid])
        return total / len(tids)
