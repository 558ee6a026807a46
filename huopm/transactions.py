from __future__ import annotations

import time
from collections.abc import Hashable, Iterable, Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from ._compat import frame_kind, to_pandas
from ._validation import check_profit, check_quantity
from .exceptions import DuplicateItem

if TYPE_CHECKING:
    import pandas as pd

    from ._compat import DataFrame

Item = Hashable
Database = list["Transaction"]


class Transaction(Mapping):
    """One transaction: an immutable mapping from item to positive quantity.

    Parameters
    ----------
    entries
        Either a mapping ``{item: quantity}`` or an iterable of
        ``(item, quantity)`` pairs. Pairs may not repeat an item.

    Raises
    ------
    InvalidQuantity
        If a quantity is not a finite number greater than zero.
    DuplicateItem
        If the same item is listed twice.
    """

    __slots__ = ("_quantities",)

    def __init__(self, entries: Mapping[Item, float] | Iterable[tuple[Item, float]]):
        if isinstance(entries, Mapping):
            pairs: Iterable[tuple[Item, float]] = entries.items()
        elif isinstance(entries, (str, bytes)) or not isinstance(entries, Iterable):
            raise TypeError(
                f"Expected a mapping or an iterable of (item, quantity) pairs, got {type(entries).__name__}"
            )
        else:
            pairs = entries

        quantities: dict[Item, float] = {}
        for item, quantity in pairs:
            if item in quantities:
                raise DuplicateItem(f"Item {item!r} appears more than once in the same transaction.")
            check_quantity(item, quantity)
            quantities[item] = quantity
        self._quantities = quantities

    def __getitem__(self, item: Item) -> float:
        return self._quantities[item]

    def __iter__(self) -> Iterator[Item]:
        return iter(self._quantities)

    def __len__(self) -> int:
        return len(self._quantities)

    def __contains__(self, item: object) -> bool:
        return item in self._quantities

    def __repr__(self) -> str:
        return f"Transaction({self._quantities!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (Transaction, (self._quantities,))

    def contains_all(self, itemset: Iterable[Item]) -> bool:
        """Whether every item of *itemset* is present in this transaction."""
        return all(item in self._quantities for item in itemset)


def parse_database(raw_database: Iterable[Mapping[Item, float] | Iterable[tuple[Item, float]] | Transaction]) -> Database:
    """Convert raw transaction records into a list of :class:`Transaction`.

    Records that already are ``Transaction`` instances are kept as they are.

    Examples
    --------
    >>> db = parse_database([{"A": 2, "B": 3}, {"A": 1, "C": 2}])
    >>> len(db[0])
    2
    """
    return [record if isinstance(record, Transaction) else Transaction(record) for record in raw_database]


def as_profit_table(profits: Mapping[Item, float] | pd.Series | None) -> dict[Item, float]:
    """Normalise *profits* into a validated ``dict``.

    Accepts a mapping, a ``pandas.Series`` indexed by item, or ``None`` (empty
    table, every item is worth 0).

    Raises
    ------
    InvalidProfit
        If a profit is negative or not a finite number.
    """
    if profits is None:
        return {}
    if hasattr(profits, "to_dict") and not isinstance(profits, Mapping):
        profits = profits.to_dict()
    if not isinstance(profits, Mapping):
        raise TypeError(f"Expected a mapping or pandas Series of profits, got {type(profits).__name__}")

    table: dict[Item, float] = {}
    for item, profit in profits.items():
        check_profit(item, profit)
        table[item] = profit
    return table


def from_long_format(
    data: DataFrame | Any,
    transaction_col: str | None = None,
    item_col: str | None = None,
    quantity_col: str | None = None,
    verbose: int = 0,
) -> Database:
    """Build a database from long-format transaction lines.

    Each row is one ``(transaction, item, quantity)`` line. Transactions are
    emitted in order of first appearance, and items inside a transaction keep
    their row order.

    Parameters
    ----------
    data
        A pandas / polars DataFrame or a pyarrow Table.
    transaction_col
        Name of the column that identifies transactions. Defaults to the
        first column.
    item_col
        Name of the item column. Defaults to the second column.
    quantity_col
        Name of the quantity column. Defaults to the third column.
    verbose
        Print progress when > 0.

    Returns
    -------
    list[Transaction]

    Examples
    --------
    >>> import pandas as pd
    >>> df = pd.DataFrame({
    ...     "order_id": [1, 1, 2],
    ...     "item": ["A", "B", "A"],
    ...     "qty": [2, 3, 1],
    ... })
    >>> db = from_long_format(df)
    >>> [dict(t) for t in db]
    [{'A': 2, 'B': 3}, {'A': 1}]
    """
    if frame_kind(data) == "records":
        raise TypeError(f"Expected a Pandas/Polars DataFrame or a PyArrow Table, got {type(data)}")

    df = to_pandas(data)
    if df.shape[1] < 3 and (transaction_col is None or item_col is None or quantity_col is None):
        raise ValueError("Long-format data needs a transaction, an item and a quantity column.")

    txn_col = transaction_col or df.columns[0]
    itm_col = item_col or df.columns[1]
    qty_col = quantity_col or df.columns[2]

    # groupby would drop these rows silently
    if df[[txn_col, itm_col]].isna().to_numpy().any():
        raise ValueError(f"Null values found in '{txn_col}' or '{itm_col}'; every line needs a transaction and an item.")

    if verbose:
        print(f"[{time.strftime('%X')}] Grouping {len(df):,} transaction lines by '{txn_col}'...")

    database: Database = []
    for _, group in df.groupby(txn_col, sort=False):
        pairs = zip(group[itm_col].tolist(), group[qty_col].tolist(), strict=True)
        database.append(Transaction(pairs))

    if verbose:
        print(f"[{time.strftime('%X')}] Built {len(database):,} transactions.")
    return database


def from_records(records: Sequence[Any], verbose: int = 0) -> Database:
    """Shorthand for :func:`parse_database` with progress output."""
    database = parse_database(records)
    if verbose:
        print(f"[{time.strftime('%X')}] Parsed {len(database):,} transactions.")
    return database
