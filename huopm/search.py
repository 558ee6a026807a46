"""High Utility Occupancy Pattern Mining (HUOPM).

A pattern ``X`` is reported when ``u(X) >= min_util`` and ``o(X) >= min_occ``.
The lattice is walked depth-first; candidates are the items whose TWU reaches
``min_util``, in ascending TWU order, and a node whose TWU falls below
``min_util`` is skipped together with its whole subtree.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from fractions import Fraction
from typing import TYPE_CHECKING, Any

from ._compat import frame_kind
from ._validation import check_thresholds, occupancy_threshold
from .exceptions import MiningCancelled
from .model import Miner
from .transactions import Transaction, as_profit_table, from_long_format, from_records, parse_database
from .twu import TidsetIndex

if TYPE_CHECKING:
    import pandas as pd

    from .transactions import Item

_COLUMNS = ["itemset", "utility", "occupancy"]


@dataclass(frozen=True)
class Pattern:
    """A qualifying itemset with its exact utility and average occupancy."""

    itemset: tuple[Item, ...]
    utility: float
    occupancy: Fraction

    @property
    def items(self) -> frozenset[Item]:
        """The itemset as a set; two patterns describe the same itemset iff these are equal."""
        return frozenset(self.itemset)

    def to_dict(self) -> dict[str, Any]:
        return {"itemset": list(self.itemset), "utility": self.utility, "occupancy": float(self.occupancy)}


class _DepthFirstSearch:
    """One mining run over a :class:`TidsetIndex`.

    Each recursive step carries its own ``(prefix, tids, candidates)``; the
    only state kept on the instance is read-only configuration and counters
    used for progress output.
    """

    def __init__(
        self,
        index: TidsetIndex,
        min_util: float,
        min_occ: Fraction,
        max_len: int | None = None,
        should_stop: Callable[[], bool] | None = None,
    ):
        self.index = index
        self.min_util = min_util
        self.min_occ = min_occ
        self.max_len = max_len
        self.should_stop = should_stop
        self.n_tested = 0
        self.n_pruned = 0

    def candidates(self) -> tuple[Item, ...]:
        """Items with ``twu >= min_util``, ascending by TWU, ties by first appearance."""
        twu = self.index.item_twu()
        promising = [item for item, bound in twu.items() if bound >= self.min_util]
        return tuple(sorted(promising, key=twu.__getitem__))

    def run(self, candidates: Sequence[Item]) -> list[Pattern]:
        return list(self._extend((), self.index.all_tids(), tuple(candidates)))

    def _extend(
        self, prefix: tuple[Item, ...], prefix_tids: frozenset[int], remaining: tuple[Item, ...]
    ) -> Iterator[Pattern]:
        for pos, item in enumerate(remaining):
            if self.should_stop is not None and self.should_stop():
                raise MiningCancelled(f"Mining cancelled after testing {self.n_tested} itemsets.")

            itemset = prefix + (item,)
            tids = prefix_tids & self.index.tidset(item)
            self.n_tested += 1

            # twu bounds the utility of itemset and all of its supersets
            if self.index.twu_of(tids) < self.min_util:
                self.n_pruned += 1
                continue

            utility = self.index.utility_of(itemset, tids)
            occupancy = self.index.occupancy_of(itemset, tids)
            if utility >= self.min_util and occupancy >= self.min_occ:
                yield Pattern(itemset=itemset, utility=utility, occupancy=occupancy)

            if self.max_len is None or len(itemset) < self.max_len:
                yield from self._extend(itemset, tids, remaining[pos + 1 :])


def _mine_index(
    index: TidsetIndex,
    min_util: float,
    min_occ: float,
    max_len: int | None = None,
    should_stop: Callable[[], bool] | None = None,
    verbose: int = 0,
) -> list[Pattern]:
    t0 = time.perf_counter()
    search = _DepthFirstSearch(
        index, min_util, occupancy_threshold(min_occ), max_len=max_len, should_stop=should_stop
    )
    candidates = search.candidates()
    if verbose:
        n_items = len(index.items)
        print(
            f"[{time.strftime('%X')}] {len(candidates)} of {n_items} items pass the TWU bound "
            f"(min_util={min_util}, {len(index):,} transactions)"
        )

    patterns = search.run(candidates)

    if verbose:
        print(
            f"[{time.strftime('%X')}] Found {len(patterns)} patterns: tested {search.n_tested} itemsets, "
            f"pruned {search.n_pruned} branches in {time.perf_counter() - t0:.3f}s"
        )
    return patterns


def huopm(
    database: Sequence[Mapping[Item, float] | Any],
    profit_table: Mapping[Item, float] | None,
    min_util: float,
    min_occ: float,
    max_len: int | None = None,
    should_stop: Callable[[], bool] | None = None,
    verbose: int = 0,
) -> list[Pattern]:
    """Mine every High Utility Occupancy Pattern of *database*.

    Parameters
    ----------
    database : list of mappings
        One ``{item: quantity}`` mapping (or iterable of ``(item, quantity)``
        pairs) per transaction. Quantities must be positive.
    profit_table : mapping
        Unit profit per item. Items missing from the table are worth 0.
    min_util : float
        Minimum utility, strictly positive.
    min_occ : float
        Minimum average occupancy, within ``[0, 1]``.
    max_len : int, optional
        Maximum length of the itemsets to mine.
    should_stop : callable, optional
        Polled before every candidate test; returning True aborts the run
        with :class:`MiningCancelled`.
    verbose : int, default=0
        If > 0, print progress details to standard output.

    Returns
    -------
    list[Pattern]
        Unordered patterns, each with ``utility >= min_util`` and
        ``occupancy >= min_occ``.

    Raises
    ------
    InvalidThreshold, InvalidQuantity, DuplicateItem, InvalidProfit
        Raised before the search starts.

    Examples
    --------
    >>> patterns = huopm([{"X": 3}], {"X": 5}, min_util=10, min_occ=0.5)
    >>> patterns[0].itemset, patterns[0].utility, patterns[0].occupancy
    (('X',), 15, Fraction(1, 1))
    """
    check_thresholds(min_util, min_occ, max_len)
    parsed = parse_database(database)
    profits = as_profit_table(profit_table)
    return _mine_index(TidsetIndex(parsed, profits), min_util, min_occ, max_len, should_stop, verbose)


class HUOPM(Miner):
    """High Utility Occupancy Pattern Mining model.

    Finds itemsets that both generate a high total utility (e.g. profit) and
    make up a large share of the transactions they appear in.
    """

    def __init__(
        self,
        data: Any,
        profits: Mapping[Item, float] | pd.Series | None,
        min_util: float,
        min_occ: float = 0.0,
        max_len: int | None = None,
        verbose: int = 0,
    ):
        """Initialize HUOPM with a transaction database.

        Parameters
        ----------
        data : list of mappings, pandas.DataFrame, polars.DataFrame or pyarrow.Table
            Either one ``{item: quantity}`` record per transaction, or a
            long-format table whose first three columns are transaction id,
            item and quantity.
        profits : mapping or pandas.Series
            Unit profit per item.
        min_util : float
            The minimum total utility a pattern must reach.
        min_occ : float, default=0.0
            The minimum average occupancy a pattern must reach, in ``[0, 1]``.
        max_len : int, optional
            The maximum length of the itemsets to mine.
        verbose : int, default=0
            If > 0, print progress details to standard output.
        """
        kind = frame_kind(data)
        if kind != "records":
            database = from_long_format(data, verbose=verbose)
        elif isinstance(data, list) and all(isinstance(t, Transaction) for t in data):
            database = data
        else:
            database = from_records(data, verbose=verbose)

        super().__init__(data=database)
        if kind != "records":
            self._orig_df_type = kind

        check_thresholds(min_util, min_occ, max_len)
        self.profits = as_profit_table(profits)
        self.min_util = min_util
        self.min_occ = min_occ
        self.max_len = max_len
        self.verbose = verbose
        self._index: TidsetIndex | None = None

    @classmethod
    def from_transactions(
        cls,
        data: Any,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> HUOPM:
        """Initialize the HUOPM model from a long-format DataFrame.

        Parameters
        ----------
        data : pd.DataFrame | pl.DataFrame | pyarrow.Table | list of mappings
            Transaction lines, or one ``{item: quantity}`` record per transaction.
        transaction_col : str, optional
            Column name identifying the transaction ID. Defaults to the first column.
        item_col : str, optional
            Column name identifying the item. Defaults to the second column.
        verbose : int, optional
            Verbosity level.
        **kwargs
            Must contain `profits` and `min_util`. Can optionally contain
            `quantity_col` (str), `min_occ` (float) and `max_len` (int).
        """
        profits = kwargs.pop("profits")
        min_util = kwargs.pop("min_util")
        quantity_col = kwargs.pop("quantity_col", None)
        min_occ = kwargs.pop("min_occ", 0.0)
        max_len = kwargs.pop("max_len", None)

        kind = frame_kind(data)
        database: Any = data
        if kind != "records":
            database = from_long_format(data, transaction_col, item_col, quantity_col, verbose=verbose)

        model = cls(
            database,
            profits=profits,
            min_util=min_util,
            min_occ=min_occ,
            max_len=max_len,
            verbose=verbose,
            **kwargs,
        )
        if kind != "records":
            model._orig_df_type = kind
        return model

    @property
    def index(self) -> TidsetIndex:
        """Posting-list index over the database, built on first use."""
        if self._index is None:
            self._index = TidsetIndex(self.data, self.profits)
        return self._index

    def patterns(self, **kwargs: Any) -> list[Pattern]:
        """Mine and return :class:`Pattern` records.

        Keyword arguments (`min_util`, `min_occ`, `max_len`, `verbose`,
        `should_stop`) override the values given at construction.
        """
        min_util = kwargs.get("min_util", self.min_util)
        min_occ = kwargs.get("min_occ", self.min_occ)
        max_len = kwargs.get("max_len", self.max_len)
        verbose = kwargs.get("verbose", self.verbose)
        should_stop = kwargs.get("should_stop")

        check_thresholds(min_util, min_occ, max_len)
        return _mine_index(self.index, min_util, min_occ, max_len, should_stop, verbose)

    def mine(self, **kwargs: Any) -> pd.DataFrame:
        """Mine high utility occupancy patterns.

        Returns
        -------
        pd.DataFrame
            Columns `itemset`, `utility` and `occupancy` (as float), sorted by
            utility descending. Returned as polars / pyarrow when the model
            was built from such a table.
        """
        import pandas as pd

        records = [p.to_dict() for p in self.patterns(**kwargs)]
        if not records:
            return self._convert_to_orig_type(pd.DataFrame(columns=_COLUMNS))

        df = (
            pd.DataFrame.from_records(records, columns=_COLUMNS)
            .sort_values(by="utility", ascending=False, kind="stable")
            .reset_index(drop=True)
        )
        return self._convert_to_orig_type(df)


def mine_huopm(
    data: Any,
    transaction_col: str,
    item_col: str,
    quantity_col: str,
    profits: Mapping[Item, float] | pd.Series,
    min_util: float,
    min_occ: float = 0.0,
    max_len: int | None = None,
    verbose: int = 0,
) -> pd.DataFrame:
    """Mine high utility occupancy patterns from a long-format DataFrame.

    This module-level function relies on the Object-Oriented API.
    """
    return HUOPM.from_transactions(
        data,
        transaction_col=transaction_col,
        item_col=item_col,
        quantity_col=quantity_col,
        profits=profits,
        min_util=min_util,
        min_occ=min_occ,
        max_len=max_len,
        verbose=verbose,
    ).mine()
