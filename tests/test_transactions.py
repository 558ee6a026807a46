"""Tests for the transaction model and input conversion."""

from __future__ import annotations

import math
import pickle

import pandas as pd
import pytest

from huopm import (
    DuplicateItem,
    InvalidProfit,
    InvalidQuantity,
    Transaction,
    as_profit_table,
    from_long_format,
    parse_database,
)

# ---------------------------------------------------------------------------
# Transaction
# ---------------------------------------------------------------------------


class TestTransaction:
    def test_from_mapping(self) -> None:
        t = Transaction({"A": 2, "B": 3})
        assert t["A"] == 2
        assert t["B"] == 3
        assert len(t) == 2
        assert "A" in t
        assert "C" not in t

    def test_from_pairs(self) -> None:
        t = Transaction([("A", 2), ("B", 3)])
        assert t == {"A": 2, "B": 3}
        assert list(t) == ["A", "B"]

    def test_integer_items(self) -> None:
        t = Transaction({1: 1, 2: 5})
        assert t.get(2) == 5
        assert t.get(3) is None

    def test_float_quantity(self) -> None:
        assert Transaction({"A": 0.5})["A"] == 0.5

    def test_duplicate_pair_rejected(self) -> None:
        with pytest.raises(DuplicateItem, match="'A'"):
            Transaction([("A", 1), ("B", 2), ("A", 3)])

    @pytest.mark.parametrize("quantity", [0, -1, -0.5, math.nan, math.inf, "2", None, True])
    def test_invalid_quantity(self, quantity) -> None:
        with pytest.raises(InvalidQuantity):
            Transaction({"A": quantity})

    def test_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            Transaction({"A": 0})

    @pytest.mark.parametrize("entries", [5, "AB", None])
    def test_wrong_container(self, entries) -> None:
        with pytest.raises(TypeError):
            Transaction(entries)

    def test_contains_all(self) -> None:
        t = Transaction({"A": 1, "B": 1, "C": 1})
        assert t.contains_all(["A", "C"])
        assert t.contains_all([])
        assert not t.contains_all(["A", "D"])

    def test_immutable(self) -> None:
        t = Transaction({"A": 1})
        with pytest.raises(TypeError):
            t["A"] = 2  # type: ignore[index]

    def test_pickle(self) -> None:
        t = Transaction({"A": 2, "B": 3})
        assert pickle.loads(pickle.dumps(t)) == t


# ---------------------------------------------------------------------------
# parse_database
# ---------------------------------------------------------------------------


class TestParseDatabase:
    def test_sizes(self, raw_db) -> None:
        db = parse_database(raw_db)
        assert [len(t) for t in db] == [3, 2, 2, 3]
        assert all(isinstance(t, Transaction) for t in db)

    def test_empty(self) -> None:
        assert parse_database([]) == []

    def test_keeps_transactions(self) -> None:
        t = Transaction({"A": 1})
        assert parse_database([t])[0] is t

    def test_does_not_mutate_input(self, raw_db) -> None:
        before = [dict(t) for t in raw_db]
        parse_database(raw_db)
        assert raw_db == before

    def test_fails_on_first_bad_record(self) -> None:
        with pytest.raises(InvalidQuantity):
            parse_database([{"A": 1}, {"B": -2}])


# ---------------------------------------------------------------------------
# as_profit_table
# ---------------------------------------------------------------------------


class TestProfitTable:
    def test_mapping(self, profits) -> None:
        assert as_profit_table(profits) == profits

    def test_series(self) -> None:
        s = pd.Series({"A": 4.0, "B": 0.0})
        assert as_profit_table(s) == {"A": 4.0, "B": 0.0}

    def test_none_is_empty(self) -> None:
        assert as_profit_table(None) == {}

    @pytest.mark.parametrize("profit", [-1, math.nan, "3"])
    def test_invalid(self, profit) -> None:
        with pytest.raises(InvalidProfit):
            as_profit_table({"A": profit})

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError):
            as_profit_table([("A", 1)])  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# from_long_format
# ---------------------------------------------------------------------------


class TestFromLongFormat:
    def test_pandas_default_columns(self, long_df, raw_db) -> None:
        db = from_long_format(long_df)
        assert [dict(t) for t in db] == raw_db

    def test_named_columns(self) -> None:
        df = pd.DataFrame(
            {
                "qty": [2, 3, 1],
                "order_id": ["o2", "o2", "o1"],
                "sku": ["A", "B", "A"],
            }
        )
        db = from_long_format(df, transaction_col="order_id", item_col="sku", quantity_col="qty")
        # transactions keep first-appearance order
        assert [dict(t) for t in db] == [{"A": 2, "B": 3}, {"A": 1}]

    def test_duplicate_line(self) -> None:
        df = pd.DataFrame({"txn": [1, 1], "item": ["A", "A"], "qty": [1, 2]})
        with pytest.raises(DuplicateItem):
            from_long_format(df)

    def test_invalid_quantity(self) -> None:
        df = pd.DataFrame({"txn": [1, 1], "item": ["A", "B"], "qty": [1, 0]})
        with pytest.raises(InvalidQuantity):
            from_long_format(df)

    def test_null_transaction_id(self) -> None:
        # the null line carries an invalid quantity that must not be skipped
        df = pd.DataFrame({"txn": [1, None, 2], "item": ["A", "A", "A"], "qty": [2, -5, 1]})
        with pytest.raises(ValueError, match="Null values"):
            from_long_format(df)

    def test_null_item(self) -> None:
        df = pd.DataFrame({"txn": [1, 1, 2], "item": ["A", None, "A"], "qty": [2, 1, 1]})
        with pytest.raises(ValueError, match="Null values"):
            from_long_format(df)

    def test_null_transaction_id_named_columns(self) -> None:
        df = pd.DataFrame({"qty": [1, 1], "order": [None, 7], "sku": ["A", "B"]})
        with pytest.raises(ValueError, match="'order'"):
            from_long_format(df, transaction_col="order", item_col="sku", quantity_col="qty")

    def test_too_few_columns(self) -> None:
        df = pd.DataFrame({"txn": [1], "item": ["A"]})
        with pytest.raises(ValueError, match="quantity column"):
            from_long_format(df)

    def test_rejects_records(self, raw_db) -> None:
        with pytest.raises(TypeError):
            from_long_format(raw_db)

    def test_verbose(self, long_df, capsys) -> None:
        from_long_format(long_df, verbose=1)
        out = capsys.readouterr().out
        assert "Built 4 transactions" in out

    def test_polars(self, long_df, raw_db) -> None:
        pl = pytest.importorskip("polars")
        pytest.importorskip("pyarrow")
        db = from_long_format(pl.from_pandas(long_df))
        assert [dict(t) for t in db] == raw_db

    def test_pyarrow(self, long_df, raw_db) -> None:
        pa = pytest.importorskip("pyarrow")
        db = from_long_format(pa.Table.from_pandas(long_df))
        assert [dict(t) for t in db] == raw_db
