"""pytest configuration and shared fixtures."""

from __future__ import annotations

import os
import sys

import pytest

# Ensure tests/ dir is on path so huopm_base imports work
sys.path.insert(0, os.path.dirname(__file__))

from huopm_base import PROFITS, RAW_DB, long_format_rows  # noqa: E402

from huopm import parse_database  # noqa: E402


@pytest.fixture
def raw_db() -> list[dict]:
    return [dict(t) for t in RAW_DB]


@pytest.fixture
def profits() -> dict:
    return dict(PROFITS)


@pytest.fixture
def database():
    return parse_database(RAW_DB)


@pytest.fixture
def long_df():
    """The reference database as a long-format pandas DataFrame (txn, item, qty)."""
    import pandas as pd

    return pd.DataFrame(long_format_rows(RAW_DB))
