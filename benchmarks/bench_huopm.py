"""Scaling benchmark for the HUOPM search on synthetic baskets.

Generates long-format transaction lines with a skewed item popularity and
times ``HUOPM.from_transactions(...).mine()`` for growing database sizes.

Run
---
    python benchmarks/bench_huopm.py
"""

from __future__ import annotations

import random
import time

import pandas as pd

from huopm import HUOPM, itemset_twu, itemset_utility


def make_lines(n_transactions: int, n_items: int = 40, seed: int = 42) -> tuple[pd.DataFrame, dict[str, float]]:
    rng = random.Random(seed)
    items = [f"sku_{i:03d}" for i in range(n_items)]
    # popularity ~ 1/rank
    weights = [1.0 / (rank + 1) for rank in range(n_items)]
    profits = {item: round(rng.uniform(0.5, 20.0), 2) for item in items}

    rows = []
    for txn in range(n_transactions):
        basket_size = rng.randint(1, 6)
        basket = set(rng.choices(items, weights=weights, k=basket_size))
        for item in basket:
            rows.append({"txn": txn, "item": item, "qty": rng.randint(1, 4)})
    return pd.DataFrame(rows), profits


def benchmark() -> None:
    print(f"{'transactions':>12} {'lines':>8} {'patterns':>9} {'mine (s)':>9}")
    for n in (500, 2_000, 8_000):
        lines, profits = make_lines(n)
        total = sum(lines["qty"] * lines["item"].map(profits))
        model = HUOPM.from_transactions(lines, profits=profits, min_util=0.01 * total, min_occ=0.3)

        t0 = time.perf_counter()
        patterns = model.patterns()
        elapsed = time.perf_counter() - t0
        print(f"{n:>12,} {len(lines):>8,} {len(patterns):>9,} {elapsed:>9.3f}")

    # Cross-check a few patterns against the full-scan engines
    lines, profits = make_lines(500)
    model = HUOPM.from_transactions(lines, profits=profits, min_util=50.0, min_occ=0.3)
    for p in model.patterns()[:10]:
        assert p.utility == itemset_utility(p.itemset, model.data, profits)
        assert itemset_twu(p.itemset, model.data, profits) >= p.utility
    print("\nIndexed search agrees with the full-scan utility engine.")


if __name__ == "__main__":
    benchmark()
