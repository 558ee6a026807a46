"""
huopm — Getting Started
=======================

The simplest possible example: mine high utility occupancy patterns from a
handful of baskets, first with the plain function, then with the model API
on a long-format pandas DataFrame.
"""

import pandas as pd

from huopm import HUOPM, huopm

# Four baskets: item -> quantity bought
baskets = [
    {"bread": 2, "butter": 3, "milk": 1},
    {"bread": 1, "butter": 1},
    {"butter": 2, "milk": 3},
    {"bread": 1, "milk": 2, "eggs": 1},
]
unit_profit = {"bread": 4, "butter": 2, "milk": 3, "eggs": 1}

# ── 1. Function API ─────────────────────────────────────────────────────────
patterns = huopm(baskets, unit_profit, min_util=12, min_occ=0.4)

print("Patterns (min_util=12, min_occ=0.4):")
for p in sorted(patterns, key=lambda p: -p.utility):
    print(f"  {sorted(p.itemset)!s:<28} utility={p.utility:<4} occupancy={p.occupancy} ({float(p.occupancy):.3f})")
print()

# ── 2. Model API on long-format lines ───────────────────────────────────────
lines = pd.DataFrame(
    [
        {"order_id": order_id, "product": product, "qty": qty}
        for order_id, basket in enumerate(baskets)
        for product, qty in basket.items()
    ]
)

model = HUOPM.from_transactions(
    lines,
    transaction_col="order_id",
    item_col="product",
    quantity_col="qty",
    profits=unit_profit,
    min_util=12,
    min_occ=0.4,
    verbose=1,
)
print(model.mine().to_string(index=False))
print()

# Thresholds can be overridden per call
print("Only bundles of two or more products, occupancy >= 0.8:")
print(model.mine(min_occ=0.8).pipe(lambda df: df[df["itemset"].map(len) > 1]).to_string(index=False))
