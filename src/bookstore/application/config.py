"""Configuration consumed by the application handlers.

Handlers receive this struct through their constructor. Nothing in the
domain or application layers reads the environment; the infrastructure
layer builds an ``OrderingConfig`` from settings and passes it in.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OrderingConfig:

    currency: str
    # Cross-check requested quantities against current stock when items are
    # added or updated, for early feedback. Placement always re-checks.
    check_stock_on_cart_update: bool
    rating_recompute_attempts: int
    default_page_size: int
    max_page_size: int
