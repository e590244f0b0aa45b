"""Best trade search over a set of pairs."""
from .best_trade import (
    BestTradeConfig,
    BestTradeSearch,
    SearchStats,
    best_trade_exact_in,
    best_trade_exact_out,
    sorted_insert,
)

__all__ = [
    "BestTradeConfig",
    "BestTradeSearch",
    "SearchStats",
    "best_trade_exact_in",
    "best_trade_exact_out",
    "sorted_insert",
]
