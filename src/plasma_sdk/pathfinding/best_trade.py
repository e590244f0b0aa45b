"""Depth-first search for the best trades between two currencies."""
import logging
import threading
import time
from bisect import bisect_right
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Callable, List, Optional, Sequence, TypeVar

from ..amounts.currency_amount import CurrencyAmount, TokenAmount
from ..config.settings import settings
from ..constants import TradeType
from ..entities.currency import Currency, Token
from ..entities.pair import Pair
from ..entities.route import Route
from ..entities.trade import Trade, trade_comparator
from ..errors import require

logger = logging.getLogger(__name__)

T = TypeVar("T")


def sorted_insert(items: List[T], add: T, max_size: int, comparator: Callable[[T, T], int]) -> Optional[T]:
    """
    Insert add into the sorted list items, keeping at most max_size entries.

    Equal elements keep insertion order. Returns the evicted element when the
    list was full (possibly add itself), otherwise None.
    """
    require(max_size > 0, "MAX_SIZE_ZERO")
    require(len(items) <= max_size, "ITEMS_SIZE")

    if not items:
        items.append(add)
        return None

    is_full = len(items) == max_size
    # worse than or equal to the worst kept item
    if is_full and comparator(items[-1], add) <= 0:
        return add

    key = cmp_to_key(comparator)
    items.insert(bisect_right(items, key(add), key=key), add)
    return items.pop() if is_full else None


@dataclass
class BestTradeConfig:
    """Configuration for best trade search."""
    max_num_results: int = field(default_factory=lambda: settings.max_num_results)
    max_hops: int = field(default_factory=lambda: settings.max_hops)
    max_workers: int = field(default_factory=lambda: settings.search_max_workers)


@dataclass
class SearchStats:
    """Counters of a single best trade search."""
    branches_explored: int = 0
    branches_pruned: int = 0
    trades_found: int = 0
    search_time_seconds: float = 0.0


@dataclass
class _SearchContext:
    """State shared by every branch of one search."""
    trade_type: TradeType
    original_amount: CurrencyAmount
    target_currency: Currency
    target_token: Token
    max_num_results: int
    best_trades: List[Trade] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)
    lock: threading.Lock = field(default_factory=threading.Lock)

    def insert(self, trade: Trade) -> None:
        with self.lock:
            self.stats.trades_found += 1
            sorted_insert(self.best_trades, trade, self.max_num_results, trade_comparator)

    def explored(self) -> None:
        with self.lock:
            self.stats.branches_explored += 1

    def pruned(self) -> None:
        with self.lock:
            self.stats.branches_pruned += 1


class BestTradeSearch:
    """
    Finds the best linear routes through a set of pairs.

    Each branch excludes the pairs it already used, so a route never reuses a
    pair, but a token may be visited more than once through different pairs.
    Branches whose swap fails for lack of reserves or input are dropped; every
    other error aborts the search. Routes are linear: splitting an amount over
    several routes is not considered.
    """

    def __init__(self, pairs: Sequence[Pair], config: Optional[BestTradeConfig] = None):
        """
        Initialize the search.

        Args:
            pairs: Candidate pairs, typically a reserve snapshot
            config: Result size, hop limit and worker count
        """
        self.pairs: List[Pair] = list(pairs)
        self.config = config or BestTradeConfig()
        self.last_stats: Optional[SearchStats] = None

    def _check_config(self) -> None:
        require(len(self.pairs) > 0, "PAIRS")
        require(self.config.max_hops > 0, "MAX_HOPS")
        require(self.config.max_num_results > 0, "MAX_NUM_RESULTS")

    def best_trade_exact_in(self, currency_amount_in: CurrencyAmount, currency_out: Currency) -> List[Trade]:
        """
        Top trades spending exactly currency_amount_in for currency_out.

        Args:
            currency_amount_in: Exact amount of input currency to spend
            currency_out: The desired output currency

        Returns:
            Up to max_num_results trades, best first
        """
        self._check_config()
        ctx = _SearchContext(
            trade_type=TradeType.EXACT_INPUT,
            original_amount=currency_amount_in,
            target_currency=currency_out,
            target_token=currency_out.wrapped(),
            max_num_results=self.config.max_num_results,
        )
        return self._run(ctx, currency_amount_in.wrapped())

    def best_trade_exact_out(self, currency_in: Currency, currency_amount_out: CurrencyAmount) -> List[Trade]:
        """
        Top trades receiving exactly currency_amount_out for currency_in.

        Args:
            currency_in: The currency to spend
            currency_amount_out: Exact amount of output currency to receive

        Returns:
            Up to max_num_results trades, best first
        """
        self._check_config()
        ctx = _SearchContext(
            trade_type=TradeType.EXACT_OUTPUT,
            original_amount=currency_amount_out,
            target_currency=currency_in,
            target_token=currency_in.wrapped(),
            max_num_results=self.config.max_num_results,
        )
        return self._run(ctx, currency_amount_out.wrapped())

    def _run(self, ctx: _SearchContext, start_amount: TokenAmount) -> List[Trade]:
        search_start_time = time.time()
        pair_count = len(self.pairs)

        if self.config.max_workers > 1:
            first_hops = [i for i, pair in enumerate(self.pairs) if pair.involves_token(start_amount.token)]
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                futures = [
                    executor.submit(self._expand, ctx, i, start_amount, self.config.max_hops,
                                    [], [False] * pair_count, pair_count)
                    for i in first_hops
                ]
                for future in futures:
                    future.result()
        else:
            self._search(ctx, start_amount, self.config.max_hops, [], [False] * pair_count, pair_count)

        ctx.stats.search_time_seconds = time.time() - search_start_time
        self.last_stats = ctx.stats
        logger.info(
            f"Best trade search ({ctx.trade_type.value}) completed: {len(ctx.best_trades)} trades "
            f"from {pair_count} pairs in {ctx.stats.search_time_seconds:.3f}s"
        )
        logger.debug(f"Search stats: {ctx.stats}")
        return list(ctx.best_trades)

    def _search(self, ctx: _SearchContext, amount: TokenAmount, hops_left: int,
                current_pairs: List[Pair], excluded: List[bool], remaining: int) -> None:
        for i in range(len(self.pairs)):
            if not excluded[i]:
                self._expand(ctx, i, amount, hops_left, current_pairs, excluded, remaining)

    def _expand(self, ctx: _SearchContext, index: int, amount: TokenAmount, hops_left: int,
                current_pairs: List[Pair], excluded: List[bool], remaining: int) -> None:
        """
        Take one hop through self.pairs[index] and either record a trade or recurse.

        For exact-in searches `amount` flows forward toward the output; for
        exact-out searches it flows backward toward the input. `excluded` and
        `current_pairs` are restored before returning.
        """
        pair = self.pairs[index]
        if not pair.involves_token(amount.token):
            return
        if pair.has_empty_reserve:
            ctx.pruned()
            return

        exact_in = ctx.trade_type == TradeType.EXACT_INPUT
        result = pair.quote_output_amount(amount) if exact_in else pair.quote_input_amount(amount)
        if not result.ok:
            ctx.pruned()
            return
        ctx.explored()

        next_amount = result.amount
        if next_amount.token.equals(ctx.target_token):
            if exact_in:
                route = Route(current_pairs + [pair], ctx.original_amount.currency, ctx.target_currency)
            else:
                route = Route([pair] + current_pairs, ctx.target_currency, ctx.original_amount.currency)
            ctx.insert(Trade(route, ctx.original_amount, ctx.trade_type))
        elif hops_left > 1 and remaining > 1:
            excluded[index] = True
            if exact_in:
                current_pairs.append(pair)
            else:
                current_pairs.insert(0, pair)
            try:
                self._search(ctx, next_amount, hops_left - 1, current_pairs, excluded, remaining - 1)
            finally:
                if exact_in:
                    current_pairs.pop()
                else:
                    current_pairs.pop(0)
                excluded[index] = False


def best_trade_exact_in(
    pairs: Sequence[Pair],
    currency_amount_in: CurrencyAmount,
    currency_out: Currency,
    max_num_results: Optional[int] = None,
    max_hops: Optional[int] = None,
) -> List[Trade]:
    """Top trades spending exactly currency_amount_in, with settings defaults."""
    config = BestTradeConfig()
    if max_num_results is not None:
        config.max_num_results = max_num_results
    if max_hops is not None:
        config.max_hops = max_hops
    return BestTradeSearch(pairs, config).best_trade_exact_in(currency_amount_in, currency_out)


def best_trade_exact_out(
    pairs: Sequence[Pair],
    currency_in: Currency,
    currency_amount_out: CurrencyAmount,
    max_num_results: Optional[int] = None,
    max_hops: Optional[int] = None,
) -> List[Trade]:
    """Top trades receiving exactly currency_amount_out, with settings defaults."""
    config = BestTradeConfig()
    if max_num_results is not None:
        config.max_num_results = max_num_results
    if max_hops is not None:
        config.max_hops = max_hops
    return BestTradeSearch(pairs, config).best_trade_exact_out(currency_in, currency_amount_out)
