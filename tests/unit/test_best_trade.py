"""Unit tests for BestTradeSearch and sorted_insert."""
import pytest

from plasma_sdk.amounts.currency_amount import NativeAmount, TokenAmount
from plasma_sdk.pathfinding.best_trade import (
    BestTradeConfig,
    BestTradeSearch,
    best_trade_exact_in,
    best_trade_exact_out,
    sorted_insert,
)
from plasma_sdk.entities.trade import trade_comparator
from plasma_sdk.errors import PreconditionError


def compare_ints(a, b):
    return a - b


class TestSortedInsert:
    """Test bounded sorted insertion."""

    def test_inserts_into_empty_list(self):
        items = []
        assert sorted_insert(items, 3, 2, compare_ints) is None
        assert items == [3]

    def test_keeps_order(self):
        items = []
        for value in (5, 1, 3, 4, 2):
            sorted_insert(items, value, 10, compare_ints)
        assert items == [1, 2, 3, 4, 5]

    def test_evicts_worst_when_full(self):
        items = [1, 3, 5]
        assert sorted_insert(items, 2, 3, compare_ints) == 5
        assert items == [1, 2, 3]

    def test_rejects_worse_item_when_full(self):
        items = [1, 3, 5]
        assert sorted_insert(items, 6, 3, compare_ints) == 6
        assert sorted_insert(items, 5, 3, compare_ints) == 5
        assert items == [1, 3, 5]

    def test_equal_items_keep_insertion_order(self):
        items = []
        first, second = (1, "first"), (1, "second")
        sorted_insert(items, first, 3, lambda a, b: a[0] - b[0])
        sorted_insert(items, second, 3, lambda a, b: a[0] - b[0])
        assert items == [first, second]

    def test_requires_positive_max_size(self):
        with pytest.raises(PreconditionError, match="MAX_SIZE_ZERO"):
            sorted_insert([], 1, 0, compare_ints)

    def test_rejects_oversized_list(self):
        with pytest.raises(PreconditionError, match="ITEMS_SIZE"):
            sorted_insert([1, 2, 3], 4, 2, compare_ints)


class TestBestTradeConfig:
    """Test search configuration defaults."""

    def test_defaults_come_from_settings(self):
        config = BestTradeConfig()
        assert config.max_num_results == 3
        assert config.max_hops == 3
        assert config.max_workers == 1

    def test_custom_config(self):
        config = BestTradeConfig(max_num_results=1, max_hops=2, max_workers=4)
        assert config.max_num_results == 1
        assert config.max_hops == 2
        assert config.max_workers == 4


class TestBestTradeExactIn:
    """Test exact input search."""

    def test_requires_pairs(self, tokens):
        with pytest.raises(PreconditionError, match="PAIRS"):
            best_trade_exact_in([], TokenAmount(tokens[0], 100), tokens[2])

    def test_requires_positive_max_hops(self, tokens, pairs):
        with pytest.raises(PreconditionError, match="MAX_HOPS"):
            best_trade_exact_in([pairs["0_2"]], TokenAmount(tokens[0], 100), tokens[2], max_hops=0)

    def test_provides_best_route(self, tokens, pairs):
        t0, t1, t2, _ = tokens
        result = best_trade_exact_in(
            [pairs["0_1"], pairs["0_2"], pairs["1_2"]], TokenAmount(t0, 100), t2
        )

        assert len(result) == 2
        assert result[0].route.pairs == [pairs["0_2"]]
        assert result[0].route.path == [t0, t2]
        assert result[0].input_amount == TokenAmount(t0, 100)
        assert result[0].output_amount == TokenAmount(t2, 99)
        assert result[1].route.path == [t0, t1, t2]
        assert result[1].input_amount == TokenAmount(t0, 100)
        assert result[1].output_amount == TokenAmount(t2, 69)

    def test_skips_zero_liquidity_pairs(self, tokens, pairs):
        t0, t1, _, _ = tokens
        search = BestTradeSearch([pairs["empty_0_1"]])
        assert search.best_trade_exact_in(TokenAmount(t0, 100), t1) == []
        assert search.last_stats.branches_pruned == 1

    def test_respects_max_hops(self, tokens, pairs):
        t0, _, t2, _ = tokens
        result = best_trade_exact_in(
            [pairs["0_1"], pairs["0_2"], pairs["1_2"]], TokenAmount(t0, 10), t2, max_hops=1
        )
        assert len(result) == 1
        assert result[0].route.path == [t0, t2]

    def test_insufficient_input_for_one_pair(self, tokens, pairs):
        t0, _, t2, _ = tokens
        result = best_trade_exact_in(
            [pairs["0_1"], pairs["0_2"], pairs["1_2"]], TokenAmount(t0, 1), t2
        )
        assert len(result) == 1
        assert result[0].route.path == [t0, t2]
        assert result[0].output_amount == TokenAmount(t2, 1)

    def test_respects_max_num_results(self, tokens, pairs):
        t0, _, t2, _ = tokens
        result = best_trade_exact_in(
            [pairs["0_1"], pairs["0_2"], pairs["1_2"]], TokenAmount(t0, 10), t2, max_num_results=1
        )
        assert len(result) == 1

    def test_no_path(self, tokens, pairs):
        t0, _, t2, _ = tokens
        result = best_trade_exact_in(
            [pairs["0_1"], pairs["0_3"], pairs["1_3"]], TokenAmount(t0, 10), t2
        )
        assert result == []

    def test_native_input(self, tokens, pairs, ether):
        t3 = tokens[3]
        result = best_trade_exact_in(
            [pairs["weth_0"], pairs["0_1"], pairs["0_3"], pairs["1_3"]], NativeAmount(ether, 100), t3
        )

        assert len(result) == 2
        assert result[0].input_amount.currency == ether
        assert result[0].route.path[-1] == t3
        assert result[0].output_amount == TokenAmount(t3, 82)
        assert len(result[0].route.path) == 4
        assert result[1].output_amount == TokenAmount(t3, 74)
        assert len(result[1].route.path) == 3

    def test_native_output(self, tokens, pairs, ether, weth):
        t3 = tokens[3]
        result = best_trade_exact_in(
            [pairs["weth_0"], pairs["0_1"], pairs["0_3"], pairs["1_3"]], TokenAmount(t3, 100), ether
        )

        assert len(result) == 2
        for trade in result:
            assert trade.output_amount.currency == ether
            assert trade.route.path[-1] == weth

    def test_results_are_sorted(self, tokens, pairs):
        t0, _, _, t3 = tokens
        result = best_trade_exact_in(
            [pairs["0_1"], pairs["0_2"], pairs["0_3"], pairs["1_2"], pairs["1_3"]],
            TokenAmount(t0, 100), t3, max_num_results=10
        )

        assert len(result) > 1
        for better, worse in zip(result, result[1:]):
            assert trade_comparator(better, worse) <= 0

    def test_routes_never_reuse_a_pair(self, tokens, pairs):
        t0, _, _, t3 = tokens
        result = best_trade_exact_in(
            [pairs["0_1"], pairs["0_2"], pairs["0_3"], pairs["1_2"], pairs["1_3"]],
            TokenAmount(t0, 100), t3, max_num_results=10
        )
        for trade in result:
            addresses = [pair.address for pair in trade.route.pairs]
            assert len(addresses) == len(set(addresses))

    def test_threaded_search_matches_inline(self, tokens, pairs):
        t0, _, _, t3 = tokens
        candidates = [pairs["0_1"], pairs["0_2"], pairs["0_3"], pairs["1_2"], pairs["1_3"]]

        inline = BestTradeSearch(candidates, BestTradeConfig(max_num_results=10, max_workers=1))
        threaded = BestTradeSearch(candidates, BestTradeConfig(max_num_results=10, max_workers=4))

        inline_result = inline.best_trade_exact_in(TokenAmount(t0, 100), t3)
        threaded_result = threaded.best_trade_exact_in(TokenAmount(t0, 100), t3)

        assert [trade.output_amount.raw for trade in threaded_result] == \
            [trade.output_amount.raw for trade in inline_result]
        assert threaded.last_stats.trades_found == inline.last_stats.trades_found


class TestBestTradeExactOut:
    """Test exact output search."""

    def test_provides_best_route(self, tokens, pairs):
        t0, t1, t2, _ = tokens
        result = best_trade_exact_out(
            [pairs["0_1"], pairs["0_2"], pairs["1_2"]], t0, TokenAmount(t2, 100)
        )

        assert len(result) == 2
        assert result[0].route.pairs == [pairs["0_2"]]
        assert result[0].route.path == [t0, t2]
        assert result[0].input_amount == TokenAmount(t0, 101)
        assert result[0].output_amount == TokenAmount(t2, 100)
        assert result[1].route.path == [t0, t1, t2]
        assert result[1].input_amount == TokenAmount(t0, 156)
        assert result[1].output_amount == TokenAmount(t2, 100)

    def test_skips_zero_liquidity_pairs(self, tokens, pairs):
        t0, t1, _, _ = tokens
        result = best_trade_exact_out([pairs["empty_0_1"]], t1, TokenAmount(t0, 100))
        assert result == []

    def test_respects_max_hops(self, tokens, pairs):
        t0, _, t2, _ = tokens
        result = best_trade_exact_out(
            [pairs["0_1"], pairs["0_2"], pairs["1_2"]], t0, TokenAmount(t2, 10), max_hops=1
        )
        assert len(result) == 1
        assert result[0].route.path == [t0, t2]

    def test_insufficient_liquidity(self, tokens, pairs):
        t0, _, t2, _ = tokens
        result = best_trade_exact_out(
            [pairs["0_1"], pairs["0_2"], pairs["1_2"]], t0, TokenAmount(t2, 1200)
        )
        assert result == []

    def test_insufficient_liquidity_in_one_pair(self, tokens, pairs):
        t0, _, t2, _ = tokens
        result = best_trade_exact_out(
            [pairs["0_1"], pairs["0_2"], pairs["1_2"]], t0, TokenAmount(t2, 1050)
        )
        assert len(result) == 1
        assert result[0].route.path == [t0, t2]

    def test_respects_max_num_results(self, tokens, pairs):
        t0, _, t2, _ = tokens
        result = best_trade_exact_out(
            [pairs["0_1"], pairs["0_2"], pairs["1_2"]], t0, TokenAmount(t2, 10), max_num_results=1
        )
        assert len(result) == 1

    def test_no_path(self, tokens, pairs):
        t0, _, t2, _ = tokens
        result = best_trade_exact_out(
            [pairs["0_1"], pairs["0_3"], pairs["1_3"]], t0, TokenAmount(t2, 10)
        )
        assert result == []

    def test_native_input(self, tokens, pairs, ether):
        t3 = tokens[3]
        result = best_trade_exact_out(
            [pairs["weth_0"], pairs["0_1"], pairs["0_3"], pairs["1_3"]], ether, TokenAmount(t3, 10)
        )

        assert len(result) == 2
        for trade in result:
            assert isinstance(trade.input_amount, NativeAmount)
            assert trade.input_amount.currency == ether
            assert trade.output_amount == TokenAmount(t3, 10)
        inputs = [trade.input_amount.raw for trade in result]
        assert inputs == sorted(inputs)

    def test_results_are_sorted(self, tokens, pairs):
        t0, _, _, t3 = tokens
        result = best_trade_exact_out(
            [pairs["0_1"], pairs["0_2"], pairs["0_3"], pairs["1_2"], pairs["1_3"]],
            t0, TokenAmount(t3, 50), max_num_results=10
        )

        assert len(result) > 1
        for better, worse in zip(result, result[1:]):
            assert trade_comparator(better, worse) <= 0
