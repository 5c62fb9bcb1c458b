"""Tests for alphastudio.backtest."""

import numpy as np
import pytest

from alphastudio.backtest import (
    BacktestPoint,
    BacktestResult,
    MAParams,
    Trade,
    backtest,
    cost_rate,
    costed_fill,
    run_ma_crossover,
)
from alphastudio.data import Bar

ZERO_COST = dict(fee_bps=0.0, slippage_bps=0.0)


class TestMAParams:
    def test_defaults(self):
        p = MAParams()
        assert p.fast == 20
        assert p.slow == 50
        assert p.fee_bps == 1.0
        assert p.slippage_bps == 2.0

    def test_frozen(self):
        p = MAParams()
        with pytest.raises(AttributeError):
            p.fast = 5

    @pytest.mark.parametrize(
        "fast, slow, valid",
        [(2, 3, True), (3, 3, False), (5, 3, False), (0, 3, False), (-1, 3, False)],
    )
    def test_is_valid(self, fast, slow, valid):
        assert MAParams(fast=fast, slow=slow).is_valid is valid

    def test_with_windows_keeps_costs(self):
        p = MAParams(fee_bps=4.0, slippage_bps=6.0).with_windows(3, 9)
        assert (p.fast, p.slow, p.fee_bps, p.slippage_bps) == (3, 9, 4.0, 6.0)


class TestCosts:
    def test_rate(self):
        assert cost_rate(MAParams(fee_bps=1.0, slippage_bps=2.0)) == pytest.approx(0.0003)

    def test_buy_pays_more(self):
        p = MAParams(fee_bps=1.0, slippage_bps=2.0)
        assert costed_fill(100.0, +1, p) == pytest.approx(100.03)

    def test_sell_receives_less(self):
        p = MAParams(fee_bps=1.0, slippage_bps=2.0)
        assert costed_fill(100.0, -1, p) == pytest.approx(99.97)

    def test_zero_cost(self):
        p = MAParams(**ZERO_COST)
        assert costed_fill(12.0, +1, p) == 12.0
        assert costed_fill(12.0, -1, p) == 12.0


class TestCrossoverScenarios:
    def test_ramp_five_bars(self, ramp_bars):
        result = run_ma_crossover(ramp_bars, MAParams(fast=2, slow=3, **ZERO_COST))
        assert len(result.curve) == 5 - 3 + 1
        assert [p.ts_ms for p in result.curve] == [3000, 4000, 5000]
        assert result.trades == (Trade(idx=2, ts_ms=3000, px=12.0, dir=+1),)
        assert [p.equity for p in result.curve] == [0.0, 1.0, 2.0]
        assert result.pnl == 2.0
        assert result.max_dd == 0.0
        assert result.sharpe == 0.0

    def test_ramp_with_costs(self, ramp_bars):
        result = run_ma_crossover(
            ramp_bars, MAParams(fast=2, slow=3, fee_bps=6.0, slippage_bps=4.0)
        )
        # Buy at 12 pays 12 * 1.001
        np.testing.assert_allclose(
            [p.equity for p in result.curve], [-0.012, 0.988, 1.988], atol=1e-12
        )
        assert result.trades[0].px == 12.0
        assert result.pnl == pytest.approx(1.988)
        assert result.max_dd == pytest.approx(0.012)

    def test_round_trip(self, round_trip_bars):
        result = run_ma_crossover(round_trip_bars, MAParams(fast=2, slow=3, **ZERO_COST))
        assert result.trades == (
            Trade(idx=2, ts_ms=3000, px=12.0, dir=+1),
            Trade(idx=6, ts_ms=7000, px=12.0, dir=-1),
        )
        assert [p.equity for p in result.curve] == [0.0, 1.0, 2.0, 1.0, 0.0, 0.0, 0.0, 0.0]
        assert result.pnl == 0.0
        assert result.max_dd == 2.0

    def test_round_trip_costs_reduce_pnl(self, round_trip_bars):
        free = run_ma_crossover(round_trip_bars, MAParams(fast=2, slow=3, **ZERO_COST))
        costly = run_ma_crossover(
            round_trip_bars, MAParams(fast=2, slow=3, fee_bps=5.0, slippage_bps=5.0)
        )
        # Buy 12 * 1.001, sell 12 * 0.999
        assert costly.pnl == pytest.approx(-0.024)
        assert costly.pnl < free.pnl

    def test_equal_averages_hold_flat(self):
        bars = [Bar(1000 * i, 10.0, 10.0, 10.0, 10.0, 1.0) for i in range(8)]
        result = run_ma_crossover(bars, MAParams(fast=2, slow=4, **ZERO_COST))
        assert result.trades == ()
        assert len(result.curve) == 5
        assert result.pnl == 0.0

    def test_open_position_marked_not_liquidated(self, ramp_bars):
        result = run_ma_crossover(ramp_bars, MAParams(fast=2, slow=3, fee_bps=10.0, slippage_bps=0.0))
        assert len(result.trades) == 1
        assert result.trades[-1].dir == +1
        assert result.pnl == pytest.approx(result.curve[-1].equity)


class TestInvalidInputs:
    @pytest.mark.parametrize("fast, slow", [(3, 3), (5, 3), (0, 3), (-2, 4), (2, 0)])
    def test_invalid_windows_empty(self, ramp_bars, fast, slow):
        result = run_ma_crossover(ramp_bars, MAParams(fast=fast, slow=slow))
        assert result == BacktestResult()
        assert result.curve == ()
        assert result.trades == ()
        assert result.pnl == 0.0
        assert result.max_dd == 0.0

    def test_empty_bars(self):
        assert run_ma_crossover([], MAParams(fast=2, slow=3)) == BacktestResult()

    def test_slow_longer_than_series(self, ramp_bars):
        result = run_ma_crossover(ramp_bars, MAParams(fast=2, slow=10))
        assert result.curve == ()
        assert result.pnl == 0.0


class TestProperties:
    @pytest.mark.parametrize("fast, slow", [(2, 3), (5, 20), (10, 50), (1, 299), (20, 300)])
    def test_curve_length(self, synthetic_bars, fast, slow):
        result = run_ma_crossover(synthetic_bars, MAParams(fast=fast, slow=slow))
        assert len(result.curve) == max(len(synthetic_bars) - slow + 1, 0)

    def test_idempotent(self, synthetic_bars):
        p = MAParams(fast=5, slow=20)
        first = run_ma_crossover(synthetic_bars, p)
        second = run_ma_crossover(synthetic_bars, p)
        assert first == second
        assert first.pnl == second.pnl
        assert first.max_dd == second.max_dd

    def test_drawdown_non_negative_and_non_decreasing(self, synthetic_bars):
        result = run_ma_crossover(synthetic_bars, MAParams(fast=3, slow=12))
        frame = result.curve_frame()
        running = frame["drawdown"].cummax()
        assert (running >= 0).all()
        assert running.is_monotonic_increasing
        assert running.iloc[-1] == pytest.approx(result.max_dd)

    def test_trades_alternate(self, synthetic_bars):
        result = run_ma_crossover(synthetic_bars, MAParams(fast=3, slow=8))
        dirs = [t.dir for t in result.trades]
        assert len(dirs) > 2
        assert dirs[0] == +1
        assert all(a == -b for a, b in zip(dirs, dirs[1:]))
        idx = [t.idx for t in result.trades]
        assert idx == sorted(set(idx))

    def test_trade_prices_are_closes(self, synthetic_bars):
        result = run_ma_crossover(synthetic_bars, MAParams(fast=4, slow=9))
        for t in result.trades:
            assert t.px == synthetic_bars[t.idx].close
            assert t.ts_ms == synthetic_bars[t.idx].ts_ms

    def test_pnl_is_last_equity(self, synthetic_bars):
        result = run_ma_crossover(synthetic_bars, MAParams(fast=5, slow=15))
        assert result.pnl == result.curve[-1].equity

    def test_sharpe_placeholder(self, synthetic_bars):
        assert run_ma_crossover(synthetic_bars, MAParams(fast=5, slow=15)).sharpe == 0.0

    def test_alias(self):
        assert backtest is run_ma_crossover


class TestResultExport:
    def test_curve_frame(self, ramp_bars):
        result = run_ma_crossover(ramp_bars, MAParams(fast=2, slow=3, **ZERO_COST))
        df = result.curve_frame()
        assert list(df.columns) == ["price", "equity", "drawdown"]
        assert df.index.name == "date"
        assert df["price"].tolist() == [12.0, 13.0, 14.0]

    def test_trades_frame(self, round_trip_bars):
        result = run_ma_crossover(round_trip_bars, MAParams(fast=2, slow=3, **ZERO_COST))
        df = result.trades_frame()
        assert list(df.columns) == ["date", "idx", "price", "direction"]
        assert df["direction"].tolist() == [1, -1]
        assert df["idx"].tolist() == [2, 6]

    def test_summary(self, round_trip_bars):
        result = run_ma_crossover(round_trip_bars, MAParams(fast=2, slow=3, **ZERO_COST))
        assert result.summary() == {
            "pnl": 0.0,
            "max_dd": 2.0,
            "sharpe": 0.0,
            "num_trades": 2,
            "num_points": 8,
        }

    def test_result_is_frozen(self):
        with pytest.raises(AttributeError):
            BacktestResult().pnl = 1.0

    def test_params_recorded(self, ramp_bars):
        p = MAParams(fast=2, slow=3)
        assert run_ma_crossover(ramp_bars, p).params == p
        assert isinstance(run_ma_crossover(ramp_bars, p).curve[0], BacktestPoint)
