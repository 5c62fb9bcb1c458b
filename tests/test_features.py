"""Tests for alphastudio.features."""

import numpy as np
import pandas as pd
import pytest

from alphastudio.features import close_sma, rolling_mean


class TestRollingMean:
    def test_warmup_is_none(self):
        assert rolling_mean([1.0, 2.0, 3.0, 4.0, 5.0], 3) == [None, None, 2.0, 3.0, 4.0]

    def test_window_one_is_identity(self):
        values = [3.0, 1.0, 4.0, 1.0, 5.0]
        assert rolling_mean(values, 1) == values

    def test_window_longer_than_series(self):
        assert rolling_mean([1.0, 2.0], 5) == [None, None]

    @pytest.mark.parametrize("window", [0, -2])
    def test_non_positive_window(self, window):
        assert rolling_mean([1.0, 2.0, 3.0], window) == [None, None, None]

    def test_empty(self):
        assert rolling_mean([], 3) == []

    def test_zero_average_is_not_undefined(self):
        out = rolling_mean([0.0, 0.0, 0.0], 2)
        assert out[0] is None
        assert out[1] == 0.0

    def test_matches_pandas_rolling(self):
        rng = np.random.default_rng(0)
        values = list(100 + np.cumsum(rng.normal(0, 1, 400)))
        ours = rolling_mean(values, 21)
        ref = pd.Series(values).rolling(21, min_periods=21).mean()
        assert all(v is None for v in ours[:20])
        np.testing.assert_allclose(ours[20:], ref.iloc[20:].values, rtol=1e-10)


class TestCloseSma:
    def test_uses_close(self, ramp_bars):
        assert close_sma(ramp_bars, 2) == [None, 10.5, 11.5, 12.5, 13.5]
