"""
Tests for sentinels/signals/scoring.py

Covers:
  - Five-level classification with strict thresholds
  - Composite score formula and vwap guard
  - Per-timeframe mapping always complete
"""
import pytest

from sentinels.data.models import BUY, NEUTRAL, SELL, SIGNAL_DIRECTIONS, STRONG_BUY, STRONG_SELL
from sentinels.signals.scoring import (
    STRONG_THRESHOLD,
    TIMEFRAME_WEIGHTS,
    WEAK_THRESHOLD,
    classify,
    composite_score,
    score,
    score_timeframes,
)


class TestClassify:
    def test_bands(self):
        assert classify(0.05) == STRONG_BUY
        assert classify(0.02) == BUY
        assert classify(0.0) == NEUTRAL
        assert classify(-0.02) == SELL
        assert classify(-0.05) == STRONG_SELL

    def test_upper_threshold_is_exclusive(self):
        assert classify(0.04) == BUY
        assert classify(0.0400001) == STRONG_BUY

    def test_lower_thresholds_are_exclusive(self):
        assert classify(WEAK_THRESHOLD) == NEUTRAL
        assert classify(-WEAK_THRESHOLD) == NEUTRAL
        assert classify(-STRONG_THRESHOLD) == SELL
        assert classify(-0.0400001) == STRONG_SELL


class TestScore:
    @pytest.mark.parametrize("weight", [0.0, 0.5, 1.5, 10.0])
    def test_zero_deviation_zero_momentum_is_neutral(self, weight):
        assert score(100.0, 100.0, 0.0, weight) == NEUTRAL

    def test_exact_threshold_through_momentum(self):
        # deviation 0, momentum 0.04, weight 1 -> composite exactly 0.04
        assert composite_score(50.0, 50.0, 4.0, 1.0) == 0.04
        assert score(50.0, 50.0, 4.0, 1.0) == BUY

    def test_deviation_is_doubled(self):
        assert composite_score(103.0, 100.0, 0.0, 1.0) == pytest.approx(0.06)
        assert score(103.0, 100.0, 0.0, 1.0) == STRONG_BUY
        assert score(97.0, 100.0, 0.0, 1.0) == STRONG_SELL

    def test_non_positive_vwap_counts_as_zero_deviation(self):
        assert composite_score(100.0, 0.0, 0.0, 1.0) == 0.0
        assert score(100.0, -5.0, 0.0, 1.0) == NEUTRAL

    def test_weight_ordering(self):
        assert TIMEFRAME_WEIGHTS["5m"] < TIMEFRAME_WEIGHTS["15m"] < TIMEFRAME_WEIGHTS["1h"] < TIMEFRAME_WEIGHTS["4h"]

    def test_longer_timeframe_can_upgrade_signal(self):
        # momentum 0.02: 5m -> 0.01 (NEUTRAL), 4h -> 0.03 (BUY)
        assert score(1.0, 1.0, 2.0, TIMEFRAME_WEIGHTS["5m"]) == NEUTRAL
        assert score(1.0, 1.0, 2.0, TIMEFRAME_WEIGHTS["4h"]) == BUY


class TestScoreTimeframes:
    def test_all_four_keys(self):
        out = score_timeframes(100.0, 100.0, 3.0)
        assert set(out) == {"5m", "15m", "1h", "4h"}
        assert all(v in SIGNAL_DIRECTIONS for v in out.values())
