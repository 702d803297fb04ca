"""Tests for the technical indicator library."""
import sys
import os
import unittest

import pandas as pd

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from signal_engine.technical_indicators import (
    calculate_all_indicators,
    calculate_rsi,
    calculate_macd,
    calculate_ema_pair,
    calculate_bollinger,
    calculate_volume,
    calculate_support_resistance,
)
from tests.fixtures import make_bars, trending_closes


class TestInsufficientData(unittest.TestCase):
    """Short series produce None, never an exception."""

    def test_rsi_needs_period_plus_one(self):
        self.assertIsNone(calculate_rsi([100.0] * 14))
        self.assertIsNotNone(calculate_rsi([100.0 + i for i in range(15)]))

    def test_macd_needs_slow_plus_signal(self):
        self.assertIsNone(calculate_macd(trending_closes(34)))
        self.assertIsNotNone(calculate_macd(trending_closes(35)))

    def test_ema_pair_needs_fifty_points(self):
        self.assertIsNone(calculate_ema_pair(trending_closes(49)))
        self.assertIsNotNone(calculate_ema_pair(trending_closes(50)))

    def test_bollinger_needs_period(self):
        self.assertIsNone(calculate_bollinger(trending_closes(19)))
        self.assertIsNotNone(calculate_bollinger(trending_closes(20)))

    def test_volume_and_structure_need_their_period(self):
        self.assertIsNone(calculate_volume(make_bars(trending_closes(19))))
        self.assertIsNone(calculate_support_resistance(make_bars(trending_closes(49))))

    def test_empty_input(self):
        self.assertIsNone(calculate_rsi([]))
        self.assertIsNone(calculate_macd([]))
        indicators = calculate_all_indicators([])
        self.assertIsNone(indicators.rsi)
        self.assertIsNone(indicators.support_resistance)

    def test_all_indicators_on_short_series_are_absent(self):
        indicators = calculate_all_indicators(make_bars(trending_closes(10)))
        for name in ('rsi', 'macd', 'ema_pair', 'bollinger', 'volume', 'support_resistance'):
            self.assertIsNone(getattr(indicators, name), name)

    def test_all_indicators_on_long_series_are_present(self):
        indicators = calculate_all_indicators(make_bars(trending_closes(120)))
        for name in ('rsi', 'macd', 'ema_pair', 'bollinger', 'volume', 'support_resistance'):
            self.assertIsNotNone(getattr(indicators, name), name)


class TestRSI(unittest.TestCase):

    def test_no_losses_pins_to_100(self):
        result = calculate_rsi(trending_closes(30))
        self.assertEqual(result.value, 100.0)
        self.assertEqual(result.signal, 'overbought')
        self.assertEqual(result.strength, 'strong')

    def test_only_losses_is_zero_and_strongly_oversold(self):
        result = calculate_rsi([200.0 - i for i in range(30)])
        self.assertEqual(result.value, 0.0)
        self.assertEqual((result.signal, result.strength), ('oversold', 'strong'))

    def test_balanced_changes_give_fifty(self):
        prices = [100.0 + (i % 2) for i in range(15)]
        result = calculate_rsi(prices)
        self.assertAlmostEqual(result.value, 50.0)
        self.assertEqual(result.signal, 'neutral')

    def test_value_in_range_and_below_100_when_losses_exist(self):
        prices = [100 + ((i * 7) % 11) - 5 for i in range(60)]
        result = calculate_rsi(prices)
        self.assertGreaterEqual(result.value, 0)
        self.assertLess(result.value, 100)

    def test_tiny_loss_never_rounds_to_100(self):
        prices = [100.0 + i for i in range(15)]
        prices[-1] = prices[-2] - 0.0001
        self.assertLess(calculate_rsi(prices).value, 100.0)

    def test_band_tiers(self):
        from signal_engine.technical_indicators.momentum_indicators import classify_rsi
        self.assertEqual(classify_rsi(15), ('oversold', 'strong'))
        self.assertEqual(classify_rsi(25), ('oversold', 'moderate'))
        self.assertEqual(classify_rsi(40), ('oversold', 'weak'))
        self.assertEqual(classify_rsi(50), ('neutral', 'weak'))
        self.assertEqual(classify_rsi(65), ('overbought', 'weak'))
        self.assertEqual(classify_rsi(75), ('overbought', 'moderate'))
        self.assertEqual(classify_rsi(85), ('overbought', 'strong'))


class TestMACD(unittest.TestCase):

    def test_signal_line_is_rolling_ema_of_macd(self):
        prices = [100 + (i % 7) * 1.5 + i * 0.2 for i in range(80)]
        result = calculate_macd(prices)

        close = pd.Series(prices, dtype='float64')
        macd_line = close.ewm(span=12, adjust=False).mean() - close.ewm(span=26, adjust=False).mean()
        signal_line = macd_line.ewm(span=9, adjust=False).mean()

        self.assertAlmostEqual(result.macd, macd_line.iloc[-1], places=3)
        self.assertAlmostEqual(result.signal_line, signal_line.iloc[-1], places=3)
        self.assertAlmostEqual(result.histogram, result.macd - result.signal_line, places=3)

    def test_uptrend_is_bullish(self):
        result = calculate_macd(trending_closes(80))
        self.assertGreater(result.macd, 0)
        self.assertEqual(result.trend, 'bullish')

    def test_histogram_near_zero_on_trend_side_flags_crossover(self):
        # A steady climb leaves the histogram small and positive
        result = calculate_macd([100.0 + i for i in range(60)])
        self.assertEqual(result.trend, 'bullish')
        self.assertGreater(result.histogram, 0)
        self.assertLess(result.histogram, 0.1)
        self.assertEqual(result.crossover, 'bullish')

    def test_steady_decline_flags_bearish_crossover(self):
        result = calculate_macd([200.0 - i for i in range(60)])
        self.assertEqual(result.trend, 'bearish')
        self.assertLess(result.histogram, 0)
        self.assertGreater(result.histogram, -0.1)
        self.assertEqual(result.crossover, 'bearish')

    def test_large_reversal_bar_is_not_a_crossover(self):
        prices = [100.0 - 0.5 * i for i in range(60)] + [85.0]
        result = calculate_macd(prices)
        self.assertEqual(result.trend, 'bearish')
        self.assertGreater(result.histogram, 0.1)
        self.assertIsNone(result.crossover)

    def test_flat_series_has_no_crossover(self):
        result = calculate_macd([50.0] * 60)
        self.assertEqual(result.trend, 'neutral')
        self.assertIsNone(result.crossover)


class TestEMAPair(unittest.TestCase):

    def test_uptrend_alignment(self):
        result = calculate_ema_pair(trending_closes(120))
        self.assertEqual(result.alignment, 'bullish')
        self.assertEqual(result.price_position, 'above_both')
        self.assertIsNone(result.cross)
        self.assertGreater(result.ema_fast, result.ema_slow)

    def test_golden_cross_detected_on_crossing_bar(self):
        prices = [100.0 - 0.5 * i for i in range(60)] + [70.0 + i for i in range(1, 61)]
        close = pd.Series(prices)
        fast = close.ewm(span=20, adjust=False).mean()
        slow = close.ewm(span=50, adjust=False).mean()
        cross_index = next(
            (i for i in range(50, len(prices)) if fast[i - 1] <= slow[i - 1] and fast[i] > slow[i]),
            None,
        )
        self.assertIsNotNone(cross_index)

        result = calculate_ema_pair(prices[:cross_index + 1])
        self.assertEqual(result.cross, 'golden_cross')

        later = calculate_ema_pair(prices[:cross_index + 2])
        self.assertIsNone(later.cross)

    def test_flat_series_is_neutral(self):
        result = calculate_ema_pair([80.0] * 60)
        self.assertEqual(result.alignment, 'neutral')
        self.assertEqual(result.strength, 'weak')
        self.assertEqual(result.price_position, 'between')


class TestBollinger(unittest.TestCase):

    def test_flat_series(self):
        result = calculate_bollinger([100.0] * 30)
        self.assertEqual(result.percent_b, 0.5)
        self.assertEqual(result.bandwidth, 0.0)
        self.assertFalse(result.squeeze)
        self.assertEqual(result.signal, 'neutral')

    def test_squeeze_after_volatility_contracts(self):
        prices = [100 + (5 if i % 2 else -5) for i in range(40)]
        prices += [100 + (0.1 if i % 2 else -0.1) for i in range(20)]
        result = calculate_bollinger(prices)
        self.assertTrue(result.squeeze)
        self.assertAlmostEqual(result.percent_b, 0.75, places=2)
        self.assertEqual(result.position, 'middle')
        self.assertEqual(result.signal, 'squeeze')

    def test_bearish_breakout_needs_band_cross_and_expansion(self):
        prices = [100 + (1 if i % 2 else -1) for i in range(40)] + [90.0]
        result = calculate_bollinger(prices)
        self.assertLess(result.percent_b, 0)
        self.assertEqual(result.position, 'below_lower')
        self.assertTrue(result.expansion)
        self.assertEqual(result.signal, 'bearish_breakout')


class TestVolume(unittest.TestCase):

    def test_spike_with_rising_trend_is_bullish(self):
        volumes = [1000] * 19 + [3000]
        result = calculate_volume(make_bars(trending_closes(20), volumes))
        self.assertTrue(result.spike)
        self.assertEqual(result.trend, 'increasing')
        self.assertEqual(result.signal, 'bullish')
        self.assertAlmostEqual(result.ratio, 3000 / 1100, places=3)

    def test_fading_volume_is_bearish(self):
        volumes = [1000] * 17 + [400, 300, 200]
        result = calculate_volume(make_bars(trending_closes(20), volumes))
        self.assertFalse(result.spike)
        self.assertEqual(result.trend, 'decreasing')
        self.assertEqual(result.signal, 'bearish')

    def test_zero_volume_is_absent(self):
        self.assertIsNone(calculate_volume(make_bars(trending_closes(25), [0] * 25)))


class TestSupportResistance(unittest.TestCase):

    def setUp(self):
        cycle = [101, 103, 105, 107, 109, 107, 105, 103, 101, 100]
        self.closes = cycle * 5
        self.bars = make_bars(self.closes, spread=0.5, flat_open=True)

    def test_price_at_repeated_low_is_at_support(self):
        result = calculate_support_resistance(self.bars)
        self.assertEqual(result.signal, 'at_support')
        self.assertAlmostEqual(result.nearest_support, 99.5)
        self.assertAlmostEqual(result.nearest_resistance, 109.5)
        self.assertGreaterEqual(result.support_touches, 3)
        self.assertAlmostEqual(result.position_in_range, 5.0, places=1)

    def test_levels_are_deduplicated(self):
        result = calculate_support_resistance(self.bars)
        prices = [level.price for level in result.levels]
        self.assertEqual(len(prices), len(set(prices)))
        self.assertEqual(len(result.levels), 2)

    def test_close_above_all_swing_highs_is_breakout(self):
        bars = make_bars(self.closes[:-1] + [115], spread=0.5, flat_open=True)
        result = calculate_support_resistance(bars)
        self.assertEqual(result.signal, 'breakout')
        self.assertIsNone(result.nearest_resistance)


if __name__ == '__main__':
    unittest.main()
