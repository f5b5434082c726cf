import unittest

from ecospace.aqi import classify
from ecospace.forecast_generator import (
    ForecastPoint,
    Trend,
    analyze_trend,
    draw_base_aqi,
    generate,
)
from ecospace.random_source import (
    ConstantRandomSource,
    RandomSourceExhausted,
    SequenceRandomSource,
    SystemRandomSource,
)


class TestGenerate(unittest.TestCase):
    def test_constant_half_draws_give_pure_drift(self):
        series = generate(ConstantRandomSource(0.5), base_aqi=50)
        self.assertEqual([p.aqi for p in series], [50, 52, 54, 56, 58, 60, 62])
        for p in series:
            self.assertAlmostEqual(p.pm25, p.aqi * 0.3)
            self.assertEqual(p.confidence_percent, 90)
        self.assertEqual(classify(series[0].aqi).label, "Good")
        self.assertEqual(classify(series[1].aqi).label, "Moderate")

    def test_zero_draws_with_low_base(self):
        series = generate(ConstantRandomSource(0.0), base_aqi=30)
        self.assertEqual(series[0].aqi, 20)
        self.assertEqual(series[6].aqi, 32)
        self.assertEqual(classify(series[0].aqi).label, "Good")
        self.assertEqual(classify(series[6].aqi).label, "Good")
        # 20 * 0.3 - 5 = 1, clamped up to the PM2.5 floor
        self.assertEqual(series[0].pm25, 5)
        self.assertTrue(all(p.confidence_percent == 85 for p in series))

    def test_day_offsets_are_ordered(self):
        series = generate(SystemRandomSource(seed=1))
        self.assertEqual(len(series), 7)
        self.assertEqual([p.day_offset for p in series], list(range(7)))
        self.assertTrue(all(isinstance(p, ForecastPoint) for p in series))

    def test_ranges_hold_for_many_seeds(self):
        for seed in range(200):
            for p in generate(SystemRandomSource(seed=seed)):
                self.assertGreaterEqual(p.aqi, 10)
                self.assertLessEqual(p.aqi, 300)
                self.assertGreaterEqual(p.pm25, 5)
                self.assertLessEqual(p.pm25, 50)
                self.assertGreaterEqual(p.confidence_percent, 85)
                self.assertLessEqual(p.confidence_percent, 94)

    def test_out_of_range_base_is_clamped(self):
        high = generate(ConstantRandomSource(0.5), base_aqi=400)
        self.assertTrue(all(p.aqi == 300 for p in high))
        self.assertTrue(all(p.pm25 == 50 for p in high))
        low = generate(ConstantRandomSource(0.5), base_aqi=-100)
        self.assertTrue(all(p.aqi == 10 for p in low))
        self.assertTrue(all(p.pm25 == 5 for p in low))

    def test_highest_confidence_draw(self):
        series = generate(ConstantRandomSource(0.999), base_aqi=100)
        self.assertTrue(all(p.confidence_percent == 94 for p in series))

    def test_same_draws_same_series(self):
        first = generate(SystemRandomSource(seed=123))
        second = generate(SystemRandomSource(seed=123))
        self.assertEqual(first, second)

        draws = [0.1 * (i % 10) for i in range(22)]
        self.assertEqual(generate(SequenceRandomSource(draws)), generate(SequenceRandomSource(draws)))

    def test_draw_count(self):
        with_base = SequenceRandomSource([0.5] * 21)
        generate(with_base, base_aqi=60)
        self.assertEqual(with_base.consumed, 21)

        without_base = SequenceRandomSource([0.5] * 22)
        generate(without_base)
        self.assertEqual(without_base.consumed, 22)

    def test_exhausted_source_propagates(self):
        with self.assertRaises(RandomSourceExhausted):
            generate(SequenceRandomSource([0.5] * 21))

    def test_source_errors_are_not_wrapped(self):
        class Broken:
            def next(self):
                raise KeyError("boom")

        with self.assertRaises(KeyError):
            generate(Broken(), base_aqi=50)


class TestDrawBaseAqi(unittest.TestCase):
    def test_range(self):
        self.assertEqual(draw_base_aqi(ConstantRandomSource(0.0)), 30)
        self.assertEqual(draw_base_aqi(ConstantRandomSource(0.999)), 129)


class TestAnalyzeTrend(unittest.TestCase):
    def _series(self, first: float, last: float):
        return (
            ForecastPoint(day_offset=0, aqi=first, pm25=10.0, confidence_percent=90),
            ForecastPoint(day_offset=6, aqi=last, pm25=10.0, confidence_percent=90),
        )

    def test_drift_only_series_worsens(self):
        analysis = analyze_trend(generate(ConstantRandomSource(0.5), base_aqi=50))
        self.assertEqual(analysis.trend, Trend.WORSENING)
        self.assertEqual(analysis.delta, 12)
        self.assertEqual(analysis.message, "Air quality is expected to worsen")

    def test_small_change_is_stable(self):
        self.assertEqual(analyze_trend(self._series(50, 54.9)).trend, Trend.STABLE)
        self.assertEqual(analyze_trend(self._series(50, 45.1)).trend, Trend.STABLE)

    def test_drop_improves(self):
        analysis = analyze_trend(self._series(80, 60))
        self.assertEqual(analysis.trend, Trend.IMPROVING)
        self.assertEqual(analysis.delta, -20)

    def test_empty_series_rejected(self):
        with self.assertRaises(ValueError):
            analyze_trend(())


if __name__ == "__main__":
    unittest.main()
