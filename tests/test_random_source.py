import types
import unittest

from ecospace.random_source import (
    CallableRandomSource,
    ConstantRandomSource,
    RandomSourceExhausted,
    SequenceRandomSource,
    SystemRandomSource,
    build_random_source,
)


class TestSequenceRandomSource(unittest.TestCase):
    def test_replays_in_order_then_raises(self):
        source = SequenceRandomSource([0.1, 0.2])
        self.assertEqual(source.next(), 0.1)
        self.assertEqual(source.next(), 0.2)
        self.assertEqual(source.consumed, 2)
        with self.assertRaises(RandomSourceExhausted):
            source.next()

    def test_rejects_out_of_range_draws(self):
        with self.assertRaises(ValueError):
            SequenceRandomSource([0.5, 1.0])
        with self.assertRaises(ValueError):
            SequenceRandomSource([-0.1])


class TestOtherSources(unittest.TestCase):
    def test_constant(self):
        source = ConstantRandomSource(0.25)
        self.assertEqual([source.next() for _ in range(3)], [0.25, 0.25, 0.25])
        with self.assertRaises(ValueError):
            ConstantRandomSource(1.5)

    def test_callable(self):
        draws = iter([0.3, 0.6])
        source = CallableRandomSource(lambda: next(draws))
        self.assertEqual(source.next(), 0.3)
        self.assertEqual(source.next(), 0.6)

    def test_seeded_system_sources_agree(self):
        a = SystemRandomSource(seed=42)
        b = SystemRandomSource(seed=42)
        draws_a = [a.next() for _ in range(10)]
        self.assertEqual(draws_a, [b.next() for _ in range(10)])
        self.assertTrue(all(0.0 <= d < 1.0 for d in draws_a))


class TestBuildRandomSource(unittest.TestCase):
    def test_uses_seed_from_settings(self):
        settings = types.SimpleNamespace(random_seed=7)
        a = build_random_source(settings)
        b = build_random_source(settings)
        self.assertIsInstance(a, SystemRandomSource)
        self.assertEqual(a.seed, 7)
        self.assertEqual(a.next(), b.next())

    def test_unseeded_by_default(self):
        source = build_random_source(types.SimpleNamespace(random_seed=None))
        self.assertIsNone(source.seed)


if __name__ == "__main__":
    unittest.main()
