"""Interfaces and helpers for the random draws behind synthetic data."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol, Tuple

from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="random_source")


class RandomSourceExhausted(RuntimeError):
    """Raised when a replayed draw sequence has no values left."""


class RandomSource(Protocol):
    """Anything that can hand out uniform draws in [0, 1)."""

    def next(self) -> float:
        """Return the next draw."""
        ...


class SystemRandomSource(RandomSource):
    """Draws from a private `random.Random`, optionally seeded."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def next(self) -> float:
        return self._rng.random()


class SequenceRandomSource(RandomSource):
    """Replay a fixed list of draws, failing loudly once they run out."""

    def __init__(self, draws: Iterable[float]) -> None:
        values: Tuple[float, ...] = tuple(float(d) for d in draws)
        for d in values:
            if not 0.0 <= d < 1.0:
                raise ValueError(f"Random draws must be in [0, 1); got {d}")
        self.draws = values
        self._position = 0

    @property
    def consumed(self) -> int:
        """Number of draws handed out so far."""
        return self._position

    def next(self) -> float:
        if self._position >= len(self.draws):
            raise RandomSourceExhausted(
                f"Random source exhausted after {len(self.draws)} draws"
            )
        value = self.draws[self._position]
        self._position += 1
        return value


@dataclass
class ConstantRandomSource(RandomSource):
    """Return the same draw forever."""

    value: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.value < 1.0:
            raise ValueError(f"Random draws must be in [0, 1); got {self.value}")

    def next(self) -> float:
        return self.value


@dataclass
class CallableRandomSource(RandomSource):
    """Wrap a zero-argument callable (e.g. `random.random`) as a source."""

    draw: Callable[[], float]

    def next(self) -> float:
        return self.draw()


def build_random_source(settings=None) -> RandomSource:
    """Create a fresh source for one request, seeded if the settings say so."""
    if settings is None:
        from ecospace import config

        settings = config.settings
    seed = getattr(settings, "random_seed", None)
    if seed is not None:
        logger.debug("Using seeded random source", extra={"seed": seed})
    return SystemRandomSource(seed)
