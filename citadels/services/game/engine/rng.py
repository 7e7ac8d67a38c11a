"""Seeded, serializable randomness for the game engine.

Every random decision in a match goes through the :class:`Prng` stored on the
game state. The generator is rebuilt from the stored Mersenne Twister state
for each call and written back afterwards, so a saved game continues the same
random stream after it is loaded again.
"""

import random
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import TypeVar

from citadels.schemas.game_engine import Prng

T = TypeVar("T")

# Version tag of random.Random.getstate() for the Mersenne Twister
_STATE_VERSION = 3


def create_prng(seed: int) -> Prng:
    """Create a generator state seeded with ``seed``."""
    generator = random.Random(seed)
    return Prng(seed=seed, internal=list(generator.getstate()[1]))


@contextmanager
def _generator(prng: Prng) -> Iterator[random.Random]:
    generator = random.Random()
    generator.setstate((_STATE_VERSION, tuple(prng.internal), None))
    yield generator
    prng.internal = list(generator.getstate()[1])


def randrange(prng: Prng, stop: int) -> int:
    """Return a random integer in ``[0, stop)``."""
    if stop <= 0:
        raise ValueError("randrange() needs a positive bound")
    with _generator(prng) as generator:
        return generator.randrange(stop)


def choice(prng: Prng, items: Sequence[T]) -> T:
    if not items:
        raise IndexError("Cannot choose from an empty sequence")
    return items[randrange(prng, len(items))]


def shuffle(prng: Prng, items: list[T]) -> None:
    """Shuffle ``items`` in place."""
    with _generator(prng) as generator:
        generator.shuffle(items)


def sample(prng: Prng, items: Sequence[T], count: int) -> list[T]:
    with _generator(prng) as generator:
        return generator.sample(list(items), count)
