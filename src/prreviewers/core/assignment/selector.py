"""Uniform random selection without replacement.

The default source is the operating system CSPRNG, so the next reviewer
cannot be predicted from earlier picks.
"""
import random
import secrets
from collections.abc import Sequence
from typing import Optional, TypeVar

T = TypeVar("T")

_system_random = secrets.SystemRandom()


def pick_indices(n: int, k: int, rng: Optional[random.Random] = None) -> list[int]:
    """Pick ``k`` distinct indices from ``range(n)`` uniformly at random.

    Args:
        n: Size of the candidate pool
        k: Number of indices to pick
        rng: Random source; defaults to ``secrets.SystemRandom``

    Returns:
        ``k`` distinct indices in selection order

    Raises:
        ValueError: If ``n`` or ``k`` is negative or ``k > n``
    """
    if n < 0 or k < 0:
        raise ValueError(f"pool size and pick count must be non-negative, got n={n}, k={k}")
    if k > n:
        raise ValueError(f"cannot pick {k} distinct indices from a pool of {n}")
    return (rng or _system_random).sample(range(n), k)


def choose(candidates: Sequence[T], k: int, rng: Optional[random.Random] = None) -> list[T]:
    """Pick ``k`` distinct items from ``candidates`` uniformly at random."""
    return [candidates[i] for i in pick_indices(len(candidates), k, rng)]


def choose_one(candidates: Sequence[T], rng: Optional[random.Random] = None) -> T:
    """Pick a single item; ``candidates`` must not be empty."""
    return choose(candidates, 1, rng)[0]
