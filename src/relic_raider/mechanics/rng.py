"""Probability helpers — thin wrappers over the process-wide ``random`` module.

Every random draw in the engine goes through these functions so that callers
(and tests) can seed ``random`` or replace a single helper.
"""
from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


def uniform(low: float, high: float) -> float:
    """Float in ``[low, high)``."""
    return low + random.random() * (high - low)


def randint(low: int, high: int) -> int:
    """Inclusive integer in ``[low, high]``."""
    return random.randint(low, high)


def chance(probability: float) -> bool:
    """Return True with the given probability (a fraction, 0.25 = 25%)."""
    if probability <= 0:
        return False
    if probability >= 1:
        return True
    return random.random() < probability


def pick(items: Sequence[T]) -> T:
    """Uniformly pick one element of a non-empty sequence."""
    if not items:
        raise ValueError("Cannot pick from an empty sequence")
    return items[random.randrange(len(items))]


def weighted_choice(items: Sequence[T], weights: Sequence[float]) -> T:
    """Pick one element with probability proportional to its weight."""
    if not items or len(items) != len(weights):
        raise ValueError("items and weights must be non-empty and the same length")
    total = sum(weights)
    if total <= 0:
        return pick(items)
    threshold = uniform(0, total)
    running = 0.0
    for item, weight in zip(items, weights):
        running += weight
        if threshold < running:
            return item
    return items[-1]
