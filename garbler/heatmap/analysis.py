#!/usr/bin/env python3
"""
Histogram Analysis
==================
Stateless combinators over KeyedHistograms plus the sampling helpers the
generation scripts use.

Every function returns a freshly allocated result; inputs are never
modified.

Merging:
- lerp / average / average_all: linear blends, key sets are unioned
- weighted_sum: raw weighted accumulation (not normalized)
- power_series: distance-decay merge, weights k, k^2, k^3, ...

Transforms:
- cumulative / cdf: running sums in ascending key order
- trim / trim_upper: drop entries below / above a threshold

Sampling:
- random_from_cdf: weighted draw through the cumulative distribution
- random_key: uniform draw over the keys
"""

import random
from typing import List, Optional, Sequence, Tuple, TypeVar

from garbler.heatmap.keyed import KeyedHistogram

K = TypeVar('K')

SQRT_HALF = 0.7071067812
SQRT_THIRD = 0.5477225575

_default_rng = random.Random()


def _clamp01(value: float) -> float:
    return 0.0 if value < 0 else 1.0 if value > 1 else value


def _accumulate(result: KeyedHistogram, source: KeyedHistogram, factor: float):
    for key, value in source.items():
        result.set(key, result.get_value(key) + value * factor)


# =============================================================================
# Merging
# =============================================================================

def lerp(a: KeyedHistogram, b: KeyedHistogram, t: float) -> KeyedHistogram:
    """Per key t * b + (1 - t) * a; missing keys count as 0."""
    t = _clamp01(t)
    result = KeyedHistogram()
    _accumulate(result, b, t)
    _accumulate(result, a, 1.0 - t)
    result.verify_normalization()
    return result


def average(a: KeyedHistogram, b: KeyedHistogram) -> KeyedHistogram:
    return lerp(a, b, 0.5)


def average_all(maps: Sequence[Optional[KeyedHistogram]]) -> KeyedHistogram:
    """Equal-weight blend; None entries contribute nothing but still count."""
    result = KeyedHistogram()
    if not maps:
        return result

    factor = 1.0 / len(maps)
    for source in maps:
        if source is not None:
            _accumulate(result, source, factor)
    result.verify_normalization()
    return result


def weighted_sum(maps: Sequence[Optional[KeyedHistogram]], weights: Sequence[float]) -> KeyedHistogram:
    """Sum of weight * value per key. The result is not normalized."""
    if len(maps) != len(weights):
        raise ValueError("Every histogram needs exactly one weight")

    result = KeyedHistogram()
    for source, weight in zip(maps, weights):
        if source is not None:
            _accumulate(result, source, weight)
    result.verify_normalization()
    return result


def power_series(maps: Sequence[Optional[KeyedHistogram]], k: float,
                 squaring: bool = False) -> KeyedHistogram:
    """
    Decay-weighted merge of distance-ordered histograms.

    The i-th histogram that is present gets weight k^(i+1), so the closest
    one counts most. The weighted sum is divided by the total weight applied,
    which keeps normalized inputs normalized.

    Args:
        maps: Histograms ordered by distance (closest first); None entries
            are skipped and do not consume a weight step
        k: Decay factor, clamped to [0, 1]
        squaring: Square the weight at each step instead (k, k^2, k^4, ...)
    """
    result = KeyedHistogram()
    k = _clamp01(k)
    weight = k
    applied = 0.0

    for source in maps:
        if source is None:
            continue
        _accumulate(result, source, weight)
        applied += weight
        weight = weight * weight if squaring else weight * k

    if applied <= 0:
        return KeyedHistogram()

    for key, value in result.items():
        result.set(key, value / applied)
    result.verify_normalization()
    return result


# =============================================================================
# Transforms
# =============================================================================

def cumulative(hist: KeyedHistogram) -> List[Tuple[K, float]]:
    """Running sum of the values in ascending key order."""
    running = 0.0
    result = []
    for key, value in hist.items():
        running += value
        result.append((key, running))
    return result


def cdf(hist: KeyedHistogram) -> List[Tuple[K, float]]:
    """Cumulative distribution scaled so the last entry is 1."""
    total = hist.total
    if total <= 0:
        return []
    return [(key, running / total) for key, running in cumulative(hist)]


def trim(hist: KeyedHistogram, threshold: float) -> KeyedHistogram:
    """Keep only the entries whose value is >= threshold."""
    result = KeyedHistogram()
    for key, value in hist.items():
        if value >= threshold:
            result.set(key, value)
    result.verify_normalization()
    return result


def trim_upper(hist: KeyedHistogram, threshold: float) -> KeyedHistogram:
    """Keep only the entries whose value is <= threshold."""
    result = KeyedHistogram()
    for key, value in hist.items():
        if value <= threshold:
            result.set(key, value)
    result.verify_normalization()
    return result


# =============================================================================
# Sampling
# =============================================================================

def random_from_cdf(hist: Optional[KeyedHistogram], rng: random.Random = None):
    """
    Draw a key with probability proportional to its value.

    Returns:
        The first key whose cumulative value exceeds a uniform draw in
        [0, 1), the last key if rounding leaves none, or None when there is
        nothing to draw from
    """
    if hist is None or hist.is_empty:
        return None
    distribution = cdf(hist)
    if not distribution:
        return None

    u = (rng or _default_rng).random()
    for key, value in distribution:
        if value > u:
            return key
    return distribution[-1][0]


def random_key(hist: Optional[KeyedHistogram], rng: random.Random = None):
    """Uniformly chosen key, or None for an empty map."""
    if hist is None or hist.is_empty:
        return None
    return (rng or _default_rng).choice(hist.keys())


__all__ = [
    'SQRT_HALF',
    'SQRT_THIRD',
    'lerp',
    'average',
    'average_all',
    'weighted_sum',
    'power_series',
    'cumulative',
    'cdf',
    'trim',
    'trim_upper',
    'random_from_cdf',
    'random_key',
]
