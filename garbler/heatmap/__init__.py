#!/usr/bin/env python3
"""
Heatmaps
========
Online-normalized histograms and the combinators that merge and sample
them:
- heatlist: dense WeightedHistogram / UnboundHistogram
- keyed: KeyedHistogram (sorted keys over a WeightedHistogram)
- analysis: lerp, power series, cumulative sums, trimming, sampling
"""

from .heatlist import (
    NORMALIZATION_EPSILON,
    WeightedHistogram,
    UnboundHistogram,
)
from .keyed import (
    KeyedHistogram,
    most_likely,
)
from .analysis import (
    SQRT_HALF,
    SQRT_THIRD,
    lerp,
    average,
    average_all,
    weighted_sum,
    power_series,
    cumulative,
    cdf,
    trim,
    trim_upper,
    random_from_cdf,
    random_key,
)

__all__ = [
    # Dense histograms
    'NORMALIZATION_EPSILON',
    'WeightedHistogram',
    'UnboundHistogram',
    # Keyed
    'KeyedHistogram',
    'most_likely',
    # Analysis
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
