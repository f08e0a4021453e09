"""
Tests for Weighted Histograms
=============================
Tests for WeightedHistogram and UnboundHistogram in garbler/heatmap/heatlist.py.
"""

import random
import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from garbler.errors import IndexOutOfRange, InvalidSize
from garbler.heatmap.heatlist import NORMALIZATION_EPSILON, UnboundHistogram, WeightedHistogram


def scenario_b() -> WeightedHistogram:
    hist = WeightedHistogram(3)
    hist.increment(0, 1)
    hist.increment(1, 1)
    hist.increment(0, 1)
    return hist


class TestWeightedIncrement:
    """Tests for the online normalized update."""

    def test_scenario_b(self):
        """Two samples at 0 and one at 1 give 2/3, 1/3, 0."""
        hist = scenario_b()
        assert hist.values == pytest.approx([2 / 3, 1 / 3, 0.0], abs=1e-4)
        assert hist.sample_count == 3

    def test_first_increment_sets_one(self):
        """The first sample puts all mass in its slot."""
        hist = WeightedHistogram(4)
        assert hist.increment(2) == pytest.approx(1.0)
        assert hist.values == pytest.approx([0.0, 0.0, 1.0, 0.0])

    def test_amount_weights_samples(self):
        """An amount of n counts as n samples."""
        hist = WeightedHistogram(2)
        hist.increment(0, 3)
        hist.increment(1, 1)
        assert hist.values == pytest.approx([0.75, 0.25])
        assert hist.sample_count == 4

    def test_normalization_invariant(self):
        """The total stays within epsilon of 1 after every increment."""
        rng = random.Random(1234)
        hist = WeightedHistogram(26)
        for _ in range(5000):
            hist.increment(rng.randrange(26), rng.randint(1, 5))
            assert abs(hist.total - 1.0) <= NORMALIZATION_EPSILON
        assert hist.normalized

    def test_non_positive_amount_raises(self):
        """Amounts of zero or less are rejected."""
        hist = WeightedHistogram(2)
        with pytest.raises(ValueError):
            hist.increment(0, 0)
        with pytest.raises(ValueError):
            hist.increment(0, -2)

    def test_out_of_range_index_raises(self):
        """Indexes outside the histogram raise IndexOutOfRange."""
        hist = WeightedHistogram(2)
        with pytest.raises(IndexOutOfRange):
            hist.increment(2)
        with pytest.raises(IndexError):
            hist.get_value(-1)


class TestWeightedState:
    """Tests for sizing, clearing and normalization helpers."""

    def test_negative_size_raises(self):
        with pytest.raises(InvalidSize):
            WeightedHistogram(-1)

    def test_zero_size_is_allowed(self):
        """An empty histogram exists but cannot be equalized."""
        hist = WeightedHistogram(0)
        assert len(hist) == 0
        assert hist.total == 0
        with pytest.raises(InvalidSize):
            hist.equalize()

    def test_equalize(self):
        hist = WeightedHistogram(4)
        assert hist.equalize() == pytest.approx(0.25)
        assert hist.values == pytest.approx([0.25] * 4)

    def test_clear_resets_samples(self):
        hist = scenario_b()
        hist.clear()
        assert hist.values == [0.0, 0.0, 0.0]
        assert hist.sample_count == 0
        assert hist.empty

    def test_reset_keeps_samples(self):
        hist = scenario_b()
        hist.reset()
        assert hist.total == 0
        assert hist.sample_count == 3

    def test_values_is_a_copy(self):
        """Mutating the returned list does not touch the histogram."""
        hist = scenario_b()
        values = hist.values
        values[0] = 42.0
        assert hist.get_value(0) == pytest.approx(2 / 3)

    def test_sum_min_max(self):
        hist = scenario_b()
        assert hist.sum(0, 2) == pytest.approx(1.0)
        assert hist.sum(1) == pytest.approx(1 / 3)
        assert hist.max() == pytest.approx(2 / 3)
        assert hist.min() == pytest.approx(0.0)
        with pytest.raises(IndexOutOfRange):
            hist.sum(0, 4)

    def test_normalize_scales_to_one(self):
        hist = scenario_b()
        hist._overwrite(2, 1.0)
        assert not hist.normalized
        hist.normalize()
        assert hist.normalized
        assert hist.total == pytest.approx(1.0)
        assert hist.get_value(2) == pytest.approx(0.5)

    def test_repr_marks_normalization(self):
        hist = scenario_b()
        assert repr(hist).startswith('{')
        hist.mark_dirty()
        assert repr(hist).startswith('<')


class TestSlotHooks:
    """Tests for the insert/delete hooks used by keyed histograms."""

    def test_insert_slot_shifts_values(self):
        hist = WeightedHistogram(2)
        hist.increment(1)
        hist._insert_slot(0)
        assert hist.values == pytest.approx([0.0, 0.0, 1.0])

    def test_delete_with_redistribution(self):
        """Removing a slot spreads its mass over the rest."""
        hist = WeightedHistogram(3)
        hist.increment(0)
        hist.increment(1)
        old = hist._delete_slot(0, redistribute=True)
        assert old == pytest.approx(0.5)
        assert hist.values == pytest.approx([1.0, 0.0])
        assert hist.normalized

    def test_delete_without_redistribution(self):
        """Without redistribution the histogram is flagged dirty."""
        hist = WeightedHistogram(3)
        hist.increment(0)
        hist.increment(1)
        hist._delete_slot(0, redistribute=False)
        assert hist.values == pytest.approx([0.5, 0.0])
        assert not hist.normalized
        assert not hist.verify_normalization()


class TestWeightedCombinators:
    """Tests for interpolate / average / bind_from."""

    def test_interpolate(self):
        a = WeightedHistogram(2)
        a.increment(0)
        b = WeightedHistogram(2)
        b.increment(1)
        result = WeightedHistogram.interpolate(a, b, 0.25)
        assert result.values == pytest.approx([0.75, 0.25])

    def test_interpolate_rejects_bad_input(self):
        with pytest.raises(ValueError):
            WeightedHistogram.interpolate(WeightedHistogram(2), WeightedHistogram(3), 0.5)
        with pytest.raises(ValueError):
            WeightedHistogram.interpolate(WeightedHistogram(2), WeightedHistogram(2), 1.5)

    def test_average_all(self):
        a = WeightedHistogram(2)
        a.increment(0)
        b = WeightedHistogram(2)
        b.increment(1)
        result = WeightedHistogram.average_all([a, a, b, b])
        assert result.values == pytest.approx([0.5, 0.5])

    def test_bind_from_unbound(self):
        raw = UnboundHistogram(2)
        raw.set(0, 3.0)
        raw.set(1, 1.0)
        bound = WeightedHistogram.bind_from(raw)
        assert bound.values == pytest.approx([0.75, 0.25])
        assert bound.normalized


class TestUnboundHistogram:
    """Tests for the raw accumulator."""

    def test_cumulative(self):
        result = UnboundHistogram.cumulative(scenario_b())
        assert result.values == pytest.approx([2 / 3, 1.0, 1.0])

    def test_cumulative_window(self):
        result = UnboundHistogram.cumulative(scenario_b(), start=1, count=2)
        assert result.values == pytest.approx([1 / 3, 1 / 3])
        with pytest.raises(IndexOutOfRange):
            UnboundHistogram.cumulative(scenario_b(), start=2, count=2)

    def test_sum_and_product(self):
        total = UnboundHistogram.sum_of(scenario_b(), scenario_b())
        assert total.values == pytest.approx([4 / 3, 2 / 3, 0.0])
        doubled = UnboundHistogram.product(scenario_b(), 3.0)
        assert doubled.values == pytest.approx([2.0, 1.0, 0.0])

    def test_has_no_increment(self):
        """Unbound histograms cannot be mistaken for weighted ones."""
        assert not hasattr(UnboundHistogram(2), 'increment')
        assert not isinstance(UnboundHistogram(2), WeightedHistogram)

    def test_add(self):
        raw = UnboundHistogram(2)
        raw.add(1, 2.5)
        assert raw.add(1, 0.5) == pytest.approx(3.0)
