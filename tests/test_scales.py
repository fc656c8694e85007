"""Tests for value and time scales."""

import math
from datetime import datetime, timedelta

import pytest

from timeline_plotter.data_model import Dataset, Record
from timeline_plotter.scales import (
    LinearScale, TimeScale, build_scales, padded_value_domain,
)


def _dataset(*points):
    return Dataset(records=tuple(
        Record(datetime(2024, 1, day), value) for day, value in points
    ))


class TestBuildScales:

    def test_endpoints(self, two_point_dataset):
        scales = build_scales(two_point_dataset, 680, 300)
        assert scales.x(datetime(2024, 1, 1)) == pytest.approx(0.0)
        assert scales.x(datetime(2024, 1, 3)) == pytest.approx(680.0)
        assert scales.x(datetime(2024, 1, 2)) == pytest.approx(340.0)

    def test_value_domain_is_padded(self, two_point_dataset):
        scales = build_scales(two_point_dataset, 680, 300)
        assert scales.y.domain == pytest.approx((9.0, 22.0))
        # Upward axis: padded maximum at the top, padded minimum at the bottom
        assert scales.y(22.0) == pytest.approx(0.0)
        assert scales.y(9.0) == pytest.approx(300.0)

    def test_records_stay_inside_plot_area(self, event_dataset):
        scales = build_scales(event_dataset, 680, 300)
        for record in event_dataset:
            assert 0.0 <= scales.x(record.date) <= 680.0
            assert 0.0 < scales.y(record.value) < 300.0

    def test_negative_values_keep_literal_padding(self):
        scales = build_scales(_dataset((1, -10.0), (2, 5.0)), 680, 300)
        assert scales.y.domain == pytest.approx((-9.0, 5.5))
        # -10 falls below the padded minimum, so it maps under the plot area
        assert scales.y(-10.0) > 300.0

    def test_single_record_is_centred_horizontally(self):
        scales = build_scales(_dataset((5, 10.0)), 680, 300)
        assert scales.x(datetime(2024, 1, 5)) == pytest.approx(340.0)

    def test_empty_dataset_raises(self):
        with pytest.raises(ValueError):
            build_scales(Dataset(records=()), 680, 300)


def test_padded_value_domain():
    assert padded_value_domain(10.0, 20.0) == pytest.approx((9.0, 22.0))
    assert padded_value_domain(0.0, 0.0) == (0.0, 0.0)


class TestLinearScale:

    def test_mapping_and_inverse(self):
        scale = LinearScale((0, 100), (300, 0))
        assert scale(25) == pytest.approx(225.0)
        assert scale.invert(225.0) == pytest.approx(25.0)

    def test_degenerate_domain_maps_to_middle(self):
        scale = LinearScale((5, 5), (300, 0))
        assert scale(5) == pytest.approx(150.0)
        assert scale.ticks() == [5.0]

    def test_ticks_are_round_and_inside_domain(self):
        ticks = LinearScale((0, 100), (300, 0)).ticks(6)
        assert 0.0 in ticks and 100.0 in ticks
        assert ticks == sorted(ticks)
        assert all(0.0 <= t <= 100.0 for t in ticks)
        steps = {round(b - a, 9) for a, b in zip(ticks, ticks[1:])}
        assert len(steps) == 1
        step = steps.pop()
        mantissa = step / 10 ** math.floor(math.log10(step))
        assert mantissa == pytest.approx(1) or mantissa == pytest.approx(2) \
            or mantissa == pytest.approx(5)

    def test_ticks_for_inverted_domain(self):
        ticks = LinearScale((22, 9), (300, 0)).ticks(6)
        assert ticks and all(9 <= t <= 22 for t in ticks)

    def test_tick_format_uses_step_precision(self):
        fmt = LinearScale((0, 1), (300, 0)).tick_format(6)
        assert fmt(0.4) == "0.4"

    def test_tick_format_thousands_separator(self):
        fmt = LinearScale((0, 10000), (300, 0)).tick_format(6)
        assert fmt(4000.0) == "4,000"

    def test_tick_format_negative_uses_minus_sign(self):
        fmt = LinearScale((-10, 10), (300, 0)).tick_format(6)
        assert fmt(-5.0) == "\u22125"
        assert fmt(0.0) == "0"


class TestTimeScale:

    def test_round_trip(self):
        start = datetime(2024, 1, 1)
        end = datetime(2024, 1, 31)
        scale = TimeScale((start, end), (0, 680))
        when = datetime(2024, 1, 16, 12)
        assert abs(scale.invert(scale(when)) - when) < timedelta(seconds=1)

    def test_ticks_are_dates_inside_domain(self):
        start = datetime(2024, 1, 1)
        end = datetime(2024, 3, 31)
        ticks = TimeScale((start, end), (0, 680)).ticks(6)
        assert 2 <= len(ticks) <= 8
        assert all(isinstance(t, datetime) and t.tzinfo is None for t in ticks)
        assert all(start <= t <= end for t in ticks)
        assert ticks == sorted(ticks)

    def test_single_date(self):
        when = datetime(2024, 1, 1)
        scale = TimeScale((when, when), (0, 680))
        assert scale(when) == pytest.approx(340.0)
        assert scale.ticks() == [when]
