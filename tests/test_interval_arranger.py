"""Unit tests for genomenav.modules.interval_arranger."""

import pytest

from genomenav.core.feature import Feature
from genomenav.core.interval import ChromosomeInterval, OpenInterval
from genomenav.modules.drawing import DisplayedRegion, LinearDrawingModel
from genomenav.modules.feature_placer import FeaturePlacer
from genomenav.modules.interval_arranger import IntervalArranger, get_num_rows_used

A = OpenInterval(0, 10)
B = OpenInterval(5, 15)
C = OpenInterval(12, 20)


class TestArrange:
    """Tests for IntervalArranger.arrange."""

    def test_first_fit(self, identity_draw_model):
        assert IntervalArranger(identity_draw_model, num_rows=2).arrange([A, B, C]) == [0, 1, 0]

    def test_overflow_gets_minus_one(self, identity_draw_model):
        rows = IntervalArranger(identity_draw_model, num_rows=2).arrange([A, B, C, OpenInterval(13, 14)])
        assert rows == [0, 1, 0, -1]

    def test_rows_in_input_order(self, identity_draw_model):
        assert IntervalArranger(identity_draw_model, num_rows=2).arrange([C, A, B]) == [0, 0, 1]

    def test_longer_interval_first_on_tie(self, identity_draw_model):
        short = OpenInterval(0, 5)
        long = OpenInterval(0, 10)
        assert IntervalArranger(identity_draw_model, num_rows=2).arrange([short, long]) == [1, 0]

    def test_touching_intervals_collide(self, identity_draw_model):
        rows = IntervalArranger(identity_draw_model, num_rows=1).arrange([OpenInterval(0, 10), OpenInterval(10, 20)])
        assert rows == [0, -1]

    def test_padding(self, identity_draw_model):
        unpadded = IntervalArranger(identity_draw_model, num_rows=1)
        padded = IntervalArranger(identity_draw_model, num_rows=1, get_padding=lambda interval: 2)
        assert unpadded.arrange([A, C]) == [0, 0]
        assert padded.arrange([A, C]) == [0, -1]

    @pytest.mark.parametrize("num_rows", [0, -3])
    def test_no_rows(self, identity_draw_model, num_rows):
        assert IntervalArranger(identity_draw_model, num_rows=num_rows).arrange([A, B]) == [-1, -1]

    def test_empty(self, identity_draw_model):
        assert IntervalArranger(identity_draw_model).arrange([]) == []

    def test_default_rows(self, identity_draw_model):
        intervals = [OpenInterval(0, 50)] * 12
        rows = IntervalArranger(identity_draw_model).arrange(intervals)
        assert rows == list(range(10)) + [-1, -1]

    def test_uses_pixel_space(self, chr1_context):
        # At 0.1 px per base, intervals 5 bases apart are under a pixel apart
        model = LinearDrawingModel(DisplayedRegion(chr1_context), 10)
        arranger = IntervalArranger(model, num_rows=1, get_padding=lambda interval: 1)
        assert arranger.arrange([OpenInterval(0, 10), OpenInterval(15, 20)]) == [0, -1]

    def test_arranges_placed_features(self, chr1_context):
        view = DisplayedRegion(chr1_context)
        features = [
            Feature("a", ChromosomeInterval("chr1", 0, 10)),
            Feature("b", ChromosomeInterval("chr1", 5, 15)),
        ]
        placements = FeaturePlacer().place_features(features, view, 100)
        assert IntervalArranger(LinearDrawingModel(view, 100)).arrange(placements) == [0, 1]


class TestNumRowsUsed:
    """Tests for get_num_rows_used."""

    def test_counts_rows(self):
        assert get_num_rows_used([0, 1, -1, 0]) == 2

    def test_nothing_placed(self):
        assert get_num_rows_used([]) == 0
        assert get_num_rows_used([-1, -1]) == 0
