"""Tests for flow and pipe sizing helpers."""

import pytest

from hydrohead.core.hydraulics import velocity_fps
from hydrohead.core.pipes import PipeDataError, available_sizes, pipe_dimensions
from hydrohead.core.sizing import mbh_to_gpm, suggest_pipe_size, tonnage_to_gpm


class TestDesignFlow:
    def test_tonnage(self):
        """One ton at a 10 °F rise is 2.4 GPM."""
        assert tonnage_to_gpm(10) == pytest.approx(24.0)

    def test_tonnage_delta_t(self):
        assert tonnage_to_gpm(10, delta_t_f=12) == pytest.approx(20.0)

    def test_mbh(self):
        assert mbh_to_gpm(100) == pytest.approx(10.0)

    @pytest.mark.parametrize("func", [tonnage_to_gpm, mbh_to_gpm])
    def test_non_positive_delta_t(self, func):
        with pytest.raises(ValueError):
            func(10, delta_t_f=0)


class TestSuggestPipeSize:
    def test_velocity_under_target(self):
        size = suggest_pipe_size(40.0, "copper_type_l", target_velocity_fps=6.0)
        dims = pipe_dimensions("copper_type_l", size)
        assert velocity_fps(40.0, dims.area_ft2) <= 6.0

    def test_smallest_qualifying_size(self):
        """Every smaller size would exceed the target velocity."""
        sizes = available_sizes("copper_type_l")
        size = suggest_pipe_size(40.0, "copper_type_l")
        smaller = sizes[: sizes.index(size)]
        for s in smaller:
            assert velocity_fps(40.0, pipe_dimensions("copper_type_l", s).area_ft2) > 6.0

    def test_zero_flow_gives_smallest(self):
        assert suggest_pipe_size(0.0, "steel_sch40") == available_sizes("steel_sch40")[0]

    def test_falls_back_to_largest(self):
        """No size meets the target, so the largest is returned."""
        assert suggest_pipe_size(1e6, "copper_type_l") == available_sizes("copper_type_l")[-1]

    def test_unknown_material(self):
        with pytest.raises(PipeDataError):
            suggest_pipe_size(10.0, "unobtainium")
