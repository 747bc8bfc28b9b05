"""
Unit tests for scanline fusion and hysteresis.
"""

import itertools

import pytest

from services.color.palette import Color
from services.pipeline.steps.sequence_fusion import SequenceFusionService, agree, agreement_width

R, B, N, K, W = Color.red, Color.blue, Color.brown, Color.black, Color.white


def same(colors):
    """Three identical scanlines."""
    return [list(colors), list(colors), list(colors)]


class TestAgree:
    """Test cases for the per-column majority vote."""
    
    def test_two_of_three(self):
        assert agree(R, R, B) == R
        assert agree(R, B, R) == R
        assert agree(B, R, R) == R
    
    def test_all_equal(self):
        assert agree(N, N, N) == N
    
    def test_all_different_is_white(self):
        assert agree(R, B, N) == W
    
    def test_majority_law(self):
        """Any repeated color wins; three distinct colors give white."""
        palette = [R, B, N, K, W]
        for top, middle, bottom in itertools.product(palette, repeat=3):
            result = agree(top, middle, bottom)
            if top == middle or top == bottom:
                assert result == top
            elif middle == bottom:
                assert result == middle
            else:
                assert result == W


class TestAgreementWidth:
    """Test cases for agreement_width()."""
    
    def test_exact(self):
        assert agreement_width(200) == 7
        assert agreement_width(1000) == 35
    
    def test_half_rounds_up(self):
        """Halves round away from zero."""
        assert agreement_width(100) == 4
        assert agreement_width(300) == 11
    
    def test_fraction(self):
        assert agreement_width(640) == 22
    
    def test_narrow_image(self):
        assert agreement_width(10) == 0


class TestSequenceFusionService:
    """Test cases for SequenceFusionService."""
    
    def setup_method(self):
        """Three-column minimum run for 12-column samples."""
        self.service = SequenceFusionService(agreement_ratio=0.25)
    
    def test_short_runs_are_dropped(self):
        """Runs shorter than the agreement width never appear."""
        colors = [R, R, N, N, N, R, R, R, B, B, K, K]
        assert self.service.fuse(same(colors)) == [N, R]
    
    def test_long_run_appended_once(self):
        """A run of any length contributes one entry."""
        colors = [R] * 12
        assert self.service.fuse(same(colors)) == [R]
    
    def test_white_columns_do_not_reset_run(self):
        """Skipped columns leave the run count untouched."""
        colors = [R, R, W, R] + [W] * 8
        assert self.service.fuse(same(colors)) == [R]
    
    def test_disagreeing_columns_skipped(self):
        """Columns where all three scanlines differ are skipped."""
        top = [R, R, R, B, R] + [W] * 7
        middle = [R, R, N, N, R] + [W] * 7
        bottom = [R, B, K, K, R] + [W] * 7
        # Columns 2 and 3 have no majority
        assert self.service.fuse([top, middle, bottom]) == [R]
    
    def test_no_duplicate_after_interruption(self):
        """A short interruption does not produce a second entry for the same color."""
        colors = [R, R, R, N, R, R, R] + [W] * 5
        assert self.service.fuse(same(colors)) == [R]
    
    def test_majority_uses_middle_and_bottom(self):
        top = [K] * 12
        middle = [N] * 12
        bottom = [N] * 12
        assert self.service.fuse([top, middle, bottom]) == [N]
    
    def test_alternating_bands(self):
        colors = [B, B, B, N, N, N, B, B, B, R, R, R]
        assert self.service.fuse(same(colors)) == [B, N, B, R]
    
    def test_empty_samples(self):
        assert self.service.fuse([[], [], []]) == []
    
    def test_requires_three_samples(self):
        with pytest.raises(ValueError):
            self.service.fuse([[R], [R]])
    
    def test_requires_equal_lengths(self):
        with pytest.raises(ValueError):
            self.service.fuse([[R, R], [R], [R, R]])
