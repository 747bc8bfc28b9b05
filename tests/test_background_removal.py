"""
Unit tests for background removal.
"""

from services.color.palette import Color
from services.pipeline.steps.background_removal import remove_background

R, B, N, K = Color.red, Color.blue, Color.brown, Color.black


class TestRemoveBackground:
    """Test cases for remove_background()."""
    
    def test_keeps_odd_entries(self):
        sequence = [B, N, B, K, B, R, B]
        assert remove_background(sequence) == [N, K, R]
    
    def test_drops_dangling_entry(self):
        """An unmatched final entry is not kept."""
        assert remove_background([B, N, B, K]) == [N]
    
    def test_length_parity(self):
        """Output length is max(0, (N - 1) // 2)."""
        for n in range(0, 12):
            sequence = [B, R] * 6
            assert len(remove_background(sequence[:n])) == max(0, (n - 1) // 2)
    
    def test_short_sequences(self):
        assert remove_background([]) == []
        assert remove_background([B]) == []
        assert remove_background([B, N]) == []
    
    def test_accepts_tuple(self):
        assert remove_background((B, N, B)) == [N]
