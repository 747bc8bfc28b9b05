"""
Background removal step.

The scan starts and ends on the board or lead color and alternates
background/band/background/..., so the bands are the odd-indexed entries.
"""

from typing import List, Sequence

from services.color.palette import Color


def remove_background(band_sequence: Sequence[Color]) -> List[Color]:
    """
    Keep entries 1, 3, 5, ... and drop a trailing unmatched entry.
    
    Args:
        band_sequence: Fused band sequence including background segments
    
    Returns:
        Band colors only; empty for fewer than three entries
    """
    return list(band_sequence[1:len(band_sequence) - 1:2])
