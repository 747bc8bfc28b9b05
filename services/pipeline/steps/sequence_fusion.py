"""
Sequence fusion step.

Merges the three scanline samples into a single band sequence: a per-column
majority vote followed by a run-length (hysteresis) filter.
"""

import logging
import math
from typing import List, Optional, Sequence

import numpy as np

from config.scan_config import AGREEMENT_WIDTH_RATIO
from services.color.palette import Color

logger = logging.getLogger(__name__)


def agree(top: Color, middle: Color, bottom: Color) -> Color:
    """
    Majority vote of three colors.
    
    Returns white (no vote) when all three differ.
    """
    if top == middle or top == bottom:
        return top
    if middle == bottom:
        return middle
    return Color.white


def agreement_width(width: int, ratio: float = 0.035) -> int:
    """
    Minimum number of consecutive agreeing columns that confirms a band.
    
    The product is taken in single precision and rounded half away from zero.
    """
    scaled = float(np.float32(width) * np.float32(ratio))
    return int(math.floor(scaled + 0.5))


class SequenceFusionService:
    """Fuses scanline samples into an ordered band sequence."""
    
    def __init__(self, agreement_ratio: Optional[float] = None):
        self.agreement_ratio = AGREEMENT_WIDTH_RATIO if agreement_ratio is None else agreement_ratio
    
    def fuse(self, samples: Sequence[Sequence[Color]]) -> List[Color]:
        """
        Fuse top, middle and bottom samples.
        
        Columns that do not agree, or agree on white, are skipped and leave
        the run state untouched. A color is appended once its run reaches
        the agreement width, and only if it differs from the last appended
        color.
        
        Args:
            samples: Exactly three equal-length color sequences
        
        Returns:
            Band sequence, still including background segments
        
        Raises:
            ValueError: If there are not exactly three samples of equal length
        """
        if len(samples) != 3:
            raise ValueError(f'Expected 3 scanline samples, got {len(samples)}')
        top, middle, bottom = samples
        if not len(top) == len(middle) == len(bottom):
            raise ValueError(
                f'Scanline samples differ in length: {len(top)}, {len(middle)}, {len(bottom)}'
            )
        
        min_run = agreement_width(len(top), self.agreement_ratio)
        logger.debug(f'agreement width: {min_run} columns')
        
        colors: List[Color] = []
        prev: Optional[Color] = None
        agreement_count = 0
        for column in zip(top, middle, bottom):
            band = agree(*column)
            if band == Color.white:
                continue
            
            if prev != band:
                agreement_count = 0
                prev = band
            
            agreement_count += 1
            
            if agreement_count >= min_run and (not colors or colors[-1] != band):
                colors.append(band)
        
        return colors
