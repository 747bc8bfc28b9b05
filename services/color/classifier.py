"""
Per-pixel band color classification.
"""

import logging
from typing import Optional, Sequence

from services.color.palette import Color, ColorPalette, REDUCED_PALETTE, magnitude, similarity

logger = logging.getLogger(__name__)


class BandClassifier:
    """Classifies a single pixel into one palette color."""
    
    def __init__(self, palette: Optional[ColorPalette] = None):
        self.palette = palette or REDUCED_PALETTE
        self._black_magnitude = self.palette.black_magnitude
        self._white_magnitude = self.palette.white_magnitude
    
    def classify(self, pixel: Sequence[float]) -> Color:
        """
        Classify one pixel.
        
        Too dark is black, too bright is white; anything between goes to the
        candidate with the greatest similarity. On a tie the earlier
        candidate wins.
        
        Args:
            pixel: 3-channel value in the palette's channel order
        
        Returns:
            The classified Color
        """
        pixel_magnitude = magnitude(pixel)
        if pixel_magnitude < self._black_magnitude:
            return Color.black
        if pixel_magnitude > self._white_magnitude:
            return Color.white
        
        best_color = None
        best_score = None
        for color, reference in self.palette.candidates:
            score = similarity(reference, pixel)
            if best_score is None or score > best_score:
                best_color = color
                best_score = score
        
        logger.debug(f'{best_color.name} = {best_score:.4f} correlation')
        return best_color
