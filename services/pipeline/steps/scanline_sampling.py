"""
Scanline sampling step.

Classifies every pixel along three horizontal scanlines (top, middle, bottom)
of the resistor image.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from config.scan_config import get_scanline_ratios
from services.color.classifier import BandClassifier
from services.color.palette import Color

logger = logging.getLogger(__name__)


def scanline_rows(height: int, ratios: Sequence[float] = (0.33, 0.5, 0.67)) -> List[int]:
    """
    Row index for each scanline ratio.
    
    Rows are truncated toward zero, not rounded.
    
    Args:
        height: Image height in pixels
        ratios: Scanline positions as a fraction of height
    
    Returns:
        List of row indices, one per ratio
    """
    return [int(ratio * float(height)) for ratio in ratios]


class ScanlineSamplingService:
    """Produces one classified color sequence per scanline."""
    
    def __init__(
        self,
        classifier: Optional[BandClassifier] = None,
        row_ratios: Optional[Sequence[float]] = None
    ):
        """
        Initialize scanline sampling service.
        
        Args:
            classifier: Pixel classifier (reduced palette if not given)
            row_ratios: (top, middle, bottom) ratios, from config if not given
        """
        self.classifier = classifier or BandClassifier()
        self.row_ratios = tuple(row_ratios) if row_ratios is not None else get_scanline_ratios()
        if len(self.row_ratios) != 3:
            raise ValueError(f'Expected 3 scanline ratios, got {len(self.row_ratios)}')
    
    def rows_for(self, image: np.ndarray) -> List[int]:
        """Scanline row indices for this image."""
        return scanline_rows(image.shape[0], self.row_ratios)
    
    def sample(self, image: np.ndarray) -> List[List[Color]]:
        """
        Classify every column of the three scanlines.
        
        Args:
            image: H x W x 3 image
        
        Returns:
            [top, middle, bottom] samples, each with one Color per column
        
        Raises:
            ValueError: If the image is not a non-empty 3-channel array or a
                scanline falls outside it
        """
        if image is None or image.ndim != 3 or image.shape[2] != 3:
            raise ValueError('Image must be an H x W x 3 array')
        
        height, width = image.shape[:2]
        if height == 0 or width == 0:
            raise ValueError(f'Image is empty: {width}x{height} pixels')
        
        rows = self.rows_for(image)
        samples: List[List[Color]] = []
        for band_idx, row in enumerate(rows):
            if not 0 <= row < height:
                raise ValueError(f'Scanline row {row} is outside image height {height}')
            logger.debug(f'band {band_idx + 1} (row {row})')
            samples.append([self.classifier.classify(pixel) for pixel in image[row]])
        
        return samples
