"""
Band color palette and pixel classification.
"""

from services.color.palette import (
    Color,
    ColorPalette,
    REDUCED_PALETTE,
    color_name,
    get_palette,
    magnitude,
    similarity
)
from services.color.classifier import BandClassifier

__all__ = [
    'Color',
    'ColorPalette',
    'REDUCED_PALETTE',
    'BandClassifier',
    'color_name',
    'get_palette',
    'magnitude',
    'similarity'
]
