"""
Scanline and palette configuration.
"""

import os
from typing import Dict, Tuple

# Palette used for classification (see services.color.palette.PALETTES)
RESISTOR_PALETTE: str = os.getenv('RESISTOR_PALETTE', 'reduced').lower()

# Scanline positions as a fraction of image height
SCANLINE_TOP_RATIO: float = float(os.getenv('SCANLINE_TOP_RATIO', '0.33'))
SCANLINE_MIDDLE_RATIO: float = float(os.getenv('SCANLINE_MIDDLE_RATIO', '0.5'))
SCANLINE_BOTTOM_RATIO: float = float(os.getenv('SCANLINE_BOTTOM_RATIO', '0.67'))

# Minimum run of agreeing columns before a band is accepted (fraction of image width)
AGREEMENT_WIDTH_RATIO: float = float(os.getenv('AGREEMENT_WIDTH_RATIO', '0.035'))

LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO').upper()


def get_scanline_ratios() -> Tuple[float, float, float]:
    """Return (top, middle, bottom) scanline ratios."""
    return (SCANLINE_TOP_RATIO, SCANLINE_MIDDLE_RATIO, SCANLINE_BOTTOM_RATIO)


def get_scan_config() -> Dict:
    """
    Get scan configuration dictionary.
    
    Returns:
        Dictionary with scan configuration parameters
    """
    return {
        'palette': RESISTOR_PALETTE,
        'scanline_ratios': list(get_scanline_ratios()),
        'agreement_width_ratio': AGREEMENT_WIDTH_RATIO,
        'log_level': LOG_LEVEL
    }
