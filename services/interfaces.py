"""
Service interfaces and type definitions for the resistor scanner.

This module defines the data structures returned by the pipeline and the
HTTP service, so callers have a clear contract for every field.
"""

from typing import Any, TypedDict, List, Optional, Literal


class ImageSize(TypedDict):
    """Input image dimensions."""
    width: int
    height: int


class ResistorData(TypedDict):
    """
    Successful decode payload.
    
    Band lists hold lower-case color names in reading order.
    """
    resistance_ohms: int
    tolerance_percent: float
    resistance_display: str  # SI formatted, e.g. "4.7kΩ"
    bands: List[str]  # Cleaned bands (3-6 entries)
    bands_with_background: List[str]  # Fused sequence before background removal
    scanline_rows: List[int]  # Top, middle, bottom row indices
    agreement_width: int  # Minimum run length in columns
    palette: str  # Palette name, e.g. "reduced"
    image: ImageSize


class PipelineResult(TypedDict, total=False):
    """
    Complete pipeline result.
    
    On success only 'data' is set; on failure 'error' and 'error_code' are
    set and 'bands' carries whatever bands were detected.
    'visualization' is only present when requested; pop it before
    serializing the result.
    """
    success: bool
    data: ResistorData
    error: Optional[str]
    error_code: Optional[Literal["INVALID_IMAGE", "UNDECODABLE_BAND_PATTERN"]]
    bands: List[str]
    visualization: Any  # BGR ndarray with classified scanlines painted
