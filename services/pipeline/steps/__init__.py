"""
Pipeline step services.

Steps:
- ScanlineSamplingService: Classifies pixels along three scanlines
- SequenceFusionService: Merges scanlines into one band sequence
- remove_background: Keeps band segments only
- ResistorDecodingService: Converts band colors to ohms and tolerance
"""

from services.pipeline.steps.scanline_sampling import ScanlineSamplingService, scanline_rows
from services.pipeline.steps.sequence_fusion import SequenceFusionService, agree, agreement_width
from services.pipeline.steps.background_removal import remove_background
from services.pipeline.steps.resistor_decoding import (
    ResistorDecodingService,
    ResistorValue,
    UndecodableBandPatternError,
    decode_bands,
    format_resistance
)

__all__ = [
    'ScanlineSamplingService',
    'SequenceFusionService',
    'ResistorDecodingService',
    'ResistorValue',
    'UndecodableBandPatternError',
    'agree',
    'agreement_width',
    'decode_bands',
    'format_resistance',
    'remove_background',
    'scanline_rows'
]
