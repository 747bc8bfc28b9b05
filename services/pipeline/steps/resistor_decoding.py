"""
Resistor decoding step.

Interprets a cleaned band sequence with the resistor color code:

    3 bands: digit, digit, multiplier
    4 bands: digit, digit, multiplier, tolerance
    5 bands: digit, digit, digit, multiplier, tolerance
    6 bands: digit, digit, digit, multiplier, tolerance, temperature coefficient

The temperature coefficient band is not decoded.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from services.color.palette import Color, color_name

logger = logging.getLogger(__name__)

MIN_BANDS = 3
MAX_BANDS = 6

# White maps to 0%. A resistor without a
# tolerance band is conventionally +/-20%, so this entry is probably wrong.
TOLERANCE_PERCENT: Dict[Color, float] = {
    Color.black: 0.0,
    Color.brown: 1.0,
    Color.red: 2.0,
    Color.blue: 0.25,
    Color.white: 0.0,
}


class UndecodableBandPatternError(ValueError):
    """Band sequence cannot be read as a resistor value."""
    
    def __init__(self, message: str, bands: Optional[Sequence[Color]] = None):
        super().__init__(message)
        self.bands = list(bands) if bands is not None else []


@dataclass(frozen=True)
class ResistorValue:
    """Decoded resistor value."""
    resistance_ohms: int
    tolerance_percent: float = 0.0
    
    def to_dict(self) -> Dict:
        return {
            'resistance_ohms': self.resistance_ohms,
            'tolerance_percent': self.tolerance_percent
        }


def decode_bands(bands: Sequence[Color]) -> ResistorValue:
    """
    Decode band colors into resistance and tolerance.
    
    Walks from the last band backwards: optional temperature coefficient
    (6 bands), optional tolerance (more than 3 bands), multiplier, then the
    significant digits with increasing powers of ten.
    
    Args:
        bands: Band colors in reading order
    
    Returns:
        ResistorValue; tolerance is 0.0 when there is no tolerance band
    
    Raises:
        UndecodableBandPatternError: If the band count is outside 3-6 or the
            tolerance band has no tolerance mapping
    """
    bands = list(bands)
    if not MIN_BANDS <= len(bands) <= MAX_BANDS:
        raise UndecodableBandPatternError(
            f'Expected {MIN_BANDS}-{MAX_BANDS} bands, got {len(bands)}', bands
        )
    
    remaining = list(reversed(bands))
    if len(bands) == 6:
        remaining.pop(0)
    
    tolerance_percent = 0.0
    if len(bands) > 3:
        tolerance_band = remaining.pop(0)
        if tolerance_band not in TOLERANCE_PERCENT:
            raise UndecodableBandPatternError(
                f'{color_name(tolerance_band)} is not a tolerance color', bands
            )
        tolerance_percent = TOLERANCE_PERCENT[tolerance_band]
    
    multiplier = 10 ** remaining.pop(0).value
    
    resistance_ohms = 0
    for position, digit_band in enumerate(remaining):
        resistance_ohms += digit_band.value * 10 ** position
    
    return ResistorValue(
        resistance_ohms=resistance_ohms * multiplier,
        tolerance_percent=tolerance_percent
    )


# Largest prefix first
_SI_UNITS = ((1_000_000, 'MΩ'), (1_000, 'kΩ'))


def format_resistance(ohms: int) -> str:
    """
    Human readable resistance using the largest SI prefix that fits.
    
    Args:
        ohms: Resistance in ohms
    
    Returns:
        Display string such as '220Ω', '4.7kΩ' or '1MΩ'
    """
    for scale, unit in _SI_UNITS:
        if ohms >= scale:
            return f'{ohms / scale:g}{unit}'
    return f'{ohms:g}Ω'


class ResistorDecodingService:
    """Decodes cleaned band sequences into resistor values."""
    
    def decode(self, bands: Sequence[Color]) -> ResistorValue:
        """
        Decode bands, logging the result.
        
        Raises:
            UndecodableBandPatternError: See decode_bands
        """
        names: List[str] = [color_name(c) for c in bands]
        try:
            value = decode_bands(bands)
        except UndecodableBandPatternError as e:
            logger.warning(f'Cannot decode bands {" ".join(names) or "(none)"}: {e}')
            raise
        
        logger.info(f'resistance: {value.resistance_ohms} ohms')
        logger.info(f'tolerance: {value.tolerance_percent}%')
        return value
