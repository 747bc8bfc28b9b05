"""
Band color palette for resistor scanning.

Reference vectors are in BGR channel order, matching images loaded with OpenCV.
Black and white are only used as saturation clamps; every other color is
matched by similarity against its reference vector.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Sequence, Tuple

import numpy as np

Vector = Tuple[float, float, float]


class Color(Enum):
    """
    Resistor band color. The value is the band digit.
    
    Orange and yellow have no reference vector, so classification never
    produces them; they only appear in band sequences passed to decoding.
    """
    black = 0
    brown = 1
    red = 2
    orange = 3
    yellow = 4
    blue = 6
    white = 9


def color_name(color: Color) -> str:
    """Return the lower-case name of a band color."""
    return color.name


def magnitude(vector: Sequence[float]) -> float:
    """
    Cube root of the sum of squared channel values.
    
    This is not the Euclidean norm; thresholds and similarity scores are
    calibrated against it as-is.
    """
    v = np.asarray(vector, dtype=np.float64)
    return float(np.cbrt(np.dot(v, v)))


def similarity(reference: Sequence[float], sample: Sequence[float]) -> float:
    """
    Similarity of two color vectors: dot product over product of magnitudes.
    
    Higher is more similar. Undefined for a zero vector.
    """
    r = np.asarray(reference, dtype=np.float64)
    s = np.asarray(sample, dtype=np.float64)
    return float(np.dot(r, s) / (magnitude(r) * magnitude(s)))


@dataclass(frozen=True)
class ColorPalette:
    """
    Immutable set of reference colors used by classification.
    
    Attributes:
        name: Palette identifier
        black: Reference vector below whose magnitude a pixel is black
        white: Reference vector above whose magnitude a pixel is white
        candidates: Ordered (color, reference) pairs; order breaks ties
        display: Color -> BGR vector used when painting visualizations
    """
    name: str
    black: Vector
    white: Vector
    candidates: Tuple[Tuple[Color, Vector], ...]
    display: Dict[Color, Vector] = field(default_factory=dict)
    
    @property
    def black_magnitude(self) -> float:
        return magnitude(self.black)
    
    @property
    def white_magnitude(self) -> float:
        return magnitude(self.white)
    
    @property
    def colors(self) -> Tuple[Color, ...]:
        """All colors this palette can produce."""
        return (Color.black, Color.white) + tuple(c for c, _ in self.candidates)
    
    def reference(self, color: Color) -> Vector:
        """Return the reference vector for a color."""
        if color is Color.black:
            return self.black
        if color is Color.white:
            return self.white
        for candidate, vector in self.candidates:
            if candidate is color:
                return vector
        raise KeyError(f'{color_name(color)} is not in the {self.name} palette')
    
    def display_color(self, color: Color) -> Vector:
        """BGR vector used to paint a classified pixel."""
        if color in self.display:
            return self.display[color]
        return self.reference(color)


BLACK_REFERENCE: Vector = (25, 25, 25)
WHITE_REFERENCE: Vector = (198, 198, 198)
RED_REFERENCE: Vector = (4, 8, 67)
BLUE_REFERENCE: Vector = (0, 255, 0)
BROWN_REFERENCE: Vector = (13, 29, 52)

_HIGHLIGHT_COLORS: Dict[Color, Vector] = {
    Color.black: (0, 0, 0),
    Color.white: (255, 255, 255),
    Color.blue: (255, 0, 0),
    Color.red: (0, 0, 255),
}

REDUCED_PALETTE = ColorPalette(
    name='reduced',
    black=BLACK_REFERENCE,
    white=WHITE_REFERENCE,
    candidates=(
        (Color.red, RED_REFERENCE),
        (Color.blue, BLUE_REFERENCE),
        (Color.brown, BROWN_REFERENCE),
    ),
    display=dict(_HIGHLIGHT_COLORS)
)

PALETTES: Dict[str, ColorPalette] = {
    REDUCED_PALETTE.name: REDUCED_PALETTE,
}


def get_palette(name: str) -> ColorPalette:
    """
    Resolve a palette by name.
    
    Raises:
        ValueError: If the name is not a known palette
    """
    palette = PALETTES.get((name or '').lower())
    if palette is None:
        raise ValueError(f'Unknown palette: {name!r} (expected one of: {", ".join(PALETTES)})')
    return palette
