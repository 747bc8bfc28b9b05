"""
Unit tests for the band color palette.
"""

import math

import numpy as np
import pytest

from services.color.palette import (
    Color,
    PALETTES,
    REDUCED_PALETTE,
    color_name,
    get_palette,
    magnitude,
    similarity
)


class TestMagnitude:
    """Test cases for magnitude()."""
    
    def test_cube_root_of_sum_of_squares(self):
        """Magnitude is the cube root of the squared channel sum."""
        assert magnitude((3, 4, 0)) == pytest.approx(math.pow(25, 1 / 3))
        assert magnitude((25, 25, 25)) == pytest.approx(math.pow(1875, 1 / 3))
    
    def test_zero_vector(self):
        """Zero vector has zero magnitude."""
        assert magnitude((0, 0, 0)) == 0.0
    
    def test_uint8_pixel_does_not_overflow(self):
        """uint8 pixels are widened before squaring."""
        pixel = np.array([255, 255, 255], dtype=np.uint8)
        assert magnitude(pixel) == pytest.approx(math.pow(3 * 255 ** 2, 1 / 3))


class TestSimilarity:
    """Test cases for similarity()."""
    
    def test_dot_product_over_magnitudes(self):
        """Similarity divides the dot product by both magnitudes."""
        a, b = (4, 8, 67), (13, 29, 52)
        expected = (4 * 13 + 8 * 29 + 67 * 52) / (magnitude(a) * magnitude(b))
        assert similarity(a, b) == pytest.approx(expected)
    
    def test_orthogonal_vectors(self):
        """Orthogonal vectors have zero similarity."""
        assert similarity((1, 0, 0), (0, 1, 0)) == 0.0
    
    def test_symmetric(self):
        """Argument order does not matter."""
        assert similarity((4, 8, 67), (0, 255, 0)) == pytest.approx(similarity((0, 255, 0), (4, 8, 67)))
    
    def test_identical_vectors_not_normalized(self):
        """With the cube-root magnitude, identical vectors do not score 1.0."""
        assert similarity((2, 0, 0), (2, 0, 0)) == pytest.approx(4 / math.pow(4, 2 / 3))


class TestColorPalette:
    """Test cases for palette values."""
    
    def test_digit_values(self):
        """Color values are the band digits."""
        assert [c.value for c in (Color.black, Color.brown, Color.red, Color.orange,
                                  Color.yellow, Color.blue, Color.white)] == [0, 1, 2, 3, 4, 6, 9]
    
    def test_color_name(self):
        assert color_name(Color.brown) == 'brown'
    
    def test_reduced_candidates_in_order(self):
        """Reduced palette matches red, blue, brown in that order."""
        assert [c for c, _ in REDUCED_PALETTE.candidates] == [Color.red, Color.blue, Color.brown]
    
    def test_reference_lookup(self):
        """Black and white come from the clamp references."""
        assert REDUCED_PALETTE.reference(Color.black) == (25, 25, 25)
        assert REDUCED_PALETTE.reference(Color.white) == (198, 198, 198)
        assert REDUCED_PALETTE.reference(Color.red) == (4, 8, 67)
    
    def test_reference_missing_color(self):
        """Colors outside the palette have no reference."""
        with pytest.raises(KeyError):
            REDUCED_PALETTE.reference(Color.orange)
    
    def test_display_color(self):
        """Display colors override references where defined."""
        assert REDUCED_PALETTE.display_color(Color.blue) == (255, 0, 0)
        assert REDUCED_PALETTE.display_color(Color.brown) == (13, 29, 52)
    
    def test_palette_is_immutable(self):
        with pytest.raises(Exception):
            REDUCED_PALETTE.name = 'other'
    
    def test_get_palette(self):
        """Palettes resolve by case-insensitive name."""
        assert get_palette('reduced') is REDUCED_PALETTE
        assert get_palette('REDUCED') is REDUCED_PALETTE
    
    def test_get_palette_unknown(self):
        with pytest.raises(ValueError):
            get_palette('rainbow')
    
    def test_unreferenced_colors_not_in_palettes(self):
        """Orange and yellow have no reference vector in any palette."""
        for palette in PALETTES.values():
            assert Color.orange not in palette.colors
            assert Color.yellow not in palette.colors
