"""
Shared fixtures: synthetic resistor images built from vertical color segments.
"""

import numpy as np
import pytest

from services.color.palette import (
    BLUE_REFERENCE,
    BROWN_REFERENCE,
    RED_REFERENCE
)

BLACK_PIXEL = (0, 0, 0)
WHITE_PIXEL = (255, 255, 255)


def make_resistor_image(segments, height=30):
    """
    Build a BGR image from (pixel, width) segments laid out left to right.
    
    Every row is identical, so all three scanlines see the same colors.
    """
    width = sum(w for _, w in segments)
    image = np.zeros((height, width, 3), dtype=np.uint8)
    x = 0
    for pixel, w in segments:
        image[:, x:x + w] = pixel
        x += w
    return image


@pytest.fixture
def resistor_1k_image():
    """Blue body with brown, black, red bands: 10 x 10^2 = 1000 ohms."""
    return make_resistor_image([
        (WHITE_PIXEL, 10),
        (BLUE_REFERENCE, 20),
        (BROWN_REFERENCE, 20),
        (BLUE_REFERENCE, 20),
        (BLACK_PIXEL, 20),
        (BLUE_REFERENCE, 20),
        (RED_REFERENCE, 20),
        (BLUE_REFERENCE, 20),
        (WHITE_PIXEL, 50),
    ])


@pytest.fixture
def resistor_220_image():
    """Black body with red, red, brown, blue bands: 22 x 10 = 220 ohms, 0.25%."""
    return make_resistor_image([
        (WHITE_PIXEL, 10),
        (BLACK_PIXEL, 20),
        (RED_REFERENCE, 20),
        (BLACK_PIXEL, 20),
        (RED_REFERENCE, 20),
        (BLACK_PIXEL, 20),
        (BROWN_REFERENCE, 20),
        (BLACK_PIXEL, 20),
        (BLUE_REFERENCE, 20),
        (BLACK_PIXEL, 20),
        (WHITE_PIXEL, 10),
    ])


@pytest.fixture
def undecodable_image():
    """A single band between body segments."""
    return make_resistor_image([
        (WHITE_PIXEL, 50),
        (BLUE_REFERENCE, 40),
        (BROWN_REFERENCE, 40),
        (BLUE_REFERENCE, 40),
        (WHITE_PIXEL, 30),
    ])
