"""
Shared fixtures: small synthetic images with known layouts.
"""
import pytest
from PIL import Image

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (255, 0, 0)
BLUE = (0, 0, 255)


@pytest.fixture
def dot_image():
    """4x4 white image with a single black pixel at (2, 2)."""
    img = Image.new("RGB", (4, 4), WHITE)
    img.putpixel((2, 2), BLACK)
    return img


@pytest.fixture
def square_image():
    """40x40 white image with a red square covering x, y in [10, 30)."""
    img = Image.new("RGB", (40, 40), WHITE)
    img.paste(RED, (10, 10, 30, 30))
    return img


@pytest.fixture
def gradient_image():
    """32x8 horizontal gray ramp, 8 levels per column step."""
    img = Image.new("RGB", (32, 8))
    for x in range(32):
        for y in range(8):
            v = min(255, x * 8)
            img.putpixel((x, y), (v, v, v))
    return img


@pytest.fixture
def uniform_image():
    return Image.new("RGB", (50, 30), (90, 140, 200))
