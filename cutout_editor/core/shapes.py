"""
Shape tools: a coarse contrast scan that proposes seed points, and a
free-hand polygon cut that refines the traced outline with flood fills.
"""
import logging
from dataclasses import dataclass

from PIL import Image, ImageDraw

from cutout_editor.core.color import as_rgb_image, distance
from cutout_editor.core.mask import Mask
from cutout_editor.core.segmentation import grow_regions
from cutout_editor.utils.validators import validate_image

logger = logging.getLogger(__name__)

CONTRAST_THRESHOLD = 30
SEED_GRID_DIVISIONS = 20
EDGE_STRIDE = 5

_OPAQUE = bytes.maketrans(b"\x01", b"\xff")


@dataclass
class ShapeResult:
    image: Image.Image
    mask: Mask


def is_edge_point(px, width: int, height: int, x: int, y: int, stride: int,
                  threshold: int = CONTRAST_THRESHOLD) -> bool:
    """True when any cardinal neighbour ``stride`` pixels away differs by more than ``threshold``."""
    c = px[x, y]
    for nx, ny in ((x + stride, y), (x - stride, y), (x, y + stride), (x, y - stride)):
        if 0 <= nx < width and 0 <= ny < height and distance(c, px[nx, ny]) > threshold:
            return True
    return False


def find_seeds(image: Image.Image) -> list[tuple[int, int]]:
    """
    Scan a uniform grid (stride = max(w, h) // 20, skipping a stride-wide
    border) and return the grid points that sit on strong local contrast,
    in row-major order. Images under 20px in both dimensions yield nothing.
    """
    validate_image(image)
    img = as_rgb_image(image)
    w, h = img.size
    stride = max(w, h) // SEED_GRID_DIVISIONS
    if stride == 0:
        return []
    px = img.load()
    seeds = []
    for y in range(stride, h - stride, stride):
        for x in range(stride, w - stride, stride):
            if is_edge_point(px, w, h, x, y, stride):
                seeds.append((x, y))
    logger.debug("Seed scan stride=%d found %d seeds", stride, len(seeds))
    return seeds


def detect_shapes(image: Image.Image, tolerance: int, seeds=None) -> Mask:
    """Background mask (True = background) from foreground fills at every detected seed."""
    if seeds is None:
        seeds = find_seeds(image)
    return grow_regions(image, seeds, tolerance).inverted()


def polygon_mask(path, size: tuple[int, int]) -> Mask:
    """
    Pixels covered by the closed ``path`` (True = inside), edge pixels
    included. Fewer than three points gives an all-False mask.
    """
    w, h = size
    points = [(int(x), int(y)) for x, y in (path or [])]
    if len(points) < 3 or w <= 0 or h <= 0:
        return Mask(w, h)
    canvas = Image.new("L", (w, h), 0)
    ImageDraw.Draw(canvas).polygon(points, fill=1)
    return Mask(w, h, bytearray(canvas.tobytes()))


def rasterize_polygon(image: Image.Image, path, tolerance: int) -> ShapeResult:
    """
    Cut along a traced outline. Every pixel inside the polygon that sits on an
    object edge seeds a foreground fill; the union of those fills is made
    opaque on an RGBA copy of ``image``. Nothing is made transparent here:
    pixels outside the fills keep whatever alpha the image already had.

    The returned mask marks pixels no fill reached (True = background).
    """
    validate_image(image)
    img = as_rgb_image(image)
    w, h = img.size
    inside = polygon_mask(path, (w, h))
    px = img.load()
    seeds = [
        (i % w, i // w)
        for i, v in enumerate(inside.cells)
        if v and is_edge_point(px, w, h, i % w, i // w, EDGE_STRIDE)
    ]
    region = grow_regions(img, seeds, tolerance)
    logger.debug("Polygon cut: %d inside, %d edge seeds, %d filled", inside.count(), len(seeds), region.count())

    out = img.convert("RGBA")
    if region.count():
        alpha = out.getchannel("A")
        alpha.paste(255, mask=Image.frombytes("L", region.size, bytes(region.cells).translate(_OPAQUE)))
        out.putalpha(alpha)
    return ShapeResult(out, region.inverted())
