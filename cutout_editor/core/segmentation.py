"""
Color-similarity flood fills used by the cut-out modes.

All modes run the same breadth-first fill (``flood_fill``) and differ only in
how they pick seeds and the reference color:

* ``grow_background``: the four corners, compared against the sampled
  background color.
* ``grow_foreground``: one clicked seed, compared against its own color.
* ``grow_regions``: many seeds (shape detection, polygon cut), each compared
  against its own color.
"""
import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Optional

from PIL import Image

from cutout_editor.core.color import Color, as_rgb_image, distance, sample_background
from cutout_editor.core.mask import Mask
from cutout_editor.utils.helpers import clamp_tolerance
from cutout_editor.utils.validators import validate_image

logger = logging.getLogger(__name__)

Point = tuple[int, int]


@dataclass
class FillResult:
    region: Mask
    visited: Mask


def corner_seeds(width: int, height: int) -> list[Point]:
    return [(0, 0), (width - 1, 0), (0, height - 1), (width - 1, height - 1)]


def _grow(px, w: int, h: int, seed: Point, ref, tolerance: int, inside: bytearray, done: bytearray) -> list[int]:
    """
    One breadth-first run from ``seed``. Marks accepted pixels in ``inside``
    and every tested pixel in ``done``; returns the indices it rejected.
    """
    sx, sy = seed
    rejected = []
    done[sy * w + sx] = 1
    queue = deque([(sx, sy)])
    while queue:
        x, y = queue.popleft()
        if distance(px[x, y], ref) > tolerance:
            rejected.append(y * w + x)
            continue
        inside[y * w + x] = 1
        for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            if 0 <= nx < w and 0 <= ny < h and not done[ny * w + nx]:
                done[ny * w + nx] = 1
                queue.append((nx, ny))
    return rejected


def flood_fill(
    image: Image.Image,
    seeds: Iterable[Point],
    tolerance: int,
    reference: Optional[Color] = None,
    visited: Optional[Mask] = None,
) -> FillResult:
    """
    Non-recursive 4-connected flood fill.

    A pixel joins the region when its distance to the reference color is
    <= tolerance. With ``reference=None`` every seed uses its own pixel color.
    ``visited`` is never mutated: it is copied, extended by this run and
    returned in the result, so a caller can thread it through several calls.
    Out-of-bounds or already visited seeds are skipped.
    """
    img = as_rgb_image(image)
    w, h = img.size
    px = img.load()
    tolerance = clamp_tolerance(tolerance)

    region = Mask(w, h)
    seen = visited.copy() if visited is not None else Mask(w, h)
    if seen.size != (w, h):
        raise ValueError(f"Visited grid is {seen.size} but image is {(w, h)}")

    for sx, sy in seeds:
        if not (0 <= sx < w and 0 <= sy < h) or seen.cells[sy * w + sx]:
            continue
        ref = reference if reference is not None else px[sx, sy]
        _grow(px, w, h, (sx, sy), ref, tolerance, region.cells, seen.cells)

    return FillResult(region, seen)


def grow_background(image: Image.Image, tolerance: int, seeds: Optional[Iterable[Point]] = None) -> Mask:
    """
    Background mask (True = background) grown from the image corners against
    the sampled background color. Each seed gets its own run; a seed already
    claimed by an earlier run is not expanded again.
    """
    validate_image(image)
    w, h = image.size
    reference = sample_background(image)
    mask = Mask(w, h)
    for seed in (seeds if seeds is not None else corner_seeds(w, h)):
        x, y = seed
        if mask.in_bounds(x, y) and mask[x, y]:
            logger.debug("Seed %s already background, skipping", seed)
            continue
        result = flood_fill(image, [seed], tolerance, reference=reference)
        mask = mask.union(result.region)
    logger.debug("Background fill tol=%s ref=%s: %d/%d pixels", tolerance, reference, mask.count(), w * h)
    return mask


def grow_foreground(image: Image.Image, seed: Point, tolerance: int) -> Mask:
    """
    Magic wand: grow the region connected to ``seed`` and return its complement,
    so True still means background. Similar colors that do not touch the seed
    region stay background.
    """
    validate_image(image)
    result = flood_fill(image, [seed], tolerance)
    logger.debug("Foreground fill seed=%s tol=%s: %d pixels", seed, tolerance, result.region.count())
    return result.region.inverted()


def grow_regions(image: Image.Image, seeds: Iterable[Point], tolerance: int) -> Mask:
    """
    Union of the foreground regions grown from each seed, each compared
    against its own color (True = foreground).

    Runs share one accumulator and one visited grid, so every pixel is
    accepted at most once. Pixels a run rejected are cleared from the visited
    grid after that run; a later seed of another color may still take them.
    Seeds already inside the union are skipped.
    """
    validate_image(image)
    img = as_rgb_image(image)
    w, h = img.size
    px = img.load()
    tolerance = clamp_tolerance(tolerance)

    union = Mask(w, h)
    done = bytearray(w * h)
    fills = 0
    for sx, sy in seeds:
        if not (0 <= sx < w and 0 <= sy < h) or union.cells[sy * w + sx]:
            continue
        for i in _grow(px, w, h, (sx, sy), px[sx, sy], tolerance, union.cells, done):
            done[i] = 0
        fills += 1
    logger.debug("Multi-seed fill tol=%s: %d fills, %d pixels", tolerance, fills, union.count())
    return union
