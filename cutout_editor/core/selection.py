from dataclasses import dataclass
from typing import Optional

from PIL import Image

from cutout_editor.core.color import as_rgb_image


@dataclass(frozen=True)
class Rect:
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0

    @property
    def is_empty(self) -> bool:
        return self.w <= 0 or self.h <= 0

    def clipped(self, width: int, height: int) -> "Rect":
        x0 = max(0, self.x)
        y0 = max(0, self.y)
        x1 = min(width, self.x + self.w)
        y1 = min(height, self.y + self.h)
        return Rect(x0, y0, max(0, x1 - x0), max(0, y1 - y0))


def restrict(original: Image.Image, processed: Image.Image, rect: Optional[Rect]) -> Image.Image:
    """
    Keep ``processed`` only inside ``rect`` and ``original`` everywhere else.
    An empty or missing rect means no constraint and returns ``processed``.
    The rect is clipped to the image, so a rect fully outside it leaves the
    original untouched.
    """
    if rect is None or rect.is_empty:
        return processed
    if original.size != processed.size:
        raise ValueError(f"Image sizes differ: {original.size} vs {processed.size}")
    mode = processed.mode if processed.mode in ("RGB", "RGBA") else "RGBA"
    out = as_rgb_image(original).convert(mode)
    box = rect.clipped(*processed.size)
    if box.is_empty:
        return out
    bounds = (box.x, box.y, box.x + box.w, box.y + box.h)
    out.paste(processed.convert(mode).crop(bounds), bounds[:2])
    return out
