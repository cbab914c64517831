import logging
from pathlib import Path
from typing import Optional

from PIL import Image

from cutout_editor.core.color import Color, sample_background
from cutout_editor.core.editor_tools import HistoryManager, SegmentMode
from cutout_editor.core.image_handler import load_image, save_png
from cutout_editor.core.mask import Mask
from cutout_editor.core.segmentation import grow_background, grow_foreground
from cutout_editor.core.selection import Rect, restrict
from cutout_editor.core.shapes import detect_shapes, find_seeds, rasterize_polygon
from cutout_editor.core.transparency import to_alpha_image, to_debug_image
from cutout_editor.utils.config import AppConfig
from cutout_editor.utils.helpers import DEFAULT_TOLERANCE, clamp_tolerance
from cutout_editor.utils.validators import InvalidInputError, validate_image, validate_path

logger = logging.getLogger(__name__)


class CutoutSession:
    """
    State behind the cut-out editor: the loaded original, the currently
    visible result, the last computed mask and the undo/redo history.

    Every segmentation is computed from the original image. The result
    replaces the current image and is recorded in history first, so each
    cut can be undone.
    """

    def __init__(self, on_status=None, tolerance: int = DEFAULT_TOLERANCE, config: Optional[AppConfig] = None):
        self.on_status = on_status or (lambda text: None)
        self.config = config
        self.tolerance = clamp_tolerance(tolerance)
        self.original: Optional[Image.Image] = None
        self.current: Optional[Image.Image] = None
        self.last_mask: Optional[Mask] = None
        self.show_mask = False
        self.history = HistoryManager()

    # ---------- Project lifecycle ----------
    def open_file(self, path: str | Path):
        self.load_image(load_image(path))
        if self.config is not None:
            self.config.add_recent(path)

    def load_image(self, image: Image.Image):
        validate_image(image)
        self.original = image.copy()
        self.current = self.original
        self.last_mask = None
        self.show_mask = False
        self.clear_history()
        self.on_status(f"Image loaded ({image.width}x{image.height})")

    def save(self, path: str | Path):
        if self.current is None:
            raise InvalidInputError("Nothing to save.")
        save_png(self.current, path)
        self.on_status(f"Saved {path}")

    # ---------- Settings ----------
    def set_tolerance(self, tol: int):
        self.tolerance = clamp_tolerance(tol)
        self.on_status(f"Tolerance: {self.tolerance}")

    def set_show_mask(self, show: bool):
        self.show_mask = bool(show)

    def display_image(self) -> Optional[Image.Image]:
        if self.show_mask and self.last_mask is not None:
            return to_debug_image(self.last_mask)
        return self.current

    # ---------- Segmentation ----------
    def sample_background(self) -> Color:
        self._require_image()
        return sample_background(self.original)

    def remove_background(self, tolerance: Optional[int] = None, rect=None) -> Image.Image:
        self._require_image()
        mask = grow_background(self.original, self._tolerance(tolerance))
        return self._apply(to_alpha_image(self.original, mask), mask, rect, "Background removed")

    def seed_crop(self, point: tuple[int, int], tolerance: Optional[int] = None, rect=None) -> Image.Image:
        self._require_image()
        mask = grow_foreground(self.original, point, self._tolerance(tolerance))
        return self._apply(to_alpha_image(self.original, mask), mask, rect, f"Kept region at {point}")

    def shape_crop(self, path, tolerance: Optional[int] = None, rect=None) -> Image.Image:
        self._require_image()
        points = validate_path(path)
        result = rasterize_polygon(self.original, points, self._tolerance(tolerance))
        return self._apply(result.image, result.mask, rect, "Shape cut")

    def auto_detect(self, tolerance: Optional[int] = None, rect=None) -> Image.Image:
        self._require_image()
        seeds = find_seeds(self.original)
        if not seeds:
            self.on_status("No shapes detected")
            return self.current
        mask = detect_shapes(self.original, self._tolerance(tolerance), seeds=seeds)
        return self._apply(to_alpha_image(self.original, mask), mask, rect, f"Detected shapes from {len(seeds)} seeds")

    def run(self, mode: SegmentMode, tolerance: Optional[int] = None, rect=None, seed=None, path=None) -> Image.Image:
        if mode == SegmentMode.BACKGROUND:
            return self.remove_background(tolerance, rect)
        if mode == SegmentMode.SEED:
            if seed is None:
                raise InvalidInputError("Seed mode needs a seed point.")
            return self.seed_crop(seed, tolerance, rect)
        if mode == SegmentMode.SHAPE:
            return self.shape_crop(path, tolerance, rect)
        return self.auto_detect(tolerance, rect)

    # ---------- Undo / Redo ----------
    def undo(self) -> Optional[Image.Image]:
        if not self.history.can_undo:
            self.on_status("Nothing to undo")
            return None
        snap = self.history.undo(self.current)
        self._restore(snap)
        self.on_status("Undo")
        return snap

    def redo(self) -> Optional[Image.Image]:
        if not self.history.can_redo:
            self.on_status("Nothing to redo")
            return None
        snap = self.history.redo(self.current)
        self._restore(snap)
        self.on_status("Redo")
        return snap

    def clear_history(self):
        # History never spans two different images
        self.history.clear()

    # ---------- Internals ----------
    def _require_image(self):
        if self.original is None:
            raise InvalidInputError("No image loaded.")

    def _tolerance(self, tolerance: Optional[int]) -> int:
        return self.tolerance if tolerance is None else clamp_tolerance(tolerance)

    def _apply(self, processed: Image.Image, mask: Mask, rect, status: str) -> Image.Image:
        if rect is not None and not isinstance(rect, Rect):
            rect = Rect(*rect)
        processed = restrict(self.current, processed, rect)
        self.history.record(self.current)
        self.current = processed
        self.last_mask = mask
        self.on_status(status)
        return processed

    def _restore(self, snapshot: Image.Image):
        self.current = snapshot
        # The last mask described the image that was just replaced
        self.last_mask = None
