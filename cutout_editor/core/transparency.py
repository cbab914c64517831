from PIL import Image

from cutout_editor.core.color import as_rgb_image
from cutout_editor.core.mask import Mask
from cutout_editor.utils.validators import validate_mask_size

DEBUG_BACKGROUND = (255, 0, 0, 128)
DEBUG_FOREGROUND = (0, 255, 0, 128)


def to_alpha_image(image: Image.Image, mask: Mask) -> Image.Image:
    """
    Return an RGBA copy of ``image`` where background pixels (mask True) have
    alpha 0 and everything else alpha 255. RGB values are kept as they are.
    """
    validate_mask_size(image, mask)
    out = as_rgb_image(image).convert("RGBA")
    alpha = Image.frombytes("L", mask.size, bytes(0 if v else 255 for v in mask.cells))
    out.putalpha(alpha)
    return out


def to_debug_image(mask: Mask) -> Image.Image:
    """Translucent red for background, translucent green for foreground."""
    out = Image.new("RGBA", mask.size)
    out.putdata([DEBUG_BACKGROUND if v else DEBUG_FOREGROUND for v in mask.cells])
    return out
