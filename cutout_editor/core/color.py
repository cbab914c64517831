from PIL import Image

from cutout_editor.utils.validators import validate_image

Color = tuple[int, int, int]


def as_rgb_image(image: Image.Image) -> Image.Image:
    """Return the image in a mode whose pixels are (r, g, b[, a]) tuples."""
    if image.mode in ("RGB", "RGBA"):
        return image
    return image.convert("RGBA")


def sample_background(image: Image.Image) -> Color:
    """
    Estimate the background color as the integer average of the four corner pixels.
    Raises InvalidInputError for an image without pixels.
    """
    validate_image(image)
    img = as_rgb_image(image)
    w, h = img.size
    px = img.load()
    corners = [px[0, 0], px[w - 1, 0], px[0, h - 1], px[w - 1, h - 1]]
    return (
        sum(c[0] for c in corners) // 4,
        sum(c[1] for c in corners) // 4,
        sum(c[2] for c in corners) // 4,
    )


def distance(c1, c2) -> int:
    # Manhattan distance over RGB only; alpha is ignored. Range 0..765.
    return abs(c1[0] - c2[0]) + abs(c1[1] - c2[1]) + abs(c1[2] - c2[2])