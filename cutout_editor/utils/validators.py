class InvalidInputError(ValueError):
    """Raised when an operation cannot run on the given image or geometry."""


def validate_image(image):
    if image is None:
        raise InvalidInputError("No image given.")
    w, h = image.size
    if w <= 0 or h <= 0:
        raise InvalidInputError(f"Image has no pixels: {w}x{h}")
    return image


def validate_path(path) -> list[tuple[int, int]]:
    points = [(int(x), int(y)) for x, y in (path or [])]
    if len(points) < 3:
        raise InvalidInputError(f"A shape path needs at least 3 points, got {len(points)}.")
    return points


def validate_mask_size(image, mask):
    if (mask.width, mask.height) != tuple(image.size):
        raise InvalidInputError(
            f"Mask is {mask.width}x{mask.height} but image is {image.width}x{image.height}"
        )
