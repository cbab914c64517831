from dataclasses import dataclass, field
from typing import Optional

_FLIP = bytes.maketrans(b"\x00\x01", b"\x01\x00")


@dataclass
class Mask:
    """
    Boolean W x H grid stored row-major as 0/1 bytes.
    For segmentation results True means background.
    """
    width: int
    height: int
    cells: Optional[bytearray] = field(default=None, repr=False)

    def __post_init__(self):
        if self.cells is None:
            self.cells = bytearray(self.width * self.height)
        elif len(self.cells) != self.width * self.height:
            raise ValueError(f"Mask data has {len(self.cells)} cells, expected {self.width * self.height}")

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def __getitem__(self, xy: tuple[int, int]) -> bool:
        x, y = xy
        return self.cells[y * self.width + x] == 1

    def __setitem__(self, xy: tuple[int, int], value: bool):
        x, y = xy
        self.cells[y * self.width + x] = 1 if value else 0

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def count(self) -> int:
        return self.cells.count(1)

    def copy(self) -> "Mask":
        return Mask(self.width, self.height, bytearray(self.cells))

    def inverted(self) -> "Mask":
        return Mask(self.width, self.height, self.cells.translate(_FLIP))

    def union(self, other: "Mask") -> "Mask":
        if other.size != self.size:
            raise ValueError(f"Cannot union {self.size} mask with {other.size} mask")
        return Mask(self.width, self.height, bytearray(a | b for a, b in zip(self.cells, other.cells)))
