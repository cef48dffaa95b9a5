from dataclasses import dataclass
from typing import Any, Callable, Iterator

import numpy as np


@dataclass
class Vector2:
    """A 2D pair, used both as a grid coordinate and as a velocity."""

    x: Any
    y: Any

    def scale(self, s) -> "Vector2":
        self.x *= s
        self.y *= s
        return self

    def convert(self, kind: Callable) -> "Vector2":
        return Vector2(kind(self.x), kind(self.y))

    def __hash__(self):
        return hash((self.x, self.y))

    def __iter__(self):
        yield self.x
        yield self.y

    def __str__(self):
        return f"({self.x}, {self.y})"


class GridMap:
    """
    Fixed-size row-major grid over a flat numpy array.
    Cell (x, y) lives at index x + y*width. With depth set, every cell
    holds a vector of that many values (e.g. an RGB triple).
    """

    def __init__(self, width: int, height: int, default, dtype=object, depth=None):
        self._width = int(width)
        self._height = int(height)
        self._depth = depth
        shape = self._width * self._height if depth is None else (self._width * self._height, depth)
        self._cells = np.full(shape, default, dtype=dtype)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _index(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(
                f"cell ({x}, {y}) out of range for {self._width}x{self._height} grid"
            )
        return x + y * self._width

    def get(self, x: int, y: int):
        return self._cells[self._index(x, y)]

    def set(self, x: int, y: int, value) -> None:
        self._cells[self._index(x, y)] = value

    def swap(self, x1: int, y1: int, x2: int, y2: int) -> None:
        a = self._index(x1, y1)
        b = self._index(x2, y2)
        self._cells[[a, b]] = self._cells[[b, a]]

    def set_neighbor(self, cx: int, cy: int, value) -> None:
        """Write value into the 3x3 block around (cx, cy), clipped to the grid."""
        x0, x1 = max(0, cx - 1), min(cx + 1, self._width - 1)
        y0, y1 = max(0, cy - 1), min(cy + 1, self._height - 1)
        if x0 > x1 or y0 > y1:
            return
        self.rows()[y0:y1 + 1, x0:x1 + 1] = value

    def rows(self) -> np.ndarray:
        # [height, width(, depth)] view of the same storage
        if self._depth is None:
            return self._cells.reshape(self._height, self._width)
        return self._cells.reshape(self._height, self._width, self._depth)

    def cells(self) -> np.ndarray:
        # flat view, writes go straight to the grid
        return self._cells

    def __iter__(self) -> Iterator:
        return iter(self._cells)

    def __len__(self) -> int:
        return self._cells.shape[0]
