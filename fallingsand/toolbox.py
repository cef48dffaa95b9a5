from typing import List, Tuple

from fallingsand import settings
from fallingsand.cells import CellKind, CellType, Color

PALETTE: List[Color] = [
    (255, 255, 255),
    (0, 0, 0),
    (255, 0, 0),
    (0, 255, 0),
    (0, 0, 255),
]


class ToolBox:
    """Brush state for the driver: palette index, brush radius, emitter mode."""

    def __init__(self, colors=None, radius: int = settings.SAND_RADIUS):
        self.colors = list(colors) if colors is not None else list(PALETTE)
        self.index = 0
        self.radius = radius
        self.pulse = True

    @property
    def current_color(self) -> Color:
        return self.colors[self.index]

    def next_color(self) -> Color:
        self.index = (self.index + 1) % len(self.colors)
        return self.current_color

    def resize_brush(self, delta: int) -> int:
        self.radius = max(settings.BRUSH_MIN, min(settings.BRUSH_MAX, self.radius + delta))
        return self.radius

    def sand_color(self, tick: int) -> Color:
        return pulse_color(tick) if self.pulse else self.current_color


def pulse_color(tick: int) -> Color:
    """Red ramp that brightens over 256 ticks, then fades back."""
    shade = tick % 256
    if tick % 512 <= 256:
        return (shade, 0, 0)
    return (255 - shade, 0, 0)


def pointer_to_cell(px: float, py: float, view_w: float, view_h: float,
                    grid_w: int, grid_h: int) -> Tuple[int, int]:
    """Map a pointer position in a view of view_w x view_h pixels onto the grid."""
    rx = min(max(px / view_w, 0.0), 1.0) if view_w > 0 else 0.0
    ry = min(max(py / view_h, 0.0), 1.0) if view_h > 0 else 0.0
    return min(int(rx * grid_w), grid_w - 1), min(int(ry * grid_h), grid_h - 1)


def display_color(cell: CellType, background: Color = settings.BACKGROUND) -> Color:
    if cell.kind == CellKind.EMPTY:
        return background
    return cell.color
