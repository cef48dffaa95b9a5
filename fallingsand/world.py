import logging
import math
from typing import List

import numpy as np

from fallingsand import settings
from fallingsand.cells import EMPTY, CellKind, CellType, Color, ParticleData
from fallingsand.datatype import GridMap, Vector2
from fallingsand.kernels import (
    DRAWS_PER_CELL,
    cool_rooms,
    disk_offsets,
    process_room,
    process_rooms,
    room_scan,
)

logger = logging.getLogger(__name__)


class World:
    """
    Sand grid plus a coarse ROOM_COUNT x ROOM_COUNT map of hotness counters.

    Cells are stored as typed grids (kind, speed, color) that the jitted
    kernels update in place; get()/set() translate to and from CellType.
    Any write heats the owning room and its neighbours; rooms that have
    cooled down to zero are skipped by process_frame().
    """

    def __init__(self, width: int, height: int, seed=None, rng=None, shuffle_columns: bool = False):
        if width < 1 or height < 1:
            raise ValueError(f"world size must be positive, got {width}x{height}")
        self._kind = GridMap(width, height, int(CellKind.EMPTY), dtype=np.uint8)
        self._speed = GridMap(width, height, 0.0, dtype=np.float64, depth=2)
        self._color = GridMap(width, height, 0, dtype=np.uint8, depth=3)
        self._hotness = GridMap(settings.ROOM_COUNT, settings.ROOM_COUNT, 0, dtype=np.int64)
        self.room_size = Vector2(
            -(-width // settings.ROOM_COUNT),
            -(-height // settings.ROOM_COUNT),
        )
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.shuffle_columns = shuffle_columns

        # claim stamps: a cell is claimed in the current room pass when it holds the pass stamp
        self._claimed = np.zeros((height, width), dtype=np.int64)
        self._stamp = 0
        # every source row of every room moves at most once per frame
        self._changed = np.empty((2 * width * height, 2), dtype=np.int64)
        logger.info(
            "World %dx%d created, room size %s, seed=%s", width, height, self.room_size, seed
        )

    @property
    def width(self) -> int:
        return self._kind.width

    @property
    def height(self) -> int:
        return self._kind.height

    def in_bounds(self, x: int, y: int) -> bool:
        return self._kind.in_bounds(x, y)

    def get(self, x: int, y: int) -> CellType:
        kind = CellKind(int(self._kind.get(x, y)))
        if kind == CellKind.EMPTY:
            return EMPTY
        vx, vy = self._speed.get(x, y).tolist()
        r, g, b = self._color.get(x, y).tolist()
        return CellType(kind, ParticleData(Vector2(vx, vy), (r, g, b)))

    def set(self, x: int, y: int, cell: CellType) -> None:
        self._kind.set(x, y, int(cell.kind))
        if cell.data is None:
            self._speed.set(x, y, (0.0, 0.0))
            self._color.set(x, y, (0, 0, 0))
        else:
            self._speed.set(x, y, (cell.data.speed.x, cell.data.speed.y))
            self._color.set(x, y, cell.data.color)
        self._hot(x, y)

    def room_hotness(self, room_x: int, room_y: int) -> int:
        return int(self._hotness.get(room_x, room_y))

    def count(self, kind: CellKind) -> int:
        return int(np.count_nonzero(self._kind.cells() == int(kind)))

    def _hot(self, x: int, y: int) -> None:
        self._hotness.set_neighbor(
            x // self.room_size.x, y // self.room_size.y, settings.HOT_VALUE
        )

    def _is_empty(self, x: int, y: int) -> bool:
        return int(self._kind.get(x, y)) == CellKind.EMPTY

    # ---------- Painting ----------
    def add_sand(self, x: int, y: int, color: Color, radius: int) -> int:
        """
        Scatter up to radius*4 sand particles around (x, y). The radius is
        sampled uniformly, so particles bunch up towards the centre.
        Off-grid or occupied candidates are dropped.
        """
        added = 0
        for u_radius, u_angle in self.rng.random((max(0, radius) * 4, 2)).tolist():
            r = math.floor(u_radius * (radius + 0.99))
            angle = u_angle * 2.0 * math.pi
            px = math.floor(x + r * math.cos(angle))
            py = math.floor(y + r * math.sin(angle))
            if self.in_bounds(px, py) and self._is_empty(px, py):
                self.set(px, py, CellType.sand(ParticleData(
                    Vector2(0.0, settings.SPAWN_SPEED), tuple(color)
                )))
                added += 1
        return added

    def add_block(self, x: int, y: int, color: Color, radius: int = 0) -> int:
        placed = 0
        block = CellType.block(color)
        for dx, dy in disk_offsets(max(0, int(radius))).tolist():
            px, py = x + dx, y + dy
            if self.in_bounds(px, py) and self._is_empty(px, py):
                self.set(px, py, block)
                placed += 1
        return placed

    def erase(self, x: int, y: int, radius: int = 0) -> int:
        cleared = 0
        for dx, dy in disk_offsets(max(0, int(radius))).tolist():
            px, py = x + dx, y + dy
            if self.in_bounds(px, py) and not self._is_empty(px, py):
                self.set(px, py, EMPTY)
                cleared += 1
        return cleared

    # ---------- Core simulation ----------
    def _draw_cells(self) -> np.ndarray:
        return self.rng.random((self.height, self.width, DRAWS_PER_CELL))

    def _draw_keys(self, n: int) -> np.ndarray:
        return self.rng.random((settings.ROOM_COUNT, settings.ROOM_COUNT, n))

    def _moves(self, n: int) -> List[Vector2]:
        return [Vector2(x, y) for x, y in self._changed[:n].tolist()]

    def process_frame(self) -> List[Vector2]:
        """
        Advance one tick. Returns every coordinate that changed (sources and
        destinations, possibly repeated) so the caller can repaint them.
        """
        hotness = self._hotness.rows()
        cool_rooms(self._hotness.cells())
        active = int(np.count_nonzero(hotness))

        n, self._stamp = process_rooms(
            self._kind.rows(), self._speed.rows(), self._color.rows(), hotness,
            self.room_size.x, self.room_size.y, self._claimed, self._stamp,
            self._draw_cells(), self._draw_keys(self.room_size.y),
            self._draw_keys(self.room_size.x), self.shuffle_columns, self._changed,
        )

        logger.debug("frame: %d active rooms, %d changed cells", active, n)
        return self._moves(n)

    def _scan_arrays(self, room_x: int, room_y: int):
        return room_scan(
            room_x, room_y, self.room_size.x, self.room_size.y, self.width, self.height,
            self.rng.random(self.room_size.y), self.rng.random(self.room_size.x),
            self.shuffle_columns,
        )

    def _scan_order(self, room_x: int, room_y: int):
        xs, ys = self._scan_arrays(room_x, room_y)
        return xs.tolist(), ys.tolist()

    def _process_room(self, room_x: int, room_y: int) -> List[Vector2]:
        """Run a single room pass without cooling or re-heating."""
        xs, ys = self._scan_arrays(room_x, room_y)
        self._stamp += 1
        n = process_room(
            self._kind.rows(), self._speed.rows(), self._color.rows(), self._claimed,
            self._stamp, self._draw_cells(), xs, ys, self._changed, 0,
        )
        return self._moves(n)
