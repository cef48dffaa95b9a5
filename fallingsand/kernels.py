import math

import numpy as np
from numba import njit

from fallingsand import settings
from fallingsand.cells import CellKind

# ---------- Cell kinds as plain ints for the jitted code ----------
EMPTY = int(CellKind.EMPTY)
SAND = int(CellKind.SAND)
BLOCK = int(CellKind.BLOCK)

GRAVITY = settings.GRAVITY
FALL_CHANCE = settings.FALL_CHANCE
LANDING_DAMPING = settings.LANDING_DAMPING
SLIDE_SPEED = settings.SLIDE_SPEED
SLIDE_MIN, SLIDE_MAX = settings.SLIDE_MIN, settings.SLIDE_MAX
HOT_VALUE = settings.HOT_VALUE

# per-cell random draws, last axis of the draws array
DRAW_ROUNDING, DRAW_FALL, DRAW_JUMP, DRAW_SIDE = 0, 1, 2, 3
DRAWS_PER_CELL = 4


@njit(cache=True)
def cool_rooms(hotness: np.ndarray):
    """Decay every room counter by one, stopping at zero. Works in place."""
    for i in range(hotness.shape[0]):
        if hotness[i] > 0:
            hotness[i] -= 1


@njit(cache=True)
def disk_offsets(radius: int) -> np.ndarray:
    """(dx, dy) rows for every cell with dx*dx + dy*dy <= radius*radius."""
    r2 = radius * radius
    side = 2 * radius + 1
    out = np.empty((side * side, 2), dtype=np.int64)
    n = 0
    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            if dx * dx + dy * dy <= r2:
                out[n, 0] = dx
                out[n, 1] = dy
                n += 1
    return out[:n]


@njit(cache=True)
def heat_rooms(hotness, room_w, room_h, x, y):
    """Set the room owning (x, y) and its 3x3 room neighbourhood to HOT_VALUE."""
    rooms_h, rooms_w = hotness.shape
    cx = x // room_w
    cy = y // room_h
    for ry in range(max(0, cy - 1), min(cy + 1, rooms_h - 1) + 1):
        for rx in range(max(0, cx - 1), min(cx + 1, rooms_w - 1) + 1):
            hotness[ry, rx] = HOT_VALUE


@njit(cache=True)
def room_scan(room_x, room_y, room_w, room_h, width, height, row_keys, col_keys, shuffle_columns):
    """
    Columns and rows of one room in visiting order. Rows are ordered by
    row_keys and walked in reverse; columns stay ascending unless
    shuffle_columns, in which case col_keys order them too.
    The last grid row is never part of any room.
    """
    x0 = room_x * room_w
    x1 = min(width, x0 + room_w)
    y0 = room_y * room_h
    y1 = min(height - 1, y0 + room_h)
    columns = np.arange(x0, max(x0, x1))
    rows = np.arange(y0, max(y0, y1))
    if shuffle_columns:
        xs = columns[np.argsort(col_keys[:columns.size])]
    else:
        xs = columns.copy()
    ys = rows[np.argsort(row_keys[:rows.size])[::-1]]
    return xs, ys


@njit(cache=True)
def process_room(kind, speed, color, claimed, stamp, draws, xs, ys, changed, n):
    """
    Move every sand cell of one room. A destination is claimed with `stamp`
    and nothing else may move into it or out of it during the pass.
    Moves are written to changed as (source, destination) row pairs starting
    at row n; returns the new row count.
    """
    height, width = kind.shape
    for x in xs:
        for y in ys:
            if claimed[y, x] == stamp or kind[y, x] != SAND:
                continue

            vx = speed[y, x, 0]
            vy = speed[y, x, 1] + GRAVITY
            if draws[y, x, DRAW_ROUNDING] < 0.5:
                max_dy = int(math.floor(vy))
            else:
                max_dy = int(math.ceil(vy))

            nx = -1
            ny = -1
            nvy = 0.0

            # fall as far as speed allows, or land just above the obstacle
            if draws[y, x, DRAW_FALL] < FALL_CHANCE:
                for dy in range(1, max_dy + 1):
                    if dy == max_dy and y + dy < height and kind[y + dy, x] == EMPTY:
                        nx = x
                        ny = y + dy
                        nvy = vy
                        break
                    if y + dy >= height or kind[y + dy, x] != EMPTY:
                        if dy > 1:
                            nx = x
                            ny = y + dy - 1
                            nvy = vy * LANDING_DAMPING
                        break

            below_is_empty = y + 1 < height and kind[y + 1, x] == EMPTY

            # buried particle: jump sideways over a gap of 2..4 cells
            if nx < 0 and 0 < y < height - 1:
                k = SLIDE_MIN + int(draws[y, x, DRAW_JUMP] * (SLIDE_MAX - SLIDE_MIN + 1))
                k = min(k, SLIDE_MAX)
                if k < x < width - k and not below_is_empty and kind[y - 1, x] != EMPTY:
                    right_open = kind[y + 1, x + k] == EMPTY
                    left_open = kind[y + 1, x - k] == EMPTY
                    if right_open and not left_open:
                        nx = x + k
                        ny = y + 1
                        nvy = SLIDE_SPEED
                    elif left_open and not right_open:
                        nx = x - k
                        ny = y + 1
                        nvy = SLIDE_SPEED

            if nx < 0 and y + 1 < height and not below_is_empty:
                fall_right = x < width - 1 and kind[y + 1, x + 1] == EMPTY
                fall_left = x > 0 and kind[y + 1, x - 1] == EMPTY
                if fall_left and fall_right:
                    fall_right = draws[y, x, DRAW_SIDE] < 0.5
                    fall_left = not fall_right
                if fall_right:
                    nx = x + 1
                    ny = y + 1
                    nvy = vy
                elif fall_left:
                    nx = x - 1
                    ny = y + 1
                    nvy = vy

            if nx < 0 or claimed[ny, nx] == stamp:
                continue

            kind[ny, nx] = SAND
            speed[ny, nx, 0] = vx
            speed[ny, nx, 1] = nvy
            for c in range(3):
                color[ny, nx, c] = color[y, x, c]
                color[y, x, c] = 0
            kind[y, x] = EMPTY
            speed[y, x, 0] = 0.0
            speed[y, x, 1] = 0.0

            changed[n, 0] = x
            changed[n, 1] = y
            changed[n + 1, 0] = nx
            changed[n + 1, 1] = ny
            n += 2
            claimed[ny, nx] = stamp
    return n


@njit(cache=True)
def process_rooms(kind, speed, color, hotness, room_w, room_h, claimed, stamp,
                  draws, row_keys, col_keys, shuffle_columns, changed):
    """
    One frame over every hot room, rooms visited row-major. Changed cells
    re-heat their rooms once all rooms are done.
    Returns (rows written to changed, last stamp used).
    """
    height, width = kind.shape
    n = 0
    for room_y in range(hotness.shape[0]):
        for room_x in range(hotness.shape[1]):
            if hotness[room_y, room_x] <= 0:
                continue
            xs, ys = room_scan(room_x, room_y, room_w, room_h, width, height,
                               row_keys[room_y, room_x], col_keys[room_y, room_x],
                               shuffle_columns)
            stamp += 1
            n = process_room(kind, speed, color, claimed, stamp, draws, xs, ys, changed, n)

    for i in range(n):
        heat_rooms(hotness, room_w, room_h, changed[i, 0], changed[i, 1])
    return n, stamp
