import numpy as np

from fallingsand import settings
from fallingsand.kernels import (
    DRAWS_PER_CELL,
    EMPTY,
    SAND,
    cool_rooms,
    disk_offsets,
    heat_rooms,
    process_room,
    room_scan,
)


def test_cool_rooms_floors_at_zero():
    hotness = np.array([0, 1, 2, 12], dtype=np.int64)
    cool_rooms(hotness)
    assert hotness.tolist() == [0, 0, 1, 11]
    cool_rooms(hotness)
    assert hotness.tolist() == [0, 0, 0, 10]


def test_disk_offsets_radius_zero():
    assert disk_offsets(0).tolist() == [[0, 0]]


def test_disk_offsets_radius_two():
    offsets = {tuple(row) for row in disk_offsets(2).tolist()}
    assert len(offsets) == 13
    assert (2, 0) in offsets and (0, -2) in offsets
    assert (2, 1) not in offsets
    assert all(dx * dx + dy * dy <= 4 for dx, dy in offsets)


def test_heat_rooms_clipped_at_corner():
    hotness = np.zeros((24, 24), dtype=np.int64)
    heat_rooms(hotness, 2, 2, 1, 1)
    assert np.count_nonzero(hotness) == 4
    assert (hotness[:2, :2] == settings.HOT_VALUE).all()


def test_room_scan_keeps_columns_and_skips_last_row():
    xs, ys = room_scan(1, 1, 4, 4, 8, 8, np.array([0.3, 0.1, 0.2]), np.array([0.9, 0.1, 0.5, 0.2]), False)
    assert xs.tolist() == [4, 5, 6, 7]
    # keys ascending give rows 5, 6, 4; walked in reverse
    assert ys.tolist() == [4, 6, 5]


def test_room_scan_shuffled_columns():
    xs, _ = room_scan(0, 0, 4, 4, 8, 8, np.zeros(4), np.array([0.9, 0.1, 0.5, 0.2]), True)
    assert xs.tolist() == [1, 3, 2, 0]


def small_grid(width, height):
    kind = np.zeros((height, width), dtype=np.uint8)
    speed = np.zeros((height, width, 2), dtype=np.float64)
    color = np.zeros((height, width, 3), dtype=np.uint8)
    return kind, speed, color


def test_process_room_moves_colour_and_clears_source():
    kind, speed, color = small_grid(3, 4)
    kind[0, 1] = SAND
    speed[0, 1] = (0.0, 1.0)
    color[0, 1] = (7, 8, 9)
    claimed = np.zeros((4, 3), dtype=np.int64)
    changed = np.empty((24, 2), dtype=np.int64)
    draws = np.zeros((4, 3, DRAWS_PER_CELL))

    n = process_room(kind, speed, color, claimed, 1, draws,
                     np.arange(3), np.array([2, 1, 0]), changed, 0)

    assert n == 2
    assert changed[:n].tolist() == [[1, 0], [1, 1]]
    assert kind[0, 1] == EMPTY and kind[1, 1] == SAND
    assert color[1, 1].tolist() == [7, 8, 9]
    assert color[0, 1].tolist() == [0, 0, 0]
    assert claimed[1, 1] == 1


def test_process_room_respects_claimed_destination():
    kind, speed, color = small_grid(3, 4)
    kind[0, 1] = SAND
    speed[0, 1] = (0.0, 1.0)
    claimed = np.zeros((4, 3), dtype=np.int64)
    claimed[1, 1] = 5
    changed = np.empty((24, 2), dtype=np.int64)
    draws = np.zeros((4, 3, DRAWS_PER_CELL))

    n = process_room(kind, speed, color, claimed, 5, draws,
                     np.arange(3), np.array([2, 1, 0]), changed, 0)

    assert n == 0
    assert kind[0, 1] == SAND
