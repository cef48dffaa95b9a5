import numpy as np
import pytest

from fallingsand.datatype import GridMap, Vector2


def test_vector_scale_in_place():
    v = Vector2(1.5, -2.0)
    assert v.scale(2) is v
    assert (v.x, v.y) == (3.0, -4.0)


def test_vector_convert_and_hash():
    v = Vector2(2.7, 3.2).convert(int)
    assert v == Vector2(2, 3)
    assert Vector2(2, 3) in {v}
    x, y = v
    assert (x, y) == (2, 3)
    assert str(v) == "(2, 3)"


def test_grid_default_fill():
    grid = GridMap(4, 3, 7, dtype=np.int64)
    assert len(grid) == 12
    assert all(v == 7 for v in grid)


def test_grid_set_get_round_trip():
    grid = GridMap(5, 4, None)
    for y in range(4):
        for x in range(5):
            grid.set(x, y, f"{x},{y}")
    for y in range(4):
        for x in range(5):
            assert grid.get(x, y) == f"{x},{y}"


def test_grid_is_row_major():
    grid = GridMap(3, 2, 0, dtype=np.int64)
    grid.set(2, 1, 9)
    assert grid.cells()[2 + 1 * 3] == 9


@pytest.mark.parametrize("x,y", [(5, 0), (0, 4), (-1, 0), (0, -1)])
def test_grid_out_of_range(x, y):
    grid = GridMap(5, 4, 0, dtype=np.int64)
    with pytest.raises(IndexError):
        grid.get(x, y)
    with pytest.raises(IndexError):
        grid.set(x, y, 1)


def test_grid_swap():
    grid = GridMap(3, 3, "", dtype=object)
    grid.set(0, 0, "a")
    grid.set(2, 1, "b")
    grid.swap(0, 0, 2, 1)
    assert grid.get(0, 0) == "b"
    assert grid.get(2, 1) == "a"


def _marked(grid):
    return {(x, y) for y in range(grid.height) for x in range(grid.width) if grid.get(x, y)}


def test_set_neighbor_interior():
    grid = GridMap(6, 5, 0, dtype=np.int64)
    grid.set_neighbor(2, 2, 1)
    assert _marked(grid) == {(x, y) for x in (1, 2, 3) for y in (1, 2, 3)}


@pytest.mark.parametrize("cx,cy", [(0, 0), (5, 4), (0, 4), (5, 0)])
def test_set_neighbor_clamped_at_corners(cx, cy):
    grid = GridMap(6, 5, 0, dtype=np.int64)
    grid.set_neighbor(cx, cy, 1)
    expected = {
        (x, y)
        for x in range(cx - 1, cx + 2)
        for y in range(cy - 1, cy + 2)
        if 0 <= x < 6 and 0 <= y < 5
    }
    assert _marked(grid) == expected


def test_set_neighbor_object_cells():
    marker = object()
    grid = GridMap(3, 3, None)
    grid.set_neighbor(1, 1, marker)
    assert all(cell is marker for cell in grid)


def test_grid_with_depth():
    grid = GridMap(4, 2, 0, dtype=np.uint8, depth=3)
    grid.set(1, 1, (10, 20, 30))
    assert grid.get(1, 1).tolist() == [10, 20, 30]
    assert grid.rows().shape == (2, 4, 3)
    assert grid.rows()[1, 1].tolist() == [10, 20, 30]
    assert len(grid) == 8


def test_grid_swap_with_depth():
    grid = GridMap(3, 1, 0.0, dtype=np.float64, depth=2)
    grid.set(0, 0, (1.0, 2.0))
    grid.set(2, 0, (3.0, 4.0))
    grid.swap(0, 0, 2, 0)
    assert grid.get(0, 0).tolist() == [3.0, 4.0]
    assert grid.get(2, 0).tolist() == [1.0, 2.0]


def test_rows_writes_through():
    grid = GridMap(3, 2, 0, dtype=np.int64)
    grid.rows()[1, 2] = 5
    assert grid.get(2, 1) == 5
