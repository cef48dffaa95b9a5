import numpy as np
import pytest

from fallingsand.kernels import DRAWS_PER_CELL
from fallingsand.world import World


class ScriptedDraws:
    """
    Stand-in for numpy's Generator. Every draw returns `rest`, except:
    - per-cell movement draws, shaped (height, width, 4), take the values in
      `cells` ({(x, y): (rounding, fall, jump, side)}),
    - sand spawn draws, shaped (n, 2), take `spawn` as (radius, angle).
    """

    def __init__(self, cells=None, rest=0.0, spawn=None):
        self.cells = cells or {}
        self.rest = rest
        self.spawn = spawn

    def random(self, size):
        out = np.full(size, self.rest, dtype=np.float64)
        if isinstance(size, tuple) and len(size) == 3 and size[2] == DRAWS_PER_CELL:
            for (x, y), values in self.cells.items():
                out[y, x] = values
        elif isinstance(size, tuple) and len(size) == 2 and size[1] == 2 and self.spawn:
            out[:] = self.spawn
        return out


@pytest.fixture
def scripted():
    return ScriptedDraws


@pytest.fixture
def world():
    return World(48, 48, seed=1234)
