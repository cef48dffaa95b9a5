from fallingsand.cells import EMPTY, CellKind, CellType, ParticleData
from fallingsand.datatype import GridMap, Vector2
from fallingsand.world import World

__all__ = [
    "EMPTY",
    "CellKind",
    "CellType",
    "GridMap",
    "ParticleData",
    "Vector2",
    "World",
]
