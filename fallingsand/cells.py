from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Tuple

from fallingsand.datatype import Vector2

Color = Tuple[int, int, int]


class CellKind(IntEnum):
    EMPTY = 0
    SAND = 1
    BLOCK = 2


@dataclass
class ParticleData:
    speed: Vector2 = field(default_factory=lambda: Vector2(0.0, 0.0))
    color: Color = (0, 0, 0)


@dataclass(frozen=True)
class CellType:
    """
    One grid cell. EMPTY carries no data, SAND carries speed and color,
    BLOCK carries only a color (its speed stays zero).
    """

    kind: CellKind = CellKind.EMPTY
    data: Optional[ParticleData] = None

    @classmethod
    def sand(cls, data: ParticleData) -> "CellType":
        return cls(CellKind.SAND, data)

    @classmethod
    def block(cls, color: Color) -> "CellType":
        return cls(CellKind.BLOCK, ParticleData(Vector2(0.0, 0.0), tuple(color)))

    @property
    def is_empty(self) -> bool:
        return self.kind == CellKind.EMPTY

    @property
    def color(self) -> Optional[Color]:
        return None if self.data is None else self.data.color


EMPTY = CellType()
