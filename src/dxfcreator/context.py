from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .entity import Point3D


def point3(value: Sequence[float] | None) -> Point3D:
    if value is None:
        return (0.0, 0.0, 0.0)
    if len(value) == 2:
        return (value[0], value[1], 0.0)
    return (value[0], value[1], value[2])


@dataclass
class DrawingContext:
    """Active selections read by every add operation of a document."""

    layer: str = "0"
    block: str = ""
    layout: str = ""
    text_style: str = "STANDARD"
    hatch_pattern: str = "SOLID"
    offset: Point3D = (0.0, 0.0, 0.0)

    def apply_offset(self, point: Sequence[float]) -> Point3D:
        x, y, z = point3(point)
        dx, dy, dz = self.offset
        return (x + dx, y + dy, z + dz)
