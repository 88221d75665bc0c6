from __future__ import annotations

from dataclasses import dataclass
from typing import Any

Point3D = tuple[float, float, float]
Group = tuple[int, Any]


class _ViewportFlag:
    def __repr__(self) -> str:
        return "VIEWPORT_ACTIVE"


# Placeholder value of a VIEWPORT's group 67; rendered as 1 in the ENTITIES
# section and as 0 inside a BLOCK definition.
VIEWPORT_ACTIVE = _ViewportFlag()


def format_value(value: Any, viewport_active: bool = False) -> str:
    if value is VIEWPORT_ACTIVE:
        return "1" if viewport_active else "0"
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def render_groups(groups: tuple[Group, ...] | list[Group], viewport_active: bool = False) -> str:
    return "".join(f"{code}\n{format_value(value, viewport_active)}\n" for code, value in groups)


@dataclass(frozen=True)
class Fragment:
    """One encoded DXF record: an entity of a block, or an OBJECTS entry.

    ``groups`` holds every group after the leading ``0 <dxftype>`` pair.
    """

    dxftype: str
    handle: str
    owner: str
    layer: str | None
    groups: tuple[Group, ...]

    def get(self, code: int, default: Any = None) -> Any:
        for group_code, value in self.groups:
            if group_code == code:
                return value
        return default

    def values(self, code: int) -> list[Any]:
        return [value for group_code, value in self.groups if group_code == code]

    def render(self, viewport_active: bool = False) -> str:
        return f"0\n{self.dxftype}\n" + render_groups(self.groups, viewport_active)

    def to_points(self) -> list[Point3D]:
        if self.dxftype in {"POINT", "CIRCLE", "ARC", "ELLIPSE", "TEXT", "MTEXT", "INSERT", "IMAGE"}:
            return [self._point(10)]
        if self.dxftype == "LINE":
            return [self._point(10), self._point(11)]
        if self.dxftype == "SOLID":
            return [self._point(10), self._point(11), self._point(12), self._point(13)]
        if self.dxftype == "LWPOLYLINE":
            elevation = self.get(38, 0.0)
            return [(x, y, elevation) for x, y in zip(self.values(10), self.values(20))]
        raise NotImplementedError(f"to_points is not supported for {self.dxftype}")

    def _point(self, code: int) -> Point3D:
        return (self.get(code), self.get(code + 10), self.get(code + 20))
