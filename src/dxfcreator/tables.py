from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, TypeVar

from . import colors
from .entity import Group, render_groups
from .handles import HandleAllocator

logger = logging.getLogger(__name__)

CONTINUOUS = "CONTINUOUS"
DASHED = "DASHED"
HIDDEN = "HIDDEN"
CENTER = "CENTER"
PHANTOM = "PHANTOM"
DOT = "DOT"
DASHDOT = "DASHDOT"
DIVIDE = "DIVIDE"
BORDER = "BORDER"
SOLID = CONTINUOUS

# name -> (description, dash elements); positive = dash, negative = gap, 0 = dot
LINETYPES: dict[str, tuple[str, tuple[float, ...]]] = {
    CONTINUOUS: ("Solid line", ()),
    DASHED: ("Dashed __ __ __ __ __ __ __ __ __ __ __ __ __ _", (0.5, -0.25)),
    HIDDEN: ("Hidden __ __ __ __ __ __ __ __ __ __ __ __ __ __", (0.25, -0.125)),
    CENTER: ("Center ____ _ ____ _ ____ _ ____ _ ____ _ ____", (1.25, -0.25, 0.25, -0.25)),
    PHANTOM: (
        "Phantom ______  __  __  ______  __  __  ______",
        (1.25, -0.25, 0.25, -0.25, 0.25, -0.25),
    ),
    DOT: ("Dot . . . . . . . . . . . . . . . . . . . . . . . .", (0.0, -0.25)),
    DASHDOT: ("Dash dot __ . __ . __ . __ . __ . __ . __ . __", (0.5, -0.25, 0.0, -0.25)),
    DIVIDE: (
        "Divide ____ . . ____ . . ____ . . ____ . . ____",
        (0.5, -0.25, 0.0, -0.25, 0.0, -0.25),
    ),
    BORDER: (
        "Border __ __ . __ __ . __ __ . __ __ . __ __ .",
        (0.5, -0.25, 0.5, -0.25, 0.0, -0.25),
    ),
}

_BUILTIN_LINETYPES = ("ByBlock", "ByLayer")

T = TypeVar("T")


@dataclass
class Layer:
    name: str
    color: int = colors.GRAY
    linetype: str = CONTINUOUS
    lineweight: int = colors.LINEWEIGHT_DEFAULT


@dataclass
class TextStyle:
    name: str
    font: str
    flags: int = 0
    fixed_height: float = 0.0
    width_factor: float = 1.0
    oblique_angle: float = 0.0
    generation_flags: int = 0
    last_height: float = 0.0
    big_font: str | None = None


class SymbolTable(Generic[T]):
    """Name -> record mapping that keeps registration order.

    The active entry is not stored here; callers pass the name held by
    their drawing context.
    """

    def __init__(self) -> None:
        self._records: OrderedDict[str, T] = OrderedDict()

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def get(self, name: str) -> T | None:
        return self._records.get(name)

    def records(self) -> list[T]:
        return list(self._records.values())

    def define(self, name: str, record: T) -> bool:
        if name in self._records:
            return False
        self._records[name] = record
        return True

    def select(self, name: str, record_if_missing: T) -> T:
        self.define(name, record_if_missing)
        return self._records[name]

    def set_attribute(self, name: str, field: str, value: object) -> None:
        record = self._records.get(name)
        if record is None:
            logger.debug("no record %r, %s not changed", name, field)
            return
        setattr(record, field, value)


def _table_header(name: str, handle: str, count: int) -> list[Group]:
    return [
        (0, "TABLE"),
        (2, name),
        (5, handle),
        (330, "0"),
        (100, "AcDbSymbolTable"),
        (70, count),
    ]


def _record_header(dxftype: str, handle: str, owner: str, subclass: str) -> list[Group]:
    return [
        (0, dxftype),
        (5, handle),
        (330, owner),
        (100, "AcDbSymbolTableRecord"),
        (100, subclass),
    ]


def linetype_pattern(name: str) -> tuple[str, list[Group]]:
    description, elements = LINETYPES.get(name, ("", ()))
    groups: list[Group] = [(73, len(elements)), (40, float(sum(abs(e) for e in elements)))]
    for element in elements:
        groups.append((49, element))
        groups.append((74, 0))
    return description, groups


def linetype_table(names: Iterable[str], handles: HandleAllocator) -> str:
    names = list(names)
    owner = handles.allocate()
    groups = _table_header("LTYPE", owner, len(names) + len(_BUILTIN_LINETYPES))
    for builtin in _BUILTIN_LINETYPES:
        groups += _record_header("LTYPE", handles.allocate(), owner, "AcDbLinetypeTableRecord")
        groups += [(2, builtin), (70, 0), (3, ""), (72, 65), (73, 0), (40, 0.0)]
    for name in names:
        description, pattern = linetype_pattern(name)
        groups += _record_header("LTYPE", handles.allocate(), owner, "AcDbLinetypeTableRecord")
        groups += [(2, name), (70, 64), (3, description), (72, 65)]
        groups += pattern
    groups.append((0, "ENDTAB"))
    return render_groups(groups)


def layer_table(layers: Iterable[Layer], handles: HandleAllocator) -> str:
    layers = list(layers)
    owner = handles.allocate()
    groups = _table_header("LAYER", owner, len(layers))
    for layer in layers:
        groups += _record_header("LAYER", handles.allocate(), owner, "AcDbLayerTableRecord")
        groups += [
            (2, layer.name),
            (70, 0),
            (62, layer.color),
            (6, layer.linetype),
            (370, layer.lineweight),
            # plot style placeholder "Normal" of the skeleton
            (390, "F"),
        ]
    groups.append((0, "ENDTAB"))
    return render_groups(groups)


def style_table(styles: Iterable[TextStyle], handles: HandleAllocator) -> str:
    styles = list(styles)
    owner = handles.allocate()
    groups = _table_header("STYLE", owner, len(styles))
    for style in styles:
        groups += _record_header("STYLE", handles.allocate(), owner, "AcDbTextStyleTableRecord")
        groups += [
            (2, style.name),
            (70, style.flags),
            (40, style.fixed_height),
            (41, style.width_factor),
            (50, style.oblique_angle),
            (71, style.generation_flags),
            (42, style.last_height),
            (3, style.font),
            (4, style.big_font or ""),
        ]
    groups.append((0, "ENDTAB"))
    return render_groups(groups)
