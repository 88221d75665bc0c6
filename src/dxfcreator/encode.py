"""Record builders for the entities and objects a document can hold.

Every builder takes the owner handle (the block record of the containing
block), the layer name and an already allocated handle, plus geometry that
already has the drawing offset applied. Builders never allocate handles and
never read document state.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Sequence

from .entity import VIEWPORT_ACTIVE, Fragment, Group, Point3D

# text position 1..9 -> (vertical, horizontal) justification of a TEXT entity
TEXT_JUSTIFICATION = {
    1: (3, 0),  # top-left
    2: (3, 1),  # top-center
    3: (3, 2),  # top-right
    4: (2, 0),  # middle-left
    5: (2, 1),  # middle-center
    6: (2, 2),  # middle-right
    7: (1, 0),  # bottom-left
    8: (1, 1),  # bottom-center
    9: (1, 2),  # bottom-right
}

HATCH_EDGE_LINE = 1
HATCH_EDGE_CIRCULAR = 2
HATCH_EDGE_ELLIPTIC = 3

_MTEXT_CHUNK = 250


def _entity(
    dxftype: str,
    handle: str,
    owner: str,
    layer: str,
    body: Iterable[Group],
    *,
    paperspace: Any = 1,
) -> Fragment:
    groups: list[Group] = [
        (5, handle),
        (330, owner),
        (100, "AcDbEntity"),
        (67, paperspace),
        (8, layer),
    ]
    groups.extend(body)
    return Fragment(dxftype=dxftype, handle=handle, owner=owner, layer=layer, groups=tuple(groups))


def _xyz(code: int, point: Sequence[float]) -> list[Group]:
    return [(code, point[0]), (code + 10, point[1]), (code + 20, point[2])]


def point(owner: str, layer: str, handle: str, location: Point3D) -> Fragment:
    return _entity("POINT", handle, owner, layer, [(100, "AcDbPoint"), *_xyz(10, location)])


def line(
    owner: str,
    layer: str,
    handle: str,
    start: Point3D,
    end: Point3D,
    thickness: float = 0.0,
) -> Fragment:
    body = [(100, "AcDbLine"), (39, thickness), *_xyz(10, start), *_xyz(11, end)]
    return _entity("LINE", handle, owner, layer, body)


def solid(owner: str, layer: str, handle: str, corner: Point3D, width: float, height: float) -> Fragment:
    x, y, z = corner
    x1 = x + width
    y1 = y + height
    body = [
        (100, "AcDbTrace"),
        *_xyz(10, (x1, y, z)),
        *_xyz(11, (x1, y1, z)),
        *_xyz(12, (x, y, z)),
        *_xyz(13, (x, y1, z)),
        (39, 0.0),
        (210, 0.0),
        (220, 0.0),
        (230, 1.0),
    ]
    return _entity("SOLID", handle, owner, layer, body)


def text(
    owner: str,
    layer: str,
    handle: str,
    insert: Point3D,
    value: str,
    height: float,
    *,
    position: int = 5,
    angle: float = 0.0,
    thickness: float = 0.0,
    style: str = "STANDARD",
) -> Fragment:
    vertical, horizontal = TEXT_JUSTIFICATION.get(position, TEXT_JUSTIFICATION[5])
    body = [
        (100, "AcDbText"),
        (39, thickness),
        *_xyz(10, insert),
        (40, height),
        (1, value),
        (50, angle),
        (41, 1.0),
        (51, 0.0),
        (7, style),
        (71, 0),
        (72, horizontal),
        *_xyz(11, insert),
        (100, "AcDbText"),
        (73, vertical),
    ]
    return _entity("TEXT", handle, owner, layer, body)


def mtext_content(value: str | Sequence[str], *, underline: bool = False, font: str = "Arial") -> str:
    if isinstance(value, str):
        content = value.replace("\r\n", "\n").replace("\n", "\\P").replace("\\n", "\\P")
    else:
        content = "\\P".join(value)
    if underline:
        content = "\\L" + content
    return "{\\f" + font + "|b0|i0|c0|p34;" + content + "}"


def mtext(
    owner: str,
    layer: str,
    handle: str,
    insert: Point3D,
    content: str,
    height: float,
    *,
    box_width: float = 0.0,
    box_height: float = 0.0,
    position: int = 5,
    angle: float = 0.0,
) -> Fragment:
    body: list[Group] = [
        (100, "AcDbMText"),
        *_xyz(10, insert),
        (40, height),
        (41, box_width),
        (46, box_height),
        (71, position),
        (72, 1),
    ]
    # values longer than 250 characters continue in group 3 chunks
    while len(content) > _MTEXT_CHUNK:
        body.append((3, content[:_MTEXT_CHUNK]))
        content = content[_MTEXT_CHUNK:]
    body += [(1, content), (50, math.radians(angle)), (73, 1), (44, 1.0)]
    return _entity("MTEXT", handle, owner, layer, body)


def circle(owner: str, layer: str, handle: str, center: Point3D, radius: float) -> Fragment:
    body = [(100, "AcDbCircle"), *_xyz(10, center), (40, radius)]
    return _entity("CIRCLE", handle, owner, layer, body)


def arc(
    owner: str,
    layer: str,
    handle: str,
    center: Point3D,
    radius: float,
    start_angle: float,
    end_angle: float,
) -> Fragment:
    body = [
        (100, "AcDbCircle"),
        (39, 0.0),
        *_xyz(10, center),
        (40, radius),
        (100, "AcDbArc"),
        (50, start_angle),
        (51, end_angle),
    ]
    return _entity("ARC", handle, owner, layer, body)


def ellipse(
    owner: str,
    layer: str,
    handle: str,
    center: Point3D,
    major_axis: Point3D,
    ratio: float,
    start: float = 0.0,
    end: float = math.tau,
) -> Fragment:
    body = [
        (100, "AcDbEllipse"),
        *_xyz(10, center),
        *_xyz(11, major_axis),
        (40, ratio),
        (41, start),
        (42, end),
    ]
    return _entity("ELLIPSE", handle, owner, layer, body)


def lwpolyline(
    owner: str,
    layer: str,
    handle: str,
    points: Sequence[Point3D],
    *,
    flag: int = 0,
    thickness: float = 0.0,
) -> Fragment:
    body: list[Group] = [
        (100, "AcDbPolyline"),
        (90, len(points)),
        (70, flag),
        (38, points[0][2] if points else 0.0),
        (39, thickness),
        (43, thickness),
    ]
    for x, y, _z in points:
        body.append((10, x))
        body.append((20, y))
    return _entity("LWPOLYLINE", handle, owner, layer, body)


def polyline_edges(points: Sequence[tuple[float, float]], *, closed: bool) -> list[list[Group]]:
    pairs = list(zip(points, points[1:]))
    if closed and len(points) > 2 and points[0] != points[-1]:
        pairs.append((points[-1], points[0]))
    return [
        [(72, HATCH_EDGE_LINE), (10, a[0]), (20, a[1]), (11, b[0]), (21, b[1])]
        for a, b in pairs
    ]


def circular_edges(center: Point3D, radius: float) -> list[list[Group]]:
    return [
        [
            (72, HATCH_EDGE_CIRCULAR),
            (10, center[0]),
            (20, center[1]),
            (40, radius),
            (50, 0.0),
            (51, 360.0),
            (73, 1),
        ]
    ]


def elliptic_edges(
    center: Point3D,
    major_axis: Point3D,
    ratio: float,
    start: float,
    end: float,
) -> list[list[Group]]:
    return [
        [
            (72, HATCH_EDGE_ELLIPTIC),
            (10, center[0]),
            (20, center[1]),
            (11, major_axis[0]),
            (21, major_axis[1]),
            (40, ratio),
            (50, math.degrees(start)),
            (51, math.degrees(end)),
            (73, 1),
        ]
    ]


def hatch(
    owner: str,
    layer: str,
    handle: str,
    edges: Sequence[Sequence[Group]],
    *,
    color: int,
    source: str,
    elevation: float = 0.0,
    pattern: str = "SOLID",
) -> Fragment:
    body: list[Group] = [
        (62, color),
        (100, "AcDbHatch"),
        (10, 0.0),
        (20, 0.0),
        (30, elevation),
        (210, 0.0),
        (220, 0.0),
        (230, 1.0),
        (2, pattern),
        (70, 1),
        (71, 1),
        (91, 1),
        (92, 1),
        (93, len(edges)),
    ]
    for edge in edges:
        body.extend(edge)
    body += [
        (97, 1),
        (330, source),
        (75, 0),
        (76, 1),
        (98, 1),
        (10, 0.0),
        (20, 0.0),
    ]
    return _entity("HATCH", handle, owner, layer, body)


def insert(
    owner: str,
    layer: str,
    handle: str,
    block_name: str,
    position: Point3D,
    scale: Point3D = (1.0, 1.0, 1.0),
    rotation: float = 0.0,
) -> Fragment:
    body = [
        (100, "AcDbBlockReference"),
        (2, block_name),
        *_xyz(10, position),
        (41, scale[0]),
        (42, scale[1]),
        (43, scale[2]),
        (50, rotation),
    ]
    return _entity("INSERT", handle, owner, layer, body)


def image(
    owner: str,
    layer: str,
    handle: str,
    insert: Point3D,
    pixel_size: tuple[int, int],
    pixel_paper_size: tuple[float, float],
    *,
    imagedef: str,
    reactor: str,
) -> Fragment:
    width, height = pixel_size
    u, v = pixel_paper_size
    body = [
        (100, "AcDbRasterImage"),
        (90, 0),
        *_xyz(10, insert),
        *_xyz(11, (u, 0.0, 0.0)),
        *_xyz(12, (0.0, v, 0.0)),
        (13, width),
        (23, height),
        (340, imagedef),
        (70, 3),
        (280, 0),
        (281, 50),
        (282, 50),
        (283, 0),
        (360, reactor),
        (71, 1),
        (91, 2),
        (14, -0.5),
        (24, -0.5),
        (14, width - 0.5),
        (24, height - 0.5),
        (290, 0),
    ]
    return _entity("IMAGE", handle, owner, layer, body)


def imagedef(
    handle: str,
    dictionary: str,
    reactor: str,
    file_path: str,
    pixel_size: tuple[int, int],
    pixel_paper_size: tuple[float, float],
) -> Fragment:
    groups: list[Group] = [
        (5, handle),
        (102, "{ACAD_REACTORS"),
        (330, dictionary),
        (330, reactor),
        (102, "}"),
        (330, dictionary),
        (100, "AcDbRasterImageDef"),
        (90, 0),
        (1, file_path),
        (10, float(pixel_size[0])),
        (20, float(pixel_size[1])),
        (11, pixel_paper_size[0]),
        (21, pixel_paper_size[1]),
        (280, 1),
        (281, 2),
    ]
    return Fragment(dxftype="IMAGEDEF", handle=handle, owner=dictionary, layer=None, groups=tuple(groups))


def imagedef_reactor(handle: str, image_handle: str) -> Fragment:
    groups: list[Group] = [
        (5, handle),
        (330, image_handle),
        (100, "AcDbRasterImageDefReactor"),
        (90, 2),
        (330, image_handle),
    ]
    return Fragment(
        dxftype="IMAGEDEF_REACTOR",
        handle=handle,
        owner=image_handle,
        layer=None,
        groups=tuple(groups),
    )


# fixed paper-space viewport parameters
_VIEWPORT_BODY: tuple[Group, ...] = (
    (100, "AcDbViewport"),
    (10, 0.0),
    (20, 0.0),
    (30, 0.0),
    (40, 853.84038),
    (41, 469.417268),
    (68, 1),
    (69, 1),
    (12, 255.691002),
    (22, 205.171049),
    (13, 0.0),
    (23, 0.0),
    (14, 10.0),
    (24, 10.0),
    (15, 10.0),
    (25, 10.0),
    (16, 0.0),
    (26, 0.0),
    (36, 1.0),
    (17, 0.0),
    (27, 0.0),
    (37, 0.0),
    (42, 50.0),
    (43, 0.0),
    (44, 0.0),
    (45, 469.417268),
    (50, 0.0),
    (51, 0.0),
    (72, 100),
    (90, 557168),
    (1, ""),
    (281, 0),
    (71, 1),
    (74, 0),
    (110, 0.0),
    (120, 0.0),
    (130, 0.0),
    (111, 1.0),
    (121, 0.0),
    (131, 0.0),
    (112, 0.0),
    (122, 1.0),
    (132, 0.0),
    (79, 0),
    (146, 0.0),
    (170, 0),
    (61, 5),
    (292, 1),
    (282, 1),
    (141, 0.0),
    (142, 0.0),
    (63, 256),
)


def viewport(owner: str, handle: str) -> Fragment:
    return _entity("VIEWPORT", handle, owner, "0", _VIEWPORT_BODY, paperspace=VIEWPORT_ACTIVE)
