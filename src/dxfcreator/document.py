from __future__ import annotations

import logging
import math
import os
from pathlib import Path
from typing import Sequence

from . import colors, encode, skeleton
from .assemble import block_records, blocks_section, entities_section, layout_dictionary, layouts_section
from .blocks import BlockRegistry
from .context import DrawingContext, point3
from .entity import Fragment, Group, Point3D, render_groups
from .handles import HandleAllocator
from .layouts import (
    DEFAULT_MARGIN,
    DEFAULT_PAPER_HEIGHT,
    DEFAULT_PAPER_WIDTH,
    LANDSCAPE,
    Layout,
    LayoutRegistry,
    Margins,
)
from .tables import CONTINUOUS, Layer, SymbolTable, TextStyle, layer_table, linetype_table, style_table

logger = logging.getLogger(__name__)

NO_LAYOUT = "no layout added"

_HATCH_KINDS = {"line", "polyline", "circular", "elliptic"}


class Document:
    """A DXF drawing built by successive add operations.

    Geometry always goes to the active block: the block of the active
    layout, or the block selected last with :meth:`add_block` or
    :meth:`select_block`. Nothing can be drawn before the first layout or
    block exists. Selecting or inserting an unknown name and creating a
    duplicate name are silent no-ops.
    """

    def __init__(self, units: int = colors.MILLIMETERS) -> None:
        self.units = units
        self.handles = HandleAllocator()
        self.context = DrawingContext()
        self.layers: SymbolTable[Layer] = SymbolTable()
        self.linetypes: SymbolTable[str] = SymbolTable()
        self.text_styles: SymbolTable[TextStyle] = SymbolTable()
        self.blocks = BlockRegistry(self.handles, self.context)
        self.layouts = LayoutRegistry(self.handles, self.context, self.blocks)
        self.objects: list[Fragment] = []
        self.images: list[tuple[str, str]] = []
        self.error = ""
        self.add_layer(self.context.layer)

    def __str__(self) -> str:
        return self.serialize()

    # selection state

    @property
    def layer(self) -> str:
        return self.context.layer

    @property
    def text_style(self) -> str:
        return self.context.text_style

    @property
    def block(self) -> str:
        return self.context.block

    @property
    def layout(self) -> str:
        return self.context.layout

    @property
    def home_layout(self) -> str | None:
        return self.layouts.home

    @property
    def offset(self) -> Point3D:
        return self.context.offset

    @property
    def margins(self) -> Margins:
        return self.layouts.margins

    def set_offset(self, x: float, y: float, z: float = 0.0) -> None:
        self.context.offset = (x, y, z)

    # symbol tables

    def add_layer(
        self,
        name: str,
        color: int = colors.GRAY,
        linetype: str = CONTINUOUS,
        lineweight: int = colors.LINEWEIGHT_DEFAULT,
    ) -> None:
        if self.layers.define(name, Layer(name, color, linetype, lineweight)):
            self.linetypes.define(linetype, linetype)

    def set_layer(
        self,
        name: str,
        color: int = colors.GRAY,
        linetype: str = CONTINUOUS,
        lineweight: int = colors.LINEWEIGHT_DEFAULT,
    ) -> None:
        """Make ``name`` the active layer, creating it with the given attributes if needed."""
        self.add_layer(name, color, linetype, lineweight)
        self.context.layer = name

    def set_color(self, color: int) -> None:
        self.layers.set_attribute(self.context.layer, "color", color)

    def set_linetype(self, linetype: str) -> None:
        self.layers.set_attribute(self.context.layer, "linetype", linetype)
        self.linetypes.define(linetype, linetype)

    def set_text_style(
        self,
        name: str,
        font: str,
        flags: int = 0,
        fixed_height: float = 0.0,
        width_factor: float = 1.0,
        oblique_angle: float = 0.0,
        generation_flags: int = 0,
        last_height: float = 0.0,
        big_font: str | None = None,
    ) -> None:
        style = TextStyle(
            name=name,
            font=font,
            flags=flags,
            fixed_height=fixed_height,
            width_factor=width_factor,
            oblique_angle=oblique_angle,
            generation_flags=generation_flags,
            last_height=last_height,
            big_font=big_font,
        )
        self.text_styles.select(name, style)
        self.context.text_style = name

    # blocks and layouts

    def add_block(self, name: str, layer: str = "0", base: Sequence[float] = (0.0, 0.0, 0.0)) -> None:
        self.blocks.create(name, layer, base)

    def select_block(self, name: str) -> None:
        self.blocks.select(name)

    def add_layout(
        self,
        name: str,
        orientation: int = LANDSCAPE,
        paper_width: float = DEFAULT_PAPER_WIDTH,
        paper_height: float = DEFAULT_PAPER_HEIGHT,
        margin_top: float = DEFAULT_MARGIN,
        margin_right: float = DEFAULT_MARGIN,
        margin_bottom: float = DEFAULT_MARGIN,
        margin_left: float = DEFAULT_MARGIN,
    ) -> Layout:
        """Add a paper-space page and make it (and its block) active.

        The printable area is the paper size minus the margins. The first
        layout ever added is the one shown when the file is opened.
        """
        return self.layouts.create(
            name,
            orientation,
            (paper_width, paper_height),
            Margins(top=margin_top, right=margin_right, bottom=margin_bottom, left=margin_left),
        )

    def select_layout(self, name: str) -> None:
        self.layouts.select(name)

    def add_insert(
        self,
        block_name: str,
        point: Sequence[float],
        scale: Sequence[float] = (1.0, 1.0, 1.0),
        rotation: float = 0.0,
    ) -> str | None:
        """Place a reference to ``block_name`` in the active block; rotation in degrees."""
        if self.blocks.active is None:
            logger.debug("no active block, INSERT of %r ignored", block_name)
            return None
        return self.blocks.insert(block_name, point, scale, rotation)

    # geometry

    def _add(self, builder, *args, **kwargs) -> str | None:
        block = self.blocks.active
        if block is None:
            logger.debug("no active block, %s ignored", builder.__name__)
            return None
        handle = self.handles.allocate()
        self.blocks.append(builder(block.record_handle, self.context.layer, handle, *args, **kwargs))
        return handle

    def add_point(self, point: Sequence[float]) -> str | None:
        return self._add(encode.point, self.context.apply_offset(point))

    def add_line(self, start: Sequence[float], end: Sequence[float], thickness: float = 0.0) -> str | None:
        return self._add(
            encode.line,
            self.context.apply_offset(start),
            self.context.apply_offset(end),
            thickness,
        )

    def add_solid(self, corner: Sequence[float], width: float, height: float) -> str | None:
        """Filled axis-aligned rectangle with ``corner`` at bottom-left."""
        return self._add(encode.solid, self.context.apply_offset(corner), width, height)

    def add_text(
        self,
        point: Sequence[float],
        text: str,
        height: float,
        position: int = 5,
        angle: float = 0.0,
        thickness: float = 0.0,
    ) -> str | None:
        """Single-line text in the active text style.

        ``position`` is the keypad-style anchor: 1 top-left ... 5 center ...
        9 bottom-right. ``angle`` is in degrees.
        """
        return self._add(
            encode.text,
            self.context.apply_offset(point),
            text,
            height,
            position=position,
            angle=angle,
            thickness=thickness,
            style=self.context.text_style,
        )

    def add_mtext(
        self,
        point: Sequence[float],
        text: str | Sequence[str],
        height: float = 2.5,
        box_width: float = 0.0,
        box_height: float = 0.0,
        underline: bool = False,
        position: int = 5,
        angle: float = 0.0,
        font: str = "Arial",
    ) -> str | None:
        """Multiline text; a list is joined line by line, ``\\n`` becomes a paragraph break."""
        return self._add(
            encode.mtext,
            self.context.apply_offset(point),
            encode.mtext_content(text, underline=underline, font=font),
            height,
            box_width=box_width,
            box_height=box_height,
            position=position,
            angle=angle,
        )

    def add_circle(self, center: Sequence[float], radius: float, fill: int = 0) -> str | None:
        center = self.context.apply_offset(center)
        handle = self._add(encode.circle, center, radius)
        if handle is not None and fill:
            self._hatch(encode.circular_edges(center, radius), fill, handle, center[2])
        return handle

    def add_arc(
        self,
        center: Sequence[float],
        radius: float,
        start_angle: float = 0.0,
        end_angle: float = 90.0,
    ) -> str | None:
        """Counter-clockwise arc, angles in degrees."""
        return self._add(encode.arc, self.context.apply_offset(center), radius, start_angle, end_angle)

    def add_ellipse(
        self,
        center: Sequence[float],
        major_axis_end: Sequence[float],
        ratio: float = 0.5,
        start: float = 0.0,
        end: float = math.tau,
        fill: int = 0,
    ) -> str | None:
        """Ellipse from its center and the end point of its major axis.

        ``start`` and ``end`` are parameters in radians measured
        counter-clockwise from the major axis.
        """
        cx, cy, cz = point3(center)
        mx, my, mz = point3(major_axis_end)
        major_axis = (mx - cx, my - cy, mz - cz)
        center = self.context.apply_offset((cx, cy, cz))
        handle = self._add(encode.ellipse, center, major_axis, ratio, start, end)
        if handle is not None and fill:
            self._hatch(encode.elliptic_edges(center, major_axis, ratio, start, end), fill, handle, center[2])
        return handle

    def add_ellipse_by_3_points(
        self,
        center: Sequence[float],
        major_axis_end: Sequence[float],
        minor_axis_end: Sequence[float],
        start: float = 0.0,
        end: float = math.tau,
        fill: int = 0,
    ) -> str | None:
        c = point3(center)
        major = math.dist(c, point3(major_axis_end))
        minor = math.dist(c, point3(minor_axis_end))
        if major == 0:
            logger.debug("ellipse major axis end coincides with its center, ignored")
            return None
        ratio = round(minor / major, 3)
        return self.add_ellipse(center, major_axis_end, ratio, start, end, fill)

    def add_polyline(
        self,
        points: Sequence[Sequence[float]],
        flag: int = 0,
        fill: int = 0,
        thickness: float = 0.0,
    ) -> str | None:
        """Lightweight polyline; ``flag`` 1 closes it, and only closed ones can be filled."""
        if len(points) < 2:
            logger.debug("polyline needs at least 2 points, got %d", len(points))
            return None
        vertices = [self.context.apply_offset(point) for point in points]
        handle = self._add(encode.lwpolyline, vertices, flag=flag, thickness=thickness)
        if handle is not None and fill and flag & 1:
            edges = encode.polyline_edges([(x, y) for x, y, _ in vertices], closed=True)
            self._hatch(edges, fill, handle, vertices[0][2])
        return handle

    def add_polyline_2d(
        self,
        points: Sequence[Sequence[float]],
        z: float = 0.0,
        flag: int = 0,
        fill: int = 0,
    ) -> str | None:
        return self.add_polyline([(x, y, z) for x, y in points], flag=flag, fill=fill)

    def add_hatch(
        self,
        kind: str,
        source: str,
        *,
        points: Sequence[Sequence[float]] = (),
        center: Sequence[float] = (0.0, 0.0, 0.0),
        radius: float = 0.0,
        major_axis: Sequence[float] = (1.0, 0.0, 0.0),
        ratio: float = 1.0,
        start: float = 0.0,
        end: float = math.tau,
        color: int = 0,
        elevation: float = 0.0,
    ) -> str | None:
        """Solid fill bounded by the entity ``source``.

        ``kind`` is ``line`` (open chain through ``points``), ``polyline``
        (closed chain), ``circular`` or ``elliptic``; ``major_axis`` is
        relative to ``center``. Other kinds are ignored.
        """
        if kind not in _HATCH_KINDS:
            logger.debug("unsupported hatch boundary %r", kind)
            return None
        if kind in {"line", "polyline"}:
            shifted = [self.context.apply_offset(point) for point in points]
            edges = encode.polyline_edges([(x, y) for x, y, _ in shifted], closed=kind == "polyline")
        elif kind == "circular":
            edges = encode.circular_edges(self.context.apply_offset(center), radius)
        else:
            edges = encode.elliptic_edges(self.context.apply_offset(center), point3(major_axis), ratio, start, end)
        return self._hatch(edges, color, source, elevation)

    def _hatch(self, edges: list[list[Group]], color: int, source: str, elevation: float) -> str | None:
        return self._add(
            encode.hatch,
            edges,
            color=color,
            source=source,
            elevation=elevation,
            pattern=self.context.hatch_pattern,
        )

    def add_image(
        self,
        point: Sequence[float],
        size: tuple[float, float],
        path: str | os.PathLike[str],
        dxf_path: str | None = None,
        pixel_size: tuple[int, int] | None = None,
    ) -> str | None:
        """Reference an external raster image drawn ``size`` drawing units wide and high.

        ``dxf_path`` is the path written into the file (defaults to
        ``path``); keep it relative so the drawing can move together with the
        picture. Without ``pixel_size`` the picture is opened with Pillow.
        """
        block = self.blocks.active
        if block is None:
            logger.debug("no active block, IMAGE %s ignored", path)
            return None
        if pixel_size is None:
            pixel_size = _image_pixel_size(path)
        width, height = pixel_size
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid image pixel size: {pixel_size}")
        pixel_paper_size = (size[0] / width, size[1] / height)
        imagedef_handle = self.handles.allocate()
        reactor_handle = self.handles.allocate()
        handle = self.handles.allocate()
        self.objects.append(encode.imagedef_reactor(reactor_handle, handle))
        self.objects.append(
            encode.imagedef(
                imagedef_handle,
                skeleton.ACAD_IMAGE_DICT_HANDLE,
                reactor_handle,
                dxf_path if dxf_path is not None else os.fspath(path),
                (width, height),
                pixel_paper_size,
            )
        )
        self.images.append((self._image_key(Path(path).name), imagedef_handle))
        self.blocks.append(
            encode.image(
                block.record_handle,
                self.context.layer,
                handle,
                self.context.apply_offset(point),
                (width, height),
                pixel_paper_size,
                imagedef=imagedef_handle,
                reactor=reactor_handle,
            )
        )
        return handle

    def _image_key(self, name: str) -> str:
        # keys of the image dictionary must be unique: logo.png, logo.png_2, ...
        taken = {key for key, _ in self.images}
        key = name
        suffix = 2
        while key in taken:
            key = f"{name}_{suffix}"
            suffix += 1
        return key

    # output

    def serialize(self) -> str:
        """Return the DXF text, or ``NO_LAYOUT`` when no layout was added.

        The home layout becomes the active one. Table handles are drawn from
        a fork of the allocator, so repeated calls give identical text.
        """
        if not len(self.layouts):
            return NO_LAYOUT
        self.layouts.select(self.layouts.home)
        handles = self.handles.fork()
        ltypes = linetype_table(self.linetypes, handles)
        layers = layer_table(self.layers.records(), handles)
        styles = style_table(self.text_styles.records(), handles)
        margins = self.layouts.margins
        values = {
            "LTYPES_TABLE": ltypes,
            "LAYERS_TABLE": layers,
            "STYLES_TABLE": styles,
            "ENTITIES_SECTION": entities_section(self.blocks.active),
            "BLOCKS": blocks_section(self.blocks, self.context.block),
            "BLOCK_RECORD": block_records(self.blocks),
            "LAYOUT_DICTIONARY": layout_dictionary(self.layouts),
            "LAYOUT_LIST": layouts_section(self.layouts),
            "OTHER_OBJECTS": "".join(fragment.render() for fragment in self.objects),
            "ACAD_IMAGE_DICT_HANDLE": skeleton.ACAD_IMAGE_DICT_HANDLE,
            "IMAGE_NAME_AND_POINTER": render_groups(
                [group for name, handle in self.images for group in ((3, name), (350, handle))]
            ),
            "ACTIVE_LAYER": self.context.layer,
            "HANDSEED": handles.seed,
            "LEFT_MARGIN": margins.left,
            "RIGHT_MARGIN": margins.right,
            "TOP_MARGIN": margins.top,
            "BOTTOM_MARGIN": margins.bottom,
            "UNITS": self.units,
        }
        return skeleton.render(skeleton.TEMPLATE, values)

    def save(self, path: str | os.PathLike[str]) -> bool:
        """Write the DXF text to ``path``; on failure return False and set ``error``."""
        self.error = ""
        out_path = Path(path)
        directory = out_path.parent
        if not directory.is_dir():
            self.error = f"Directory not exists: {directory}"
            logger.warning(self.error)
            return False
        try:
            out_path.write_text(self.serialize(), encoding="utf-8", newline="\n")
        except OSError as exc:
            self.error = f"Error on save: {out_path}: {exc}"
            logger.warning(self.error)
            return False
        return True


def _require_pillow():
    try:
        from PIL import Image
    except Exception as exc:
        raise ImportError(
            "Pillow is required to read image sizes. "
            'Install it with `pip install "dxfcreator[image]"` or pass pixel_size.'
        ) from exc
    return Image


def _image_pixel_size(path: str | os.PathLike[str]) -> tuple[int, int]:
    image_module = _require_pillow()
    with image_module.open(path) as image:
        return image.size
