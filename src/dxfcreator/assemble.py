"""Cross-reference fragments built from the block and layout registries.

Blocks and layouts are emitted in registration order. The fragments of the
active layout block go to the ENTITIES section; every other block carries
its own fragments inside its BLOCK definition, so each fragment appears in
exactly one place.
"""

from __future__ import annotations

from typing import Iterable

from .blocks import Block
from .entity import Group, render_groups
from .layouts import Layout

# handle of the ACAD_LAYOUT dictionary in the skeleton
LAYOUT_DICTIONARY_HANDLE = "1D"


def block_records(blocks: Iterable[Block]) -> str:
    groups: list[Group] = []
    for block in blocks:
        groups += [
            (0, "BLOCK_RECORD"),
            (5, block.record_handle),
            (330, block.owner_handle),
            (100, "AcDbSymbolTableRecord"),
            (100, "AcDbBlockTableRecord"),
            (2, block.name),
            (340, block.layout_handle),
        ]
        if block.references:
            groups.append((102, "{BLKREFS"))
            groups += [(331, handle) for handle in block.references]
            groups.append((102, "}"))
        groups += [(70, 4), (280, 1), (281, 1)]
    return render_groups(groups)


def holds_entities(block: Block, active_block: str) -> bool:
    """True when ``block`` keeps its fragments inside the BLOCKS section."""
    return block.name != active_block or not block.is_layout


def blocks_section(blocks: Iterable[Block], active_block: str) -> str:
    out: list[str] = []
    for block in blocks:
        x, y, z = block.base
        out.append(
            render_groups(
                [
                    (0, "BLOCK"),
                    (5, block.begin_handle),
                    (330, block.record_handle),
                    (100, "AcDbEntity"),
                    (8, block.layer),
                    (100, "AcDbBlockBegin"),
                    (2, block.name),
                    (70, 0),
                    (10, x),
                    (20, y),
                    (30, z),
                    (3, block.name),
                    (1, ""),
                ]
            )
        )
        if holds_entities(block, active_block):
            out.extend(fragment.render(viewport_active=False) for fragment in block.fragments)
        out.append(
            render_groups(
                [
                    (0, "ENDBLK"),
                    (5, block.end_handle),
                    (330, block.record_handle),
                    (100, "AcDbEntity"),
                    (8, block.layer),
                    (100, "AcDbBlockEnd"),
                ]
            )
        )
    return "".join(out)


def entities_section(block: Block | None) -> str:
    if block is None:
        return ""
    return "".join(fragment.render(viewport_active=True) for fragment in block.fragments)


def _plot_settings(layout: Layout) -> list[Group]:
    margins = layout.margins
    return [
        (100, "AcDbPlotSettings"),
        (1, ""),
        (2, "AutoCAD PDF (High Quality Print).pc3"),
        (4, "ANSI_full_bleed_B_(17.00_x_11.00_Inches)"),
        (6, ""),
        (40, margins.left),
        (41, margins.bottom),
        (42, margins.right),
        (43, margins.top),
        (44, layout.paper_width),
        (45, layout.paper_height),
        (46, 0.0),
        (47, 0.0),
        (48, 0.0),
        (49, 0.0),
        (140, 0.0),
        (141, 0.0),
        (142, 1.0),
        (143, 1.0),
        (70, 676),
        (72, 1),
        (73, layout.orientation),
        (74, 1),
        (7, "DWF Virtual Pens.ctb"),
        (75, 0),
        (76, 0),
        (77, 2),
        (78, 300),
        (147, 1.0),
        (148, 0.0),
        (149, 0.0),
    ]


def layouts_section(layouts: Iterable[Layout]) -> str:
    groups: list[Group] = []
    for layout in layouts:
        groups += [
            (0, "LAYOUT"),
            (5, layout.handle),
            (102, "{ACAD_REACTORS"),
            (330, LAYOUT_DICTIONARY_HANDLE),
            (102, "}"),
            (330, LAYOUT_DICTIONARY_HANDLE),
        ]
        groups += _plot_settings(layout)
        groups += [
            (100, "AcDbLayout"),
            (1, layout.name),
            (70, 0),
            (71, layout.tab),
            (10, 0.0),
            (20, 0.0),
            (11, layout.paper_width),
            (21, layout.paper_height),
            (12, 0.0),
            (22, 0.0),
            (32, 0.0),
            (14, 0.0),
            (24, 0.0),
            (34, 0.0),
            (15, 0.0),
            (25, 0.0),
            (35, 0.0),
            (146, 0.0),
            (13, 0.0),
            (23, 0.0),
            (33, 0.0),
            (16, 1.0),
            (26, 0.0),
            (36, 0.0),
            (17, 0.0),
            (27, 1.0),
            (37, 0.0),
            (76, 0),
            (330, layout.owner_handle),
            (331, layout.viewport_handle),
        ]
    return render_groups(groups)


def layout_dictionary(layouts: Iterable[Layout]) -> str:
    groups: list[Group] = []
    for layout in layouts:
        groups += [(3, layout.name), (350, layout.handle)]
    return render_groups(groups)
