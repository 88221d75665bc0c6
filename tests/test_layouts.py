from __future__ import annotations

from dxfcreator import encode
from dxfcreator.blocks import BlockRegistry
from dxfcreator.context import DrawingContext
from dxfcreator.handles import HandleAllocator
from dxfcreator.layouts import PORTRAIT, LayoutRegistry, Margins


def _registries() -> tuple[LayoutRegistry, BlockRegistry, DrawingContext]:
    handles = HandleAllocator()
    context = DrawingContext()
    blocks = BlockRegistry(handles, context)
    return LayoutRegistry(handles, context, blocks), blocks, context


def test_create_binds_paper_space_block_and_viewport() -> None:
    layouts, blocks, context = _registries()

    layout = layouts.create("sheet", PORTRAIT, (210.0, 297.0), Margins(1, 2, 3, 4))

    block = blocks.get("*Paper_Space")
    assert block is not None
    assert layout.owner_handle == block.record_handle == "500"
    assert layout.handle == "503"
    assert layout.viewport_handle == "504"
    assert block.layout_handle == layout.handle
    assert block.is_layout
    assert [fragment.dxftype for fragment in block.fragments] == ["VIEWPORT"]
    assert block.fragments[0].handle == layout.viewport_handle
    assert layout.orientation == PORTRAIT
    assert (layout.paper_width, layout.paper_height) == (210.0, 297.0)
    assert context.layout == "sheet"
    assert context.block == "*Paper_Space"
    assert layouts.home == "sheet"


def test_paper_space_block_names_count_up() -> None:
    layouts, blocks, _ = _registries()

    for name in ("A", "B", "C"):
        layouts.create(name)

    assert [layout.block_name for layout in layouts] == ["*Paper_Space", "*Paper_Space1", "*Paper_Space2"]
    assert [block.name for block in blocks] == ["*Paper_Space", "*Paper_Space1", "*Paper_Space2"]


def test_tab_order_follows_creation_order() -> None:
    layouts, _, _ = _registries()
    for name in ("A", "B", "C"):
        layouts.create(name)

    layouts.select("A")
    layouts.select("C")

    assert [(layout.name, layout.tab) for layout in layouts] == [("A", 1), ("B", 2), ("C", 3)]
    assert layouts.home == "A"


def test_duplicate_layout_is_ignored() -> None:
    layouts, blocks, context = _registries()
    layouts.create("A", margins=Margins(1, 1, 1, 1))
    layouts.create("B", margins=Margins(2, 2, 2, 2))

    layouts.create("A", margins=Margins(9, 9, 9, 9))

    assert len(layouts) == 2
    assert len(blocks) == 2
    assert context.layout == "B"
    assert layouts.margins == Margins(2, 2, 2, 2)


def test_most_recent_layout_sets_shared_margins() -> None:
    layouts, _, _ = _registries()

    layouts.create("A", margins=Margins(top=1, right=2, bottom=3, left=4))
    layouts.create("B", margins=Margins(top=5, right=6, bottom=7, left=8))

    assert layouts.margins == Margins(top=5, right=6, bottom=7, left=8)
    assert layouts.get("A").margins == Margins(top=1, right=2, bottom=3, left=4)


def test_select_layout_selects_bound_block() -> None:
    layouts, blocks, context = _registries()
    layouts.create("A")
    layouts.create("B")
    blocks.create("detail")

    layouts.select("A")
    assert context.block == "*Paper_Space"

    layouts.select("missing")
    assert context.layout == "A"
    assert context.block == "*Paper_Space"


def test_layout_never_takes_over_existing_block() -> None:
    layouts, blocks, context = _registries()
    layouts.create("A")
    user_block = blocks.create("*Paper_Space1")
    blocks.append(encode.point(user_block.record_handle, "0", "5ff", (0.0, 0.0, 0.0)))

    layout = layouts.create("B")

    assert layout.block_name == "*Paper_Space2"
    assert [fragment.dxftype for fragment in user_block.fragments] == ["POINT"]
    assert not user_block.is_layout
    assert [fragment.dxftype for fragment in blocks.get("*Paper_Space2").fragments] == ["VIEWPORT"]
    assert context.block == "*Paper_Space2"

    layouts.create("C")
    assert layouts.get("C").block_name == "*Paper_Space3"
