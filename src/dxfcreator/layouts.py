from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass, field, replace
from typing import Iterator

from . import encode
from .blocks import BlockRegistry
from .context import DrawingContext
from .handles import HandleAllocator

logger = logging.getLogger(__name__)

PORTRAIT = 0
LANDSCAPE = 1
DEFAULT_PAPER_WIDTH = 279.4
DEFAULT_PAPER_HEIGHT = 431.8
DEFAULT_MARGIN = 4.233333
PAPER_SPACE_BLOCK = "*Paper_Space"


@dataclass
class Margins:
    top: float = DEFAULT_MARGIN
    right: float = DEFAULT_MARGIN
    bottom: float = DEFAULT_MARGIN
    left: float = DEFAULT_MARGIN


@dataclass
class Layout:
    name: str
    handle: str
    owner_handle: str
    block_name: str
    viewport_handle: str
    tab: int
    orientation: int = LANDSCAPE
    paper_width: float = DEFAULT_PAPER_WIDTH
    paper_height: float = DEFAULT_PAPER_HEIGHT
    margins: Margins = field(default_factory=Margins)


class LayoutRegistry:
    """Paper-space pages, each bound to its own ``*Paper_Space`` block."""

    def __init__(self, handles: HandleAllocator, context: DrawingContext, blocks: BlockRegistry) -> None:
        self._handles = handles
        self._context = context
        self._blocks = blocks
        self._layouts: OrderedDict[str, Layout] = OrderedDict()
        self.home: str | None = None
        # margins of the most recently created layout, shared by the whole document
        self.margins = Margins()

    def __contains__(self, name: object) -> bool:
        return name in self._layouts

    def __iter__(self) -> Iterator[Layout]:
        return iter(self._layouts.values())

    def __len__(self) -> int:
        return len(self._layouts)

    def get(self, name: str) -> Layout | None:
        return self._layouts.get(name)

    @property
    def active(self) -> Layout | None:
        return self._layouts.get(self._context.layout)

    def _next_block_name(self) -> str:
        # *Paper_Space, *Paper_Space1, *Paper_Space2, ...; skips names taken by user blocks
        count = len(self._layouts)
        name = PAPER_SPACE_BLOCK if count == 0 else f"{PAPER_SPACE_BLOCK}{count}"
        while name in self._blocks:
            count += 1
            name = f"{PAPER_SPACE_BLOCK}{count}"
        return name

    def create(
        self,
        name: str,
        orientation: int = LANDSCAPE,
        paper_size: tuple[float, float] = (DEFAULT_PAPER_WIDTH, DEFAULT_PAPER_HEIGHT),
        margins: Margins | None = None,
    ) -> Layout:
        existing = self._layouts.get(name)
        if existing is not None:
            logger.debug("layout %r already exists", name)
            return existing
        margins = replace(margins) if margins is not None else Margins()
        self.margins = replace(margins)
        block = self._blocks.create(self._next_block_name())
        layout = Layout(
            name=name,
            handle=self._handles.allocate(),
            owner_handle=block.record_handle,
            block_name=block.name,
            viewport_handle=self._handles.allocate(),
            tab=len(self._layouts) + 1,
            orientation=orientation,
            paper_width=paper_size[0],
            paper_height=paper_size[1],
            margins=margins,
        )
        self._layouts[name] = layout
        block.layout_handle = layout.handle
        block.fragments.append(encode.viewport(block.record_handle, layout.viewport_handle))
        if self.home is None:
            self.home = name
        self.select(name)
        return layout

    def select(self, name: str) -> None:
        layout = self._layouts.get(name)
        if layout is None:
            logger.debug("layout %r not found, keeping %r", name, self._context.layout)
            return
        self._context.layout = name
        self._blocks.select(layout.block_name)
