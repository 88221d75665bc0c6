from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from . import encode
from .context import DrawingContext, point3
from .entity import Fragment, Point3D
from .handles import HandleAllocator

logger = logging.getLogger(__name__)

# handle of the BLOCK_RECORD table in the skeleton
BLOCK_TABLE_HANDLE = "1"
NO_LAYOUT_HANDLE = "0"


@dataclass
class Block:
    name: str
    record_handle: str
    begin_handle: str
    end_handle: str
    owner_handle: str = BLOCK_TABLE_HANDLE
    layer: str = "0"
    layout_handle: str = NO_LAYOUT_HANDLE
    base: Point3D = (0.0, 0.0, 0.0)
    fragments: list[Fragment] = field(default_factory=list)
    references: list[str] = field(default_factory=list)

    @property
    def is_layout(self) -> bool:
        return self.layout_handle != NO_LAYOUT_HANDLE


class BlockRegistry:
    def __init__(self, handles: HandleAllocator, context: DrawingContext) -> None:
        self._handles = handles
        self._context = context
        self._blocks: OrderedDict[str, Block] = OrderedDict()

    def __contains__(self, name: object) -> bool:
        return name in self._blocks

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks.values())

    def __len__(self) -> int:
        return len(self._blocks)

    def get(self, name: str) -> Block | None:
        return self._blocks.get(name)

    @property
    def active(self) -> Block | None:
        return self._blocks.get(self._context.block)

    def create(self, name: str, layer: str = "0", base: Sequence[float] = (0.0, 0.0, 0.0)) -> Block:
        existing = self._blocks.get(name)
        if existing is not None:
            logger.debug("block %r already exists", name)
            return existing
        block = Block(
            name=name,
            record_handle=self._handles.allocate(),
            begin_handle=self._handles.allocate(),
            end_handle=self._handles.allocate(),
            layer=layer,
            base=point3(base),
        )
        self._blocks[name] = block
        self._context.block = name
        return block

    def select(self, name: str) -> None:
        if name not in self._blocks:
            logger.debug("block %r not found, keeping %r", name, self._context.block)
            return
        self._context.block = name

    def append(self, fragment: Fragment) -> None:
        block = self.active
        if block is None:
            raise RuntimeError("no active block to append to")
        block.fragments.append(fragment)

    def insert(
        self,
        block_name: str,
        position: Sequence[float],
        scale: Sequence[float] = (1.0, 1.0, 1.0),
        rotation: float = 0.0,
    ) -> str | None:
        """Reference ``block_name`` from the active block.

        The INSERT entity lands in the active block; its handle is recorded
        on the referenced block so the block record can list it.
        """
        target = self._blocks.get(block_name)
        if target is None:
            logger.debug("cannot insert unknown block %r", block_name)
            return None
        owner = self.active
        if owner is None:
            raise RuntimeError("no active block to insert into")
        handle = self._handles.allocate()
        fragment = encode.insert(
            owner.record_handle,
            self._context.layer,
            handle,
            block_name,
            self._context.apply_offset(position),
            (scale[0], scale[1], scale[2]),
            rotation,
        )
        owner.fragments.append(fragment)
        target.references.append(handle)
        return handle
