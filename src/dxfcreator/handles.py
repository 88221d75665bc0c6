from __future__ import annotations

from dataclasses import dataclass

# Handles up to this value are reserved for records baked into the skeleton.
RESERVED_HANDLE_LIMIT = 0x4FF


@dataclass
class HandleAllocator:
    """Issues unique, strictly increasing DXF handles.

    Handles are rendered as lower-case hex without prefix or padding, the
    form expected by group code 5 and by every pointer group (330, 331, 340,
    350, 360).
    """

    last: int = RESERVED_HANDLE_LIMIT

    def allocate(self) -> str:
        self.last += 1
        return format(self.last, "x")

    @property
    def seed(self) -> str:
        # $HANDSEED must be larger than the largest handle in the file.
        return format(self.last + 1, "x")

    def fork(self) -> "HandleAllocator":
        return HandleAllocator(last=self.last)
