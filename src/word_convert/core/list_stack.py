"""
Stack of open list frames used to rebuild nested lists from flattened lines.

Each frame records the nesting level it was opened at and whether it is an
ordered or unordered list. For every incoming line the renderer asks the
stack which frames to close and whether a new frame has to be opened:

* frames deeper than the line are closed;
* a frame at the line's level is closed when its kind differs from the line;
* a new frame is opened when the stack is empty or its top is shallower.

Consecutive items at the same level and of the same kind therefore share one
list, and returning to a shallower level continues the enclosing list.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple


class ListKind(Enum):
    """Kind of an open list frame."""
    ORDERED = "ordered"
    UNORDERED = "unordered"

    @classmethod
    def of(cls, is_ordered: bool) -> ListKind:
        return cls.ORDERED if is_ordered else cls.UNORDERED

    @property
    def tag(self) -> str:
        """HTML element name for this kind of list."""
        return "ol" if self is ListKind.ORDERED else "ul"


@dataclass(frozen=True)
class ListFrame:
    """An open list at a given nesting level."""

    level: int
    kind: ListKind


class ListStack:
    """Explicit push/pop stack of open ``ListFrame`` objects."""

    def __init__(self) -> None:
        self._frames: List[ListFrame] = []

    def __len__(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)

    @property
    def frames(self) -> Tuple[ListFrame, ...]:
        return tuple(self._frames)

    @property
    def top(self) -> Optional[ListFrame]:
        return self._frames[-1] if self._frames else None

    @property
    def depth(self) -> int:
        return len(self._frames)

    def push(self, frame: ListFrame) -> ListFrame:
        self._frames.append(frame)
        return frame

    def pop(self) -> ListFrame:
        return self._frames.pop()

    def should_close(self, level: int, kind: ListKind) -> bool:
        """Whether the top frame must be closed before an item at ``level``."""
        top = self.top
        if top is None:
            return False
        return top.level > level or (top.level == level and top.kind is not kind)

    def needs_open(self, level: int) -> bool:
        """Whether an item at ``level`` needs a new frame (after closing)."""
        top = self.top
        return top is None or top.level < level

    def close_for(self, level: int, kind: ListKind) -> List[ListFrame]:
        """Pop and return, innermost first, every frame an item at ``level`` closes."""
        closed = []
        while self.should_close(level, kind):
            closed.append(self.pop())
        return closed

    def enter(self, level: int, kind: ListKind) -> Tuple[List[ListFrame], Optional[ListFrame]]:
        """
        Apply the transition for one item.

        Returns the frames closed (innermost first) and the frame opened, if
        any. After the call the top of the stack is the frame the item
        belongs to.
        """
        closed = self.close_for(level, kind)
        opened = None
        if self.needs_open(level):
            opened = self.push(ListFrame(level, kind))
        return closed, opened

    def close_all(self) -> List[ListFrame]:
        closed = []
        while self._frames:
            closed.append(self.pop())
        return closed


def advance_counters(counters: Tuple[int, ...], level: int) -> Tuple[Tuple[int, ...], int]:
    """
    Advance the per-level item counters for an ordered item at ``level``.

    ``counters[n]`` is the last number used at level ``n``. Counters for
    deeper levels are discarded, missing shallower levels are filled with
    zero, and the counter at ``level`` is incremented. Returns the new
    counters and the number to print.
    """
    kept = list(counters[:level + 1])
    while len(kept) <= level:
        kept.append(0)
    kept[level] += 1
    return tuple(kept), kept[level]


def truncate_counters(counters: Tuple[int, ...], level: int) -> Tuple[int, ...]:
    """Drop the counters of levels deeper than ``level``."""
    return counters[:level + 1]
