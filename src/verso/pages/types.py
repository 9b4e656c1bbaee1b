"""Data models for page composition.

Immutable frozen dataclasses describing a page route's layout chain,
plus the protocols the composition engine relies on.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Protocol

from verso.routing.table import RouteEntry


@dataclass(frozen=True, slots=True)
class LayoutChain:
    """Ordered sequence of layouts from root (outermost) to deepest.

    The order is significant: reversing it swaps the nesting of the
    produced markup.
    """

    layouts: tuple[RouteEntry, ...] = ()

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self.layouts)

    def __len__(self) -> int:
        return len(self.layouts)

    def __bool__(self) -> bool:
        return bool(self.layouts)


class Wrapper(Protocol):
    """Anything that wraps child content: a layout or the shell."""

    async def wrap(self, children: Any, *, pathname: str) -> Any: ...
