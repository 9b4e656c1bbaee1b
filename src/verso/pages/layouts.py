"""Layout discovery for a pathname.

Walks from the table root down to the pathname's own directory and
probes the source table for a layout at each level.
"""

from verso.pages.types import LayoutChain
from verso.routing.table import RouteEntry, RouteTable


def layouts_for(table: RouteTable, pathname: str) -> LayoutChain:
    """Return the layouts wrapping *pathname*, root-first.

    The root is always probed first, then every prefix of the path
    segments from shortest to longest. A level without a layout is
    simply absent from the chain::

        pages/layout.py, pages/docs/api/layout.py
        layouts_for(table, "/docs/api/intro")
        # -> (/layout, /docs/api/layout)

    The full pathname is probed too, so ``/about`` (built from
    ``about/index.py``) picks up ``about/layout.py``.
    """
    segments = [s for s in pathname.split("/") if s]
    matched: list[RouteEntry] = []

    root_layout = table.match_layout("/")
    if root_layout is not None:
        matched.append(root_layout)

    prefix = ""
    for segment in segments:
        prefix = f"{prefix}/{segment}"
        layout = table.match_layout(prefix)
        if layout is not None:
            matched.append(layout)

    return LayoutChain(tuple(matched))
