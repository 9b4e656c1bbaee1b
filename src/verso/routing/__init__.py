"""Filesystem route tables.

One table maps source pathnames to page modules, another maps output
pathnames to built HTML files. Both derive pathnames the same way::

    pages/
      index.py            # /
      layout.py           # layout for / and everything below
      about/
        index.py          # /about
        layout.html       # layout for /about/...
        team.py           # /about/team
      _components.py      # private, never routed
"""

from verso.routing.table import RouteEntry, RouteTable, normalize_pathname

__all__ = [
    "RouteEntry",
    "RouteTable",
    "normalize_pathname",
]
