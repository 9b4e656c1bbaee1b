"""Pathname-to-file route tables built from a directory walk.

Walks a directory tree and derives one pathname per recognized file:

- each directory contributes one path segment,
- a file named ``index`` maps to its directory's pathname,
- any other file appends its stem to the path,
- a file named ``layout`` (source tables only) is kept aside as the
  layout scoped to its directory and never becomes a route.

Names starting with ``_`` or ``.`` are private and skipped, as is
``__pycache__``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from verso.errors import ConfigurationError

if TYPE_CHECKING:
    from verso.config import SiteConfig

logger = logging.getLogger("verso.routing")


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A pathname and the absolute file it maps to.

    Attributes:
        pathname: Leading-slash-normalized pathname (e.g. ``/about``).
        path: Absolute source or output file path.
    """

    pathname: str
    path: Path


def normalize_pathname(pathname: str) -> str:
    """Normalize *pathname* to ``/a/b`` form.

    Adds the leading slash, collapses empty segments, and strips the
    trailing slash (except for the root)::

        >>> normalize_pathname("about//team/")
        '/about/team'
        >>> normalize_pathname("")
        '/'
    """
    segments = [s for s in pathname.split("/") if s]
    return "/" + "/".join(segments)


def _is_private(name: str) -> bool:
    return name.startswith(("_", "."))


class RouteTable:
    """A pathname-to-file mapping derived from one directory.

    Use :meth:`scan_sources` for the page tree and :meth:`scan_outputs`
    for the build output. The table is rebuilt wholesale by
    :meth:`reload`; readers never observe a half-built mapping.
    """

    __slots__ = (
        "_exclude",
        "_extensions",
        "_index_name",
        "_layout_name",
        "_layouts",
        "_required",
        "_root",
        "_routes",
    )

    def __init__(
        self,
        root: str | Path,
        *,
        extensions: tuple[str, ...],
        index_name: str = "index",
        layout_name: str | None = None,
        required: bool = True,
        exclude: frozenset[Path] = frozenset(),
    ) -> None:
        self._root = Path(root).resolve()
        self._exclude = exclude
        self._extensions = tuple(ext.lower() for ext in extensions)
        self._index_name = index_name
        self._layout_name = layout_name
        self._required = required
        self._routes: dict[str, Path] = {}
        self._layouts: dict[str, Path] = {}
        self.reload()

    # -- Construction --

    @classmethod
    def scan_sources(cls, config: SiteConfig) -> RouteTable:
        """Build the source table for ``config.src_dir``.

        Raises:
            ConfigurationError: If the directory is missing or unreadable.
        """
        return cls(
            config.src_path,
            extensions=config.source_extensions,
            index_name=config.index_name,
            layout_name=config.layout_name,
            required=True,
            exclude=frozenset({config.shell_file}),
        )

    @classmethod
    def scan_outputs(cls, config: SiteConfig) -> RouteTable:
        """Build the output table for ``config.out_dir``.

        Matches built ``.html`` files only. A missing output directory
        (nothing built yet) yields an empty table.
        """
        return cls(
            config.out_path,
            extensions=(".html",),
            index_name=config.index_name,
            layout_name=None,
            required=False,
        )

    def reload(self) -> None:
        """Rescan the directory and replace the mapping."""
        routes: dict[str, Path] = {}
        layouts: dict[str, Path] = {}

        if not self._root.is_dir():
            if self._required:
                msg = f"Source directory not found: {self._root}"
                raise ConfigurationError(msg)
            self._routes, self._layouts = routes, layouts
            return

        try:
            self._walk(self._root, [], routes, layouts)
        except OSError as exc:
            if self._required:
                msg = f"Cannot read source directory {self._root}: {exc}"
                raise ConfigurationError(msg) from exc
            logger.warning("Output scan of %s failed: %s", self._root, exc)

        self._routes, self._layouts = routes, layouts

    def _walk(
        self,
        directory: Path,
        segments: list[str],
        routes: dict[str, Path],
        layouts: dict[str, Path],
    ) -> None:
        """Recursively collect routes and layouts below *directory*."""
        children = sorted(directory.iterdir())

        for item in children:
            if not item.is_file() or _is_private(item.name):
                continue
            if item in self._exclude:
                continue
            if item.suffix.lower() not in self._extensions:
                continue

            dir_pathname = "/" + "/".join(segments)
            if self._layout_name is not None and item.stem == self._layout_name:
                layouts.setdefault(dir_pathname, item)
                continue

            if item.stem == self._index_name:
                pathname = dir_pathname
            else:
                pathname = "/" + "/".join([*segments, item.stem])

            existing = routes.get(pathname)
            if existing is not None:
                logger.warning(
                    "Route %s is defined by both %s and %s; keeping the first",
                    pathname,
                    existing,
                    item,
                )
                continue
            routes[pathname] = item

        for item in children:
            if not item.is_dir() or _is_private(item.name):
                continue
            self._walk(item, [*segments, item.name], routes, layouts)

    # -- Lookup --

    @property
    def root(self) -> Path:
        """The scanned directory."""
        return self._root

    def match(self, pathname: str) -> RouteEntry | None:
        """Return the route for *pathname*, or ``None``."""
        key = normalize_pathname(pathname)
        path = self._routes.get(key)
        if path is None:
            return None
        return RouteEntry(key, path)

    def match_layout(self, pathname: str) -> RouteEntry | None:
        """Return the layout scoped to directory *pathname*, or ``None``.

        The entry's pathname is the layout's probe pathname
        (``/about/layout``), which never appears in :meth:`all_routes`.
        """
        key = normalize_pathname(pathname)
        path = self._layouts.get(key)
        if path is None:
            return None
        probe = key.rstrip("/") + "/" + (self._layout_name or "")
        return RouteEntry(probe, path)

    def all_routes(self) -> dict[str, Path]:
        """A copy of the pathname-to-file mapping, layouts excluded."""
        return dict(self._routes)

    def entries(self) -> tuple[RouteEntry, ...]:
        """All route entries, sorted by pathname."""
        return tuple(RouteEntry(p, self._routes[p]) for p in sorted(self._routes))

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, pathname: object) -> bool:
        if not isinstance(pathname, str):
            return False
        return normalize_pathname(pathname) in self._routes

    def __repr__(self) -> str:
        return f"RouteTable({str(self._root)!r}, routes={len(self._routes)})"
