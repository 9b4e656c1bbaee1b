"""The build pipeline — every page route to one HTML artifact.

For each page in the source table the builder:

1. loads the page and asks it for its own content,
2. resolves the page's layout chain (root-first),
3. composes the content inside the layouts and the shell,
4. renders the composed tree to a markup string,
5. writes it next to its siblings in ``out_dir``.

Layouts and the shell are composition inputs only; they never become
entrypoints. Non-page files below ``src_dir`` (stylesheets, images,
data) are copied through unchanged. Outputs are replaced by rename, so
a reader never sees a partial write. HTML outputs that no current page
maps to are removed at the end of the pass.

Pages render directly through the module loader; there is no bundler
step. A page that fails is recorded as a :class:`RouteFailure` and the
pass carries on. A shell that fails to load aborts the pass before
anything is written, since every route depends on it.
"""

from __future__ import annotations

import logging
import time
from contextvars import Token
from dataclasses import dataclass
from pathlib import Path

import anyio

from verso.build.artifacts import BuildArtifact, BuildResult, RouteFailure
from verso.config import SiteConfig
from verso.context import pathname_var
from verso.errors import BuildError, ModuleLoadError
from verso.pages.compose import compose
from verso.pages.layouts import layouts_for
from verso.pages.loader import ModuleLoader, SourceModule
from verso.pages.render import render_to_string
from verso.routing.table import RouteEntry, RouteTable

logger = logging.getLogger("verso.build")


async def _write_replacing(target: anyio.Path, data: bytes) -> None:
    """Write *data* to a private sibling, then rename it over *target*.

    A reader that already opened *target* keeps the old file; a new
    reader sees the new one. Neither sees a partial write.
    """
    staging = target.with_name(f".{target.name}.tmp")
    await staging.write_bytes(data)
    await staging.replace(target)


@dataclass(frozen=True, slots=True)
class BuildPlan:
    """What one build pass will process.

    Attributes:
        entrypoints: Page routes, layouts and shell excluded.
        assets: Non-page files copied through unchanged.
        out_dir: Where artifacts are written.
    """

    entrypoints: tuple[RouteEntry, ...]
    assets: tuple[Path, ...]
    out_dir: Path


class Builder:
    """Builds every page route of a source table into ``out_dir``.

    Args:
        config: Site configuration.
        source_table: The page routes to build.
        loader: Module loader; defaults to one derived from *config*.
    """

    __slots__ = ("_config", "_loader", "_source_table")

    def __init__(
        self,
        config: SiteConfig,
        source_table: RouteTable,
        loader: ModuleLoader | None = None,
    ) -> None:
        self._config = config
        self._source_table = source_table
        self._loader = loader or ModuleLoader.for_config(config)

    @property
    def loader(self) -> ModuleLoader:
        return self._loader

    # -- Planning --

    def build_config(self) -> BuildPlan:
        """Enumerate entrypoints and passthrough assets for one pass."""
        shell = self._config.shell_file
        entrypoints = tuple(
            entry for entry in self._source_table.entries() if entry.path != shell
        )
        return BuildPlan(
            entrypoints=entrypoints,
            assets=tuple(self._iter_assets(self._source_table.root)),
            out_dir=self._config.out_path,
        )

    def _iter_assets(self, directory: Path) -> list[Path]:
        """Non-source, non-private files below *directory*, sorted."""
        assets: list[Path] = []
        extensions = self._config.source_extensions
        for item in sorted(directory.iterdir()):
            if item.name.startswith(("_", ".")):
                continue
            if item.is_dir():
                assets.extend(self._iter_assets(item))
            elif item.is_file() and item.suffix.lower() not in extensions:
                if item.suffix.lower() == ".pyc" or item == self._config.shell_file:
                    continue
                assets.append(item)
        return assets

    def output_path_for(self, source: Path) -> Path:
        """Map a page source to its HTML output path.

        ``about/index.py`` becomes ``<out_dir>/about/index.html``.
        """
        relative = source.relative_to(self._source_table.root)
        return self._config.out_path / relative.with_suffix(".html")

    # -- Building --

    async def prepare(self) -> SourceModule:
        """Load the shell and create ``out_dir``.

        Everything here is fatal for the pass and runs before any
        route is built.

        Raises:
            BuildError: The shell failed to load or ``out_dir`` could
                not be created.
        """
        try:
            shell = self._loader.load_shell(self._config.shell_file)
        except ModuleLoadError as exc:
            msg = f"Shell module failed to load: {exc.reason}"
            raise BuildError(msg) from exc

        try:
            await anyio.Path(self._config.out_path).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"Cannot create output directory {self._config.out_path}: {exc}"
            raise BuildError(msg) from exc
        return shell

    async def build(self, shell: SourceModule | None = None) -> BuildResult:
        """Run one full build pass.

        Args:
            shell: An already-prepared shell. When omitted,
                :meth:`prepare` runs first.

        Returns:
            The artifacts written and the routes that failed.
        """
        if shell is None:
            shell = await self.prepare()

        plan = self.build_config()
        started = time.perf_counter()
        logger.info(
            "Building %d pages and %d assets into %s",
            len(plan.entrypoints),
            len(plan.assets),
            plan.out_dir,
        )

        artifacts: list[BuildArtifact] = []
        failures: list[RouteFailure] = []
        layout_cache: dict[Path, SourceModule] = {}

        for entry in plan.entrypoints:
            try:
                artifacts.append(await self.build_page(entry, shell, layout_cache))
            except Exception as exc:
                logger.error("Failed to build %s (%s)", entry.pathname, entry.path, exc_info=exc)
                failures.append(RouteFailure(entry.pathname, entry.path, exc))

        for asset in plan.assets:
            try:
                artifacts.append(await self.copy_asset(asset))
            except OSError as exc:
                logger.error("Failed to copy asset %s", asset, exc_info=exc)
                failures.append(RouteFailure(self._asset_pathname(asset), asset, exc))

        try:
            await self.prune_stale(plan)
        except OSError as exc:
            logger.warning("Could not prune stale artifacts in %s: %s", plan.out_dir, exc)

        duration = time.perf_counter() - started
        result = BuildResult(
            artifacts=tuple(artifacts),
            failures=tuple(failures),
            duration=duration,
        )
        logger.info(
            "Built %d artifacts in %.2fs (%d failed)",
            len(result.artifacts),
            duration,
            len(result.failures),
        )
        return result

    async def prune_stale(self, plan: BuildPlan) -> list[Path]:
        """Delete HTML outputs that no current page route maps to.

        Covers pages whose source was removed since an earlier pass.
        Failed routes are still entrypoints, so they keep their previous
        artifact. Private names (staging files) are left alone.
        """
        root = self._source_table.root
        keep = {self.output_path_for(entry.path) for entry in plan.entrypoints}
        keep.update(plan.out_dir / asset.relative_to(root) for asset in plan.assets)

        stale: list[anyio.Path] = []
        async for file in anyio.Path(plan.out_dir).rglob("*.html"):
            path = Path(file)
            relative = path.relative_to(plan.out_dir)
            if any(part.startswith(("_", ".")) for part in relative.parts):
                continue
            if path not in keep:
                stale.append(file)

        for file in stale:
            await file.unlink(missing_ok=True)
            logger.info("Removed stale artifact %s", file)
        return [Path(file) for file in stale]

    async def render_page(
        self,
        entry: RouteEntry,
        shell: SourceModule,
        layout_cache: dict[Path, SourceModule] | None = None,
    ) -> str:
        """Render one page route to its final markup string."""
        cache = layout_cache if layout_cache is not None else {}
        token: Token[str] = pathname_var.set(entry.pathname)
        try:
            page = self._loader.load(entry.path)
            content = await page.produce(pathname=entry.pathname)

            chain = layouts_for(self._source_table, entry.pathname)
            layouts: list[SourceModule] = []
            for layout_entry in chain:
                layout = cache.get(layout_entry.path)
                if layout is None:
                    layout = self._loader.load(layout_entry.path)
                    cache[layout_entry.path] = layout
                layouts.append(layout)

            composed = await compose(content, layouts, shell, pathname=entry.pathname)
            return render_to_string(composed)
        finally:
            pathname_var.reset(token)

    async def build_page(
        self,
        entry: RouteEntry,
        shell: SourceModule,
        layout_cache: dict[Path, SourceModule] | None = None,
    ) -> BuildArtifact:
        """Render one page route and write its artifact."""
        markup = await self.render_page(entry, shell, layout_cache)
        target = anyio.Path(self.output_path_for(entry.path))
        await target.parent.mkdir(parents=True, exist_ok=True)
        await _write_replacing(target, markup.encode("utf-8"))
        logger.debug("Wrote %s -> %s", entry.pathname, target)
        return BuildArtifact.from_path(Path(target), pathname=entry.pathname)

    async def copy_asset(self, source: Path) -> BuildArtifact:
        """Copy a passthrough asset into ``out_dir`` unchanged."""
        relative = source.relative_to(self._source_table.root)
        target = anyio.Path(self._config.out_path / relative)
        await target.parent.mkdir(parents=True, exist_ok=True)
        await _write_replacing(target, await anyio.Path(source).read_bytes())
        return BuildArtifact.from_path(Path(target))

    def _asset_pathname(self, source: Path) -> str:
        return "/" + source.relative_to(self._source_table.root).as_posix()
