"""Load page, layout, and shell sources into renderable modules.

Two source kinds are recognized:

- ``.py`` — a Python module exporting a ``render`` callable, sync or
  async. Pages take no arguments or ``pathname``; layouts and the shell
  take ``children`` and/or ``pathname``::

      # layout.py
      def render(children, pathname):
          return f"<main data-path='{pathname}'>{children}</main>"

- ``.html`` — a kida template. Pages see ``pathname``; layouts and the
  shell see ``children`` and ``pathname``::

      {# layout.html #}
      <main>{{ children }}</main>

``children`` is always a kida ``Markup`` string, so it is embedded
unescaped by templates and f-strings alike.

Outside production the loader busts its caches: every ``load()``
re-executes Python sources under a fresh module name and kida reloads
changed templates, so edits show up on the next build without a
restart.
"""

from __future__ import annotations

import importlib.util
import itertools
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from kida import ChoiceLoader, Environment, FileSystemLoader
from kida.utils.html import Markup

from verso._internal.invoke import invoke_with
from verso.errors import ModuleLoadError, ShellLoadError
from verso.pages.render import render_to_string

if TYPE_CHECKING:
    from verso.config import SiteConfig

# Name of the callable every Python source must export
RENDER_ATTR = "render"

_module_ids = itertools.count()


class PythonModule:
    """A loaded ``.py`` source and its ``render`` callable."""

    __slots__ = ("_render", "path")

    def __init__(self, path: Path, render: Callable[..., Any]) -> None:
        self.path = path
        self._render = render

    async def produce(self, *, pathname: str) -> Any:
        """Run the page's ``render``, injecting ``pathname`` if declared."""
        return await invoke_with(self._render, pathname=pathname)

    async def wrap(self, children: Any, *, pathname: str) -> Any:
        """Run the layout's ``render`` around *children*."""
        return await invoke_with(
            self._render,
            children=Markup(render_to_string(children)),
            pathname=pathname,
        )

    def __repr__(self) -> str:
        return f"PythonModule({str(self.path)!r})"


class TemplateModule:
    """A loaded ``.html`` source rendered through kida."""

    __slots__ = ("_env", "name", "path")

    def __init__(self, path: Path, env: Environment, name: str) -> None:
        self.path = path
        self.name = name
        self._env = env

    async def produce(self, *, pathname: str) -> Any:
        """Render the page template."""
        template = self._env.get_template(self.name)
        return Markup(template.render({"pathname": pathname}))

    async def wrap(self, children: Any, *, pathname: str) -> Any:
        """Render the layout template with ``children`` in its context."""
        template = self._env.get_template(self.name)
        return Markup(
            template.render(
                {"children": Markup(render_to_string(children)), "pathname": pathname}
            )
        )

    def __repr__(self) -> str:
        return f"TemplateModule({self.name!r})"


type SourceModule = PythonModule | TemplateModule


class ModuleLoader:
    """Loads source files into :class:`PythonModule` / :class:`TemplateModule`.

    Args:
        search_dirs: Directories kida resolves template names against.
            Every ``.html`` source must live below one of them.
        cache_bust: Re-execute sources on every load (development).
        autoescape: kida autoescaping for ``.html`` sources.
    """

    __slots__ = ("_cache", "_cache_bust", "_env", "_search_dirs", "autoescape")

    def __init__(
        self,
        search_dirs: Sequence[str | Path] = (),
        *,
        cache_bust: bool = True,
        autoescape: bool = True,
    ) -> None:
        self._search_dirs = tuple(Path(d).resolve() for d in search_dirs)
        self._cache_bust = cache_bust
        self._cache: dict[Path, SourceModule] = {}
        self._env: Environment | None = None
        self.autoescape = autoescape

    @classmethod
    def for_config(cls, config: SiteConfig) -> ModuleLoader:
        """Create a loader for a site: cache-busting outside production."""
        return cls(
            (config.src_path, config.shell_file.parent),
            cache_bust=not config.production,
            autoescape=config.autoescape,
        )

    @property
    def cache_bust(self) -> bool:
        """Whether every load re-reads the source."""
        return self._cache_bust

    def load(self, path: str | Path) -> SourceModule:
        """Load the source at *path*.

        Raises:
            ModuleLoadError: If the file is missing, fails to import,
                has no ``render`` callable, or has an unknown extension.
        """
        file = Path(path).resolve()
        if not self._cache_bust:
            cached = self._cache.get(file)
            if cached is not None:
                return cached

        if not file.is_file():
            raise ModuleLoadError(file, "file not found")

        suffix = file.suffix.lower()
        if suffix == ".py":
            module = self._load_python(file)
        elif suffix == ".html":
            module = self._load_template(file)
        else:
            raise ModuleLoadError(file, f"unsupported extension {suffix!r}")

        if not self._cache_bust:
            self._cache[file] = module
        return module

    def load_shell(self, path: str | Path) -> SourceModule:
        """Load the shell; any failure is a :class:`ShellLoadError`."""
        try:
            return self.load(path)
        except ModuleLoadError as exc:
            raise ShellLoadError(exc.path, exc.reason) from exc

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load_python(self, file: Path) -> PythonModule:
        """Execute a ``.py`` source and pick up its ``render``."""
        # A fresh name per load bypasses any module caching
        module_name = f"_verso_{file.stem}_{next(_module_ids)}"
        spec = importlib.util.spec_from_file_location(module_name, file)
        if spec is None or spec.loader is None:
            raise ModuleLoadError(file, "no import spec")

        module = importlib.util.module_from_spec(spec)
        if self._cache_bust:
            importlib.invalidate_caches()
        # No __pycache__ entries for sources that are re-read on every load
        write_bytecode = sys.dont_write_bytecode
        sys.dont_write_bytecode = write_bytecode or self._cache_bust
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            raise ModuleLoadError(file, f"{type(exc).__name__}: {exc}") from exc
        finally:
            sys.dont_write_bytecode = write_bytecode

        render = getattr(module, RENDER_ATTR, None)
        if render is None or not callable(render):
            raise ModuleLoadError(file, f"no callable {RENDER_ATTR!r}")
        return PythonModule(file, render)

    def _load_template(self, file: Path) -> TemplateModule:
        """Resolve a ``.html`` source to a kida template name."""
        env = self._environment()
        for directory in self._search_dirs:
            if file.is_relative_to(directory):
                name = file.relative_to(directory).as_posix()
                break
        else:
            raise ModuleLoadError(file, "outside the template search path")

        try:
            env.get_template(name)
        except Exception as exc:
            raise ModuleLoadError(file, f"{type(exc).__name__}: {exc}") from exc
        return TemplateModule(file, env, name)

    def _environment(self) -> Environment:
        if self._env is None:
            self._env = Environment(
                loader=ChoiceLoader([FileSystemLoader(str(d)) for d in self._search_dirs]),
                autoescape=self.autoescape,
                auto_reload=self._cache_bust,
            )
        return self._env
