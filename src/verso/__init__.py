"""Verso — pre-rendered pages from filesystem-routed page modules.

Every page under ``src_dir`` is composed inside the layouts of its
ancestor directories and a single shell, rendered to HTML once per
build, and served as a static artifact.

Basic usage::

    from verso import Site, SiteConfig

    site = Site(SiteConfig(src_dir="src/pages", shell_path="src/shell.py"))
    site.run()

Building without a server::

    verso build mysite:site
"""

__version__ = "0.1.0"
__all__ = [
    "BuildError",
    "BuildResult",
    "ConfigurationError",
    "Exchange",
    "ModuleLoadError",
    "NotFound",
    "Site",
    "SiteConfig",
    "VersoError",
    "current_path",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import verso`` fast while providing a clean top-level API.
    """
    if name == "Site":
        from verso.site import Site

        return Site

    if name == "SiteConfig":
        from verso.config import SiteConfig

        return SiteConfig

    if name == "BuildResult":
        from verso.build.artifacts import BuildResult

        return BuildResult

    if name == "Exchange":
        from verso.http.exchange import Exchange

        return Exchange

    if name == "current_path":
        from verso.context import current_path

        return current_path

    if name in ("BuildError", "ConfigurationError", "ModuleLoadError", "NotFound", "VersoError"):
        from verso import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
