"""Build-scoped context via ContextVar.

Provides ``current_path()``: the pathname of the route being built,
available to any page, layout, or shell function without threading it
through arguments::

    from verso.context import current_path

    def render(children):
        active = "active" if current_path() == "/about" else ""
        return f'<nav><a class="{active}" href="/about">About</a></nav>{children}'

Set by the build pipeline around each route and reset afterwards.
Outside a build, ``current_path()`` raises ``LookupError``.
"""

from contextvars import ContextVar

pathname_var: ContextVar[str] = ContextVar("verso_pathname")
"""The pathname of the route being built."""


def current_path() -> str:
    """Return the pathname of the route being built.

    Raises ``LookupError`` if called outside a build.
    """
    return pathname_var.get()
