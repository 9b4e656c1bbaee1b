"""Verso exception hierarchy.

Shared across the route tables, the build pipeline, and the server so every
module raises and catches the same types.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from verso.build.artifacts import RouteFailure


class VersoError(Exception):
    """Base for all verso-specific errors."""


class ConfigurationError(VersoError):
    """Raised when site configuration is invalid.

    Typically raised while constructing the ``Site``: a missing
    ``shell_path`` or an unreadable source directory.
    """


class ModuleLoadError(VersoError):
    """A page, layout, or shell source could not be loaded."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot load {self.path}: {reason}")


class ShellLoadError(ModuleLoadError):
    """The shell module failed to load. Fatal for the whole build pass."""


class RenderError(VersoError):
    """A composed node could not be rendered to markup."""


class BuildError(VersoError):
    """A build pass was aborted, or finished with failed routes.

    ``failures`` is empty when the pass was aborted before any route
    was built (the cause is chained instead).
    """

    def __init__(self, message: str, failures: Sequence[RouteFailure] = ()) -> None:
        self.failures = tuple(failures)
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class HTTPError(VersoError):
    """An error that maps directly to an HTTP status code.

    Raised by the ASGI handler when no upstream handler and no built
    artifact produced a response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — nothing was built for the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
