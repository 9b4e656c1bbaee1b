"""Build artifacts, per-route failures, and build results.

An artifact is one produced file: a rendered page or a passthrough
asset. Its content type is derived from its extension.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass
from pathlib import Path

import anyio

# Extension -> Content-Type; anything else is application/octet-stream
CONTENT_TYPES: dict[str, str] = {
    "html": "text/html",
    "js": "application/javascript",
    "css": "text/css",
    "json": "application/json",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "svg": "image/svg+xml",
}

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Read size for streamed artifacts
CHUNK_SIZE = 64 * 1024


def content_type_for(path: str | Path) -> str:
    """Return the Content-Type for *path* based on its extension.

        >>> content_type_for("out/data.json")
        'application/json'
        >>> content_type_for("out/module.wasm")
        'application/octet-stream'
    """
    ext = Path(path).suffix.lstrip(".").lower()
    return CONTENT_TYPES.get(ext, DEFAULT_CONTENT_TYPE)


@dataclass(frozen=True, slots=True)
class BuildArtifact:
    """A file produced by a build pass.

    Attributes:
        path: Absolute output path.
        content_type: Derived from the extension.
        pathname: The page route this artifact was rendered for, or
            ``None`` for passthrough assets.
    """

    path: Path
    content_type: str
    pathname: str | None = None

    @classmethod
    def from_path(cls, path: str | Path, *, pathname: str | None = None) -> BuildArtifact:
        """Create an artifact for *path*, deriving its content type."""
        file = Path(path)
        return cls(path=file, content_type=content_type_for(file), pathname=pathname)

    @property
    def is_html(self) -> bool:
        return self.content_type == "text/html"

    async def read_bytes(self) -> bytes:
        """Read the whole artifact."""
        return await anyio.Path(self.path).read_bytes()

    async def stream(self, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
        """Yield the artifact in chunks."""
        async with await anyio.open_file(self.path, "rb") as file:
            while chunk := await file.read(chunk_size):
                yield chunk


@dataclass(frozen=True, slots=True)
class RouteFailure:
    """A page route that failed to build in one pass.

    Attributes:
        pathname: The route's pathname.
        source: The page source file.
        error: The exception raised while loading, composing, or
            rendering the route.
    """

    pathname: str
    source: Path
    error: BaseException

    def __str__(self) -> str:
        return f"{self.pathname} ({self.source}): {type(self.error).__name__}: {self.error}"


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Everything one build pass produced.

    Attributes:
        artifacts: Pages and passthrough assets written by the pass.
        failures: Routes that produced no artifact.
        duration: Wall-clock seconds spent building.
    """

    artifacts: tuple[BuildArtifact, ...] = ()
    failures: tuple[RouteFailure, ...] = ()
    duration: float = 0.0

    @property
    def ok(self) -> bool:
        """True when every route built."""
        return not self.failures

    @property
    def pages(self) -> tuple[BuildArtifact, ...]:
        """Artifacts rendered for page routes."""
        return tuple(a for a in self.artifacts if a.pathname is not None)

    def find(self, path: str | Path) -> BuildArtifact | None:
        """Return the artifact whose output path equals *path* exactly."""
        target = Path(path)
        for artifact in self.artifacts:
            if artifact.path == target:
                return artifact
        return None
