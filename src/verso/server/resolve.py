"""Resolve request pathnames against the built output.

Resolution order:

1. Refresh the output route table (cheap rescan).
2. If a build is in flight, wait for it to finish.
3. Match the pathname against the output table → ``text/html``.
4. Otherwise look for an artifact of the last build whose path is
   exactly ``out_dir + pathname`` → content type by extension.
5. Otherwise ``None``; the host decides what "not found" means.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from verso.build.artifacts import BuildArtifact
from verso.build.coordinator import BuildCoordinator
from verso.routing.table import RouteTable, normalize_pathname


@dataclass(frozen=True, slots=True)
class Resolution:
    """A built artifact matched for a request.

    Attributes:
        artifact: The file to send.
        content_type: The ``Content-Type`` header value.
        via_fallback: True when matched by exact output path rather
            than by the output route table.
    """

    artifact: BuildArtifact
    content_type: str
    via_fallback: bool = False

    @property
    def streamed(self) -> bool:
        """HTML is streamed; everything else is sent as one buffer."""
        return self.content_type == "text/html"


class RequestResolver:
    """Maps request pathnames to built artifacts.

    Reads, but never mutates, the output table and the coordinator's
    state; both are owned by the build side.
    """

    __slots__ = ("_coordinator", "_out_dir", "_output_table")

    def __init__(
        self,
        *,
        output_table: RouteTable,
        coordinator: BuildCoordinator,
        out_dir: str | Path,
    ) -> None:
        self._output_table = output_table
        self._coordinator = coordinator
        self._out_dir = Path(out_dir).resolve()

    async def resolve(self, pathname: str) -> Resolution | None:
        """Return the artifact for *pathname*, or ``None`` on a miss."""
        self._output_table.reload()
        if self._coordinator.is_building:
            await self._coordinator.wait_until_idle()

        match = self._output_table.match(pathname)
        if match is not None:
            artifact = BuildArtifact.from_path(match.path, pathname=match.pathname)
            return Resolution(artifact=artifact, content_type="text/html")

        return self._fallback(pathname)

    def _fallback(self, pathname: str) -> Resolution | None:
        """Exact output-path lookup among the last build's artifacts."""
        result = self._coordinator.last_result
        if result is None:
            return None

        relative = normalize_pathname(pathname).lstrip("/")
        if not relative:
            return None
        artifact = result.find(self._out_dir / relative)
        if artifact is None:
            return None
        return Resolution(
            artifact=artifact,
            content_type=artifact.content_type,
            via_fallback=True,
        )
