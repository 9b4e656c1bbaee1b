"""Build pipeline and build coordination.

``Builder`` turns the source route table into artifacts in ``out_dir``;
``BuildCoordinator`` makes sure only one pass runs at a time and lets
requests wait for it.
"""

from verso.build.artifacts import (
    BuildArtifact,
    BuildResult,
    RouteFailure,
    content_type_for,
)
from verso.build.coordinator import BuildCoordinator, BuildState
from verso.build.pipeline import Builder, BuildPlan

__all__ = [
    "BuildArtifact",
    "BuildCoordinator",
    "BuildPlan",
    "BuildResult",
    "BuildState",
    "Builder",
    "RouteFailure",
    "content_type_for",
]
