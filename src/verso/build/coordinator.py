"""Build coordination — one build at a time, shared with every request.

The coordinator owns the process-wide build state::

    idle ──build()──▶ building ──pass complete──▶ idle

Requests that arrive while a build is in flight wait on
:meth:`BuildCoordinator.wait_until_idle` and are all released together
when it finishes. The ``after_build`` callback (the output route table
refresh) runs *before* the state returns to idle, so a released waiter
always reads the fresh table.

A ``build()`` call made while another build is running joins it: the
caller waits for the in-flight pass and receives its result, or a
``BuildError`` chained to the exception that pass raised.

Fatal errors found while preparing (shell load, output directory)
are raised before the state leaves idle.
"""

from __future__ import annotations

import enum
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

import anyio

from verso.build.artifacts import BuildResult
from verso.build.pipeline import Builder
from verso.errors import BuildError

logger = logging.getLogger("verso.build")

type AfterBuild = Callable[[BuildResult], None | Awaitable[None]]


class BuildState(enum.Enum):
    IDLE = "idle"
    BUILDING = "building"


@dataclass(slots=True)
class _Pass:
    """One build pass: its completion event and its outcome."""

    done: anyio.Event = field(default_factory=anyio.Event)
    result: BuildResult | None = None
    error: Exception | None = None


class BuildCoordinator:
    """Serializes build passes and gates request resolution on them.

    Args:
        builder: The pipeline that runs each pass.
        after_build: Called with each completed pass's result while the
            state is still ``building``.
        raise_on_failure: Raise :class:`BuildError` after a pass in
            which any route failed. Applies to joined callers too.
    """

    __slots__ = (
        "_after_build",
        "_builder",
        "_current",
        "_last_result",
        "_raise_on_failure",
        "_state",
    )

    def __init__(
        self,
        builder: Builder,
        *,
        after_build: AfterBuild | None = None,
        raise_on_failure: bool = False,
    ) -> None:
        self._builder = builder
        self._after_build = after_build
        self._raise_on_failure = raise_on_failure
        self._state = BuildState.IDLE
        # The in-flight or most recent pass; created per pass since
        # anyio events need a running event loop
        self._current: _Pass | None = None
        self._last_result: BuildResult | None = None

    @property
    def state(self) -> BuildState:
        return self._state

    @property
    def is_building(self) -> bool:
        """True while a pass is in flight."""
        return self._state is BuildState.BUILDING

    @property
    def last_result(self) -> BuildResult | None:
        """The most recent completed pass, or ``None`` before the first."""
        return self._last_result

    async def wait_until_idle(self) -> None:
        """Suspend until no build is in flight. Returns at once when idle."""
        current = self._current
        if self.is_building and current is not None:
            await current.done.wait()

    async def build(self) -> BuildResult:
        """Run a build pass, or join the one already in flight.

        Raises:
            BuildError: The pass could not start (fatal), a joined pass
                raised, or routes failed and ``raise_on_failure`` is set.
        """
        if self.is_building:
            logger.info("Build already in progress; waiting for it")
            return await self._join()

        # Fatal problems surface here, before the state changes
        shell = await self._builder.prepare()

        # Re-check: another caller may have started while we prepared
        if self.is_building:
            return await self._join()

        current = _Pass()
        self._current = current
        self._state = BuildState.BUILDING
        try:
            result = await self._builder.build(shell)
            self._last_result = result
            if self._after_build is not None:
                outcome = self._after_build(result)
                if inspect.isawaitable(outcome):
                    await outcome
            current.result = result
        except Exception as exc:
            current.error = exc
            raise
        finally:
            self._state = BuildState.IDLE
            current.done.set()

        return self._checked(result)

    async def _join(self) -> BuildResult:
        """Wait for the in-flight pass and return its own outcome."""
        current = self._current
        if current is None:
            msg = "No build is in flight"
            raise BuildError(msg)

        await current.done.wait()
        if current.error is not None:
            msg = f"The in-flight build failed: {current.error}"
            raise BuildError(msg) from current.error
        if current.result is None:
            msg = "The in-flight build did not complete"
            raise BuildError(msg)
        return self._checked(current.result)

    def _checked(self, result: BuildResult) -> BuildResult:
        if self._raise_on_failure and result.failures:
            msg = f"{len(result.failures)} route(s) failed to build"
            raise BuildError(msg, result.failures)
        return result
