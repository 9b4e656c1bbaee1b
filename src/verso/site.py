"""Verso site class.

A ``Site`` ties the pieces together: it scans the page sources once at
construction, owns the build coordinator and the output route table,
and serves built artifacts as an ASGI application.

The host lifecycle maps onto four hooks:

- ``build_config()`` — what the next pass will build
- ``after_build(result)`` — refresh the output route table
- ``on_server_start()`` — initial build (ASGI lifespan startup)
- ``on_request(exchange)`` — serve a built artifact, if any
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from verso._internal.asgi import Receive, Scope, Send
from verso.build.artifacts import BuildResult
from verso.build.coordinator import BuildCoordinator
from verso.build.pipeline import Builder, BuildPlan
from verso.config import SiteConfig
from verso.errors import ConfigurationError
from verso.http.exchange import Exchange
from verso.pages.loader import ModuleLoader
from verso.routing.table import RouteTable
from verso.server.handler import RequestHook, handle_request
from verso.server.resolve import RequestResolver

logger = logging.getLogger("verso.server")


@dataclass(slots=True)
class SiteState:
    """The shared state of one site.

    The source table is read-only after construction. The output
    table and the build state are mutated only by the build side
    (builder, coordinator, ``after_build``); request handling only
    reads them.
    """

    source_table: RouteTable
    output_table: RouteTable
    builder: Builder
    coordinator: BuildCoordinator


class Site:
    """A statically pre-rendered site with build-on-demand serving.

    Usage::

        from verso import Site, SiteConfig

        site = Site(SiteConfig(src_dir="src/pages", shell_path="src/shell.py"))

        if __name__ == "__main__":
            site.run()

    Raises:
        ConfigurationError: If ``shell_path`` is empty or the source
            directory cannot be read.
    """

    __slots__ = ("_handlers", "_resolver", "config", "state")

    def __init__(
        self,
        config: SiteConfig | None = None,
        *,
        loader: ModuleLoader | None = None,
    ) -> None:
        self.config: SiteConfig = config or SiteConfig()
        if not str(self.config.shell_path):
            msg = "SiteConfig.shell_path is required: every page is wrapped in the shell"
            raise ConfigurationError(msg)

        source_table = RouteTable.scan_sources(self.config)
        output_table = RouteTable.scan_outputs(self.config)
        builder = Builder(self.config, source_table, loader)
        coordinator = BuildCoordinator(
            builder,
            after_build=self.after_build,
            raise_on_failure=self.config.throw_on_build_error,
        )
        self.state = SiteState(
            source_table=source_table,
            output_table=output_table,
            builder=builder,
            coordinator=coordinator,
        )
        self._resolver = RequestResolver(
            output_table=output_table,
            coordinator=coordinator,
            out_dir=self.config.out_path,
        )
        self._handlers: list[RequestHook] = []
        logger.debug("Site created with %d page routes", len(source_table))

    # -- Upstream handlers --

    def add_handler(self, handler: RequestHook) -> RequestHook:
        """Register a request handler that runs before built pages.

        A handler receives the ``Exchange`` and may claim the request
        with ``exchange.set_response(...)``; built pages are then
        skipped. Usable as a decorator::

            @site.add_handler
            def health(exchange):
                if exchange.request.path == "/healthz":
                    exchange.set_response("ok", content_type="text/plain")
        """
        self._handlers.append(handler)
        return handler

    # -- Host lifecycle --

    def build_config(self) -> BuildPlan:
        """The entrypoints and assets of the next build pass."""
        return self.state.builder.build_config()

    def after_build(self, result: BuildResult) -> None:
        """Refresh the output route table after a completed pass."""
        self.state.output_table.reload()
        logger.debug(
            "Output routes refreshed: %d (%d artifacts)",
            len(self.state.output_table),
            len(result.artifacts),
        )

    async def on_server_start(self) -> BuildResult:
        """Run the initial build. Called once at ASGI lifespan startup."""
        return await self.rebuild()

    async def rebuild(self) -> BuildResult:
        """Build every route now, or join the build already running."""
        return await self.state.coordinator.build()

    async def on_request(self, exchange: Exchange) -> None:
        """Serve a built artifact for the request, if there is one.

        Leaves the exchange untouched when an upstream handler already
        responded or nothing was built for the path.
        """
        if exchange.is_response_set:
            return

        resolution = await self._resolver.resolve(exchange.request.path)
        if resolution is None:
            return

        if resolution.via_fallback:
            exchange.prevent_log()
        artifact = resolution.artifact
        if resolution.streamed:
            exchange.set_response(artifact.stream(), content_type=resolution.content_type)
        else:
            exchange.set_response(
                await artifact.read_bytes(), content_type=resolution.content_type
            )

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the site with pounce. The first build runs at startup."""
        from verso.server.dev import run_dev_server

        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug,
            reload_dirs=(str(self.config.src_path),),
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan directly, then delegates HTTP scopes to the
        request handler pipeline with built pages as the last hook.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(
            scope,
            receive,
            send,
            hooks=(*self._handlers, self.on_request),
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        The initial build runs at startup, before the server begins
        accepting HTTP requests. A fatal build error fails startup.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.on_server_start()
                    await send({"type": "lifespan.startup.complete"})
                except Exception as exc:
                    logger.exception("Initial build failed")
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": str(exc),
                        }
                    )
                    return

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
