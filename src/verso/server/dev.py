"""Development server.

Starts a pounce ASGI server with the live verso Site object.
Uses single-worker mode; reload restarts the process, which runs a
fresh startup build.
"""


def run_dev_server(
    site: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    reload_dirs: tuple[str, ...] = (),
    app_path: str | None = None,
) -> None:
    """Start a pounce server with the given verso Site.

    Pounce's ``run()`` takes an import string (e.g., ``"mysite:site"``),
    but verso has a live ``Site`` object. We use ``pounce.Server``
    directly with the ASGI callable.

    Args:
        site: ASGI callable (verso Site instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on file changes.
        reload_dirs: Extra directories to watch (the page sources).
        app_path: Optional ``"module:attribute"`` import string.  When
            provided, pounce reimports the site on each reload cycle.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        reload_include=(".html", ".css", ".js", ".json"),
        reload_dirs=reload_dirs,
    )
    server = Server(config, site, app_path=app_path)
    server.run()
