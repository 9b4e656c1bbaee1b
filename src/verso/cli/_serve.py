"""``verso serve`` — build on startup and serve with pounce."""

import argparse

from verso.cli._resolve import resolve_or_exit


def run_serve(args: argparse.Namespace) -> None:
    """Start the server for the resolved site.

    ``--host``/``--port`` override the site config. When the site
    config enables ``debug``, pounce reloads on source changes and
    reimports the site from the same import string.
    """
    site = resolve_or_exit(args)

    host = args.host or site.config.host
    port = args.port or site.config.port

    from verso.server.dev import run_dev_server

    run_dev_server(
        site,
        host,
        port,
        reload=site.config.debug,
        reload_dirs=(str(site.config.src_path),),
        app_path=args.site,
    )
