"""Verso CLI — build, serve, and inspect routes.

Entry point registered as ``verso`` in ``pyproject.toml``::

    [project.scripts]
    verso = "verso.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``verso`` command."""
    parser = argparse.ArgumentParser(
        prog="verso",
        description="Verso — pre-rendered pages from filesystem-routed page modules.",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- verso build ------------------------------------------------------
    build_parser = subparsers.add_parser("build", help="Build every page once")
    build_parser.add_argument("site", help="Import string (e.g. mysite:site)")

    # -- verso serve ------------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Build and serve the site")
    serve_parser.add_argument("site", help="Import string (e.g. mysite:site)")
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    # -- verso routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List page routes and layouts")
    routes_parser.add_argument("site", help="Import string (e.g. mysite:site)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    if args.command == "build":
        from verso.cli._build import run_build

        run_build(args)
    elif args.command == "serve":
        from verso.cli._serve import run_serve

        run_serve(args)
    elif args.command == "routes":
        from verso.cli._routes import run_routes

        run_routes(args)
