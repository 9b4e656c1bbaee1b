"""Site import resolution — resolves ``"module:attribute"`` strings to Sites.

Shared utility used by every ``verso`` subcommand to locate a Site
from a user-supplied import string.
"""

import argparse
import importlib
import sys

from verso.errors import VersoError
from verso.site import Site


def resolve_site(import_string: str) -> Site:
    """Resolve an import string to a verso Site instance.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"site"`` (e.g. ``"mysite"`` resolves to
    ``mysite.site``).

    Supports factory functions: if the resolved object is callable and
    not a Site instance, it will be called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a verso ``Site``.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "site"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Site):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Site):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a verso.Site instance"
        raise TypeError(msg)

    return obj


def resolve_or_exit(args: argparse.Namespace) -> Site:
    """``resolve_site(args.site)``, exiting with status 1 on failure."""
    try:
        return resolve_site(args.site)
    except (ModuleNotFoundError, AttributeError, TypeError, VersoError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
