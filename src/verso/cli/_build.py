"""``verso build`` — run one build pass and exit.

Exits non-zero when the pass is aborted or any route fails, so the
command can gate a deploy.
"""

import argparse
import asyncio
import sys

from verso.cli._resolve import resolve_or_exit
from verso.errors import BuildError


def run_build(args: argparse.Namespace) -> None:
    """Build every page of the resolved site into its ``out_dir``."""
    site = resolve_or_exit(args)

    try:
        result = asyncio.run(site.rebuild())
    except BuildError as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        for failure in exc.failures:
            print(f"  {failure}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(
        f"Built {len(result.pages)} pages, "
        f"{len(result.artifacts) - len(result.pages)} assets "
        f"into {site.config.out_path} in {result.duration:.2f}s"
    )
    if result.failures:
        print(f"{len(result.failures)} route(s) failed:", file=sys.stderr)
        for failure in result.failures:
            print(f"  {failure}", file=sys.stderr)
        raise SystemExit(1)
