"""``verso routes`` — list page routes with their layout chains.

Prints PATH, SOURCE, and the layouts wrapping each page, root-first.
"""

import argparse
from pathlib import Path

from verso.cli._resolve import resolve_or_exit
from verso.pages.layouts import layouts_for


def _relative(path: Path, root: Path) -> str:
    if path.is_relative_to(root):
        return path.relative_to(root).as_posix()
    return str(path)


def run_routes(args: argparse.Namespace) -> None:
    """Print the page routes of the resolved site."""
    site = resolve_or_exit(args)
    table = site.state.source_table
    plan = site.build_config()

    if not plan.entrypoints:
        print("No page routes found.")
        return

    rows: list[tuple[str, str, str]] = []
    for entry in plan.entrypoints:
        chain = layouts_for(table, entry.pathname)
        layouts = " > ".join(_relative(layout.path, table.root) for layout in chain) or "-"
        rows.append((entry.pathname, _relative(entry.path, table.root), layouts))

    # Column widths
    max_path = max(max(len(r[0]) for r in rows), 4)  # "PATH" header
    max_source = max(max(len(r[1]) for r in rows), 6)  # "SOURCE" header

    fmt = f"{{:<{max_path}}}  {{:<{max_source}}}  {{}}"
    print(fmt.format("PATH", "SOURCE", "LAYOUTS"))
    sep_len = max_path + max_source + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for pathname, source, layouts in rows:
        print(fmt.format(pathname, source, layouts))
