"""Compose page content inside its layouts and the shell.

The layout chain is root-first, but wrapping happens inside-out: the
layout nearest the page is applied first and the root layout last, so
that the root ends up outermost. The shell is applied once, around
everything.
"""

from collections.abc import Sequence
from typing import Any

from verso.pages.types import Wrapper


async def compose(
    page_content: Any,
    layouts: Sequence[Wrapper],
    shell: Wrapper,
    *,
    pathname: str,
) -> Any:
    """Wrap *page_content* in *layouts* (root-first) and then *shell*.

    Args:
        page_content: The page's own rendered content.
        layouts: Loaded layouts ordered from root (outermost) to
            deepest (closest to the page).
        shell: The site shell, applied exactly once.
        pathname: The route being composed, passed to every wrapper.

    Returns:
        ``shell(root(...(leaf(page_content))))``.
    """
    content = page_content
    # Leaf to root: innermost wrapper first
    for layout in reversed(layouts):
        content = await layout.wrap(content, pathname=pathname)
    return await shell.wrap(content, pathname=pathname)
