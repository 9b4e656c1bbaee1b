"""Render a composed content tree to a markup string.

Page, layout, and shell functions return *nodes*:

- ``str`` — trusted markup, emitted as-is
- objects with ``__html__()`` (kida ``Markup``) — their markup
- ``bytes`` — UTF-8 markup
- ``int`` / ``float`` — their text form
- ``None`` / ``False`` — nothing
- lists, tuples, and other iterables of nodes — concatenated in order

Anything else raises :class:`~verso.errors.RenderError`.
"""

from collections.abc import Iterable
from typing import Any

from verso.errors import RenderError


def render_to_string(node: Any) -> str:
    """Flatten *node* into a single markup string."""
    parts: list[str] = []
    _render_into(node, parts)
    return "".join(parts)


def _render_into(node: Any, parts: list[str]) -> None:
    if node is None or node is False or node is True:
        return
    html = getattr(node, "__html__", None)
    if html is not None:
        parts.append(html())
        return
    if isinstance(node, str):
        parts.append(node)
        return
    if isinstance(node, bytes):
        parts.append(node.decode("utf-8"))
        return
    if isinstance(node, (int, float)):
        parts.append(str(node))
        return
    if isinstance(node, Iterable) and not isinstance(node, dict):
        for child in node:
            _render_into(child, parts)
        return
    msg = f"Cannot render {type(node).__name__!r} to markup"
    raise RenderError(msg)
