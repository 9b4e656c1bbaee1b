"""Invoke helpers — call sync or async source callables uniformly.

Page, layout, and shell ``render`` functions can be ``def`` or
``async def``. Any code that calls user-provided render functions
must handle both cases, and inject only the keyword arguments the
function declares.

Usage::

    from verso._internal.invoke import invoke, invoke_with

    result = await invoke(handler, *args, **kwargs)
    result = await invoke_with(render, pathname="/about", children=html)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine.

    Works with both sync and async callables::

        # sync: returns immediately
        def render():
            return "<h1>About</h1>"

        # async: awaited
        async def render(pathname):
            data = await fetch_data(pathname)
            return f"<h1>{data.title}</h1>"
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


async def invoke_with(handler: Any, **available: Any) -> Any:
    """Call *handler* with the subset of *available* its signature names.

    ``**kwargs`` parameters receive everything::

        def render(children):              # receives children only
        def render(children, pathname):    # receives both
        def render(**props):               # receives both
    """
    sig = inspect.signature(handler)
    params = sig.parameters.values()
    if any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params):
        return await invoke(handler, **available)

    kwargs = {name: value for name, value in available.items() if name in sig.parameters}
    return await invoke(handler, **kwargs)
