"""ASGI handler — translates ASGI scope/messages to verso types.

The only component that touches raw ASGI directly. Converts the scope
to a Request, runs the request hooks in order over a shared
``Exchange``, and sends the resulting response back through ASGI
``send()``.
"""

import logging
from collections.abc import Awaitable, Callable

from verso._internal.asgi import Receive, Scope, Send
from verso._internal.invoke import invoke
from verso.errors import HTTPError, NotFound
from verso.http.exchange import Exchange
from verso.http.request import Request
from verso.http.response import AnyResponse, Response, StreamingResponse
from verso.server.sender import send_response, send_streaming_response

logger = logging.getLogger("verso.server")

# Sync or async; receives the shared exchange
type RequestHook = Callable[[Exchange], Awaitable[None] | None]


def _error_response(exc: HTTPError) -> Response:
    return Response(
        body=exc.detail or str(exc.status),
        status=exc.status,
        content_type="text/plain; charset=utf-8",
        headers=exc.headers,
    )


async def handle_request(
    scope: Scope,
    receive: Receive,  # noqa: ARG001 — request bodies are never read
    send: Send,
    *,
    hooks: tuple[RequestHook, ...],
) -> None:
    """Process a single HTTP request through the hook pipeline.

    Every hook sees the same exchange, in registration order. A hook
    claims the request by setting a response; later hooks can check
    ``exchange.is_response_set``. When no hook responds the result is
    a plain 404.
    """
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)
    exchange = Exchange(request)

    response: AnyResponse
    try:
        for hook in hooks:
            await invoke(hook, exchange)
        if exchange.response is None:
            raise NotFound()
        response = exchange.response
    except HTTPError as exc:
        response = _error_response(exc)
    except Exception:
        logger.exception("Unhandled error serving %s %s", request.method, request.path)
        response = Response(
            body="Internal Server Error",
            status=500,
            content_type="text/plain; charset=utf-8",
        )

    if exchange.log_enabled:
        logger.info("%s %s %d", request.method, request.url, response.status)

    head = request.method == "HEAD"
    if isinstance(response, StreamingResponse):
        await send_streaming_response(response, send, head=head)
    else:
        await send_response(response, send, head=head)

