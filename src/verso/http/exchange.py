"""Per-request exchange between the ASGI handler and request hooks.

The exchange carries the immutable ``Request`` together with the one
mutable slot every hook shares: the response. Upstream handlers run
first and may claim the request by setting a response; the built-page
hook skips any exchange that already has one.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass

from verso.http.request import Request
from verso.http.response import AnyResponse, Response, StreamingResponse


@dataclass(slots=True)
class Exchange:
    """A request plus the response produced for it so far."""

    request: Request
    response: AnyResponse | None = None
    log_enabled: bool = True

    @property
    def is_response_set(self) -> bool:
        """True once any hook has produced a response."""
        return self.response is not None

    def set_response(
        self,
        body: str | bytes | AsyncIterator[bytes],
        *,
        content_type: str,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Set the response body and its ``Content-Type``.

        Async iterators become a ``StreamingResponse``; strings and
        bytes become a whole-buffer ``Response``.
        """
        extra = tuple((headers or {}).items())
        if isinstance(body, (str, bytes)):
            self.response = Response(
                body=body, status=status, content_type=content_type, headers=extra
            )
        else:
            self.response = StreamingResponse(
                chunks=body, status=status, content_type=content_type, headers=extra
            )

    def prevent_log(self) -> None:
        """Suppress the access log line for this request."""
        self.log_enabled = False
