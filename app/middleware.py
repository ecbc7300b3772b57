import logging
import time
from contextvars import ContextVar

from sqlalchemy import event
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Per-request context variable
# ---------------------------------------------------------------------------

query_count_var: ContextVar[int] = ContextVar("query_count", default=0)


def install_query_counter(engine) -> None:
    """
    Register a ``before_cursor_execute`` listener on *engine* that bumps
    the per-request ``query_count_var`` for every SQL statement, sequence
    reads and resets included.

    Must be called once per engine (production engine in ``database.py``,
    test engine in ``conftest.py``).
    """
    sync_engine = engine.sync_engine

    @event.listens_for(sync_engine, "before_cursor_execute")
    def _count_query(conn, cursor, statement, parameters, context, executemany):
        query_count_var.set(query_count_var.get() + 1)


# ---------------------------------------------------------------------------
# Middleware (pure ASGI, avoids BaseHTTPMiddleware ContextVar isolation)
# ---------------------------------------------------------------------------

class RequestLoggingMiddleware:
    """
    Pure ASGI middleware that logs one line per HTTP request and adds two
    diagnostic response headers:

    - ``X-Response-Time-Ms``: wall-clock time until the response started.
    - ``X-Query-Count``: SQL statements executed while handling the request.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        query_count_var.set(0)
        start = time.perf_counter()

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                queries = query_count_var.get()
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", str(duration_ms).encode()))
                headers.append((b"x-query-count", str(queries).encode()))
                message["headers"] = headers
                logger.info(
                    "%s %s -> %d (%.2f ms, %d queries)",
                    scope["method"], scope["path"], message["status"], duration_ms, queries,
                )
            await send(message)

        await self.app(scope, receive, send_wrapper)
