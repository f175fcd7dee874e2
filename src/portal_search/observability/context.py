"""Per-search log correlation state.

Each log line carries the active trace and span ids plus the collection being
searched. The state lives in a ``ContextVar`` so concurrent collection
searches inside ``global_search`` never see each other's collection name.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4


# asyncio.gather copies the current context into every child task
trace_context: ContextVar[dict | None] = ContextVar("trace_context", default=None)


def get_trace_context() -> dict:
    """Return the correlation state, minting fresh ids on first use."""
    ctx = trace_context.get()
    if not ctx or not ctx.get("trace_id"):
        ctx = {"trace_id": uuid4().hex, "span_id": uuid4().hex[:16]}
        trace_context.set(ctx)
    return ctx


def update_span_id(span_id: str) -> None:
    """Point log correlation at a newly opened span."""
    trace_context.set({**get_trace_context(), "span_id": span_id})


@contextmanager
def collection_scope(name: str) -> Iterator[dict]:
    """Tag log lines emitted inside the block with the searched collection.

    The previous state is restored on exit, including span ids changed by
    spans opened inside the block.
    """
    token = trace_context.set({**get_trace_context(), "collection": name})
    try:
        yield trace_context.get()
    finally:
        trace_context.reset(token)
