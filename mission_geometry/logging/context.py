"""Context variables for operation-scoped logging data.

Hosts that edit several missions set the mission id once per operation and
every log line emitted by the library carries it.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

_extra_context: ContextVar[dict[str, Any] | None] = ContextVar("extra_context", default=None)


def get_correlation_id() -> str:
    """Get the current correlation ID."""
    return correlation_id.get()


def set_correlation_id(value: str) -> None:
    """Set the correlation ID for the current context.

    Args:
        value: The correlation ID.
    """
    correlation_id.set(value)


def generate_correlation_id() -> str:
    """Generate and set a new correlation ID.

    Returns:
        The generated correlation ID.
    """
    new_id = str(uuid4())
    correlation_id.set(new_id)
    return new_id


def get_extra_context() -> dict[str, Any]:
    """Get a copy of the current extra context."""
    context = _extra_context.get()
    if context is None:
        return {}
    return context.copy()


def set_extra_context(**kwargs: Any) -> None:
    """Set additional context fields to include in all log messages.

    Args:
        **kwargs: Key-value pairs to include in log messages.
    """
    current = _extra_context.get()
    current = {} if current is None else current.copy()
    current.update(kwargs)
    _extra_context.set(current)


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Temporarily add fields to the extra context.

    The previous context is restored on exit, including when the block raises.

    Args:
        **kwargs: Key-value pairs to include in log messages inside the block.
    """
    current = _extra_context.get()
    merged = {} if current is None else current.copy()
    merged.update(kwargs)
    token = _extra_context.set(merged)
    try:
        yield
    finally:
        _extra_context.reset(token)


def clear_context() -> None:
    """Clear all context (correlation ID and extra context)."""
    correlation_id.set("")
    _extra_context.set(None)
