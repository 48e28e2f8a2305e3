"""
Fields carried by the execution context.

Fields attached with context_fields are prepended to every entry logged in
that context, by any logger. They live in a contextvars.ContextVar, so they
follow asyncio tasks and threads started with a copied context.

Example:
    >>> with context_fields(F("request_id", "req-456")):
    ...     handle(request)   # every entry logged inside carries request_id
"""

import contextvars
from contextlib import contextmanager
from typing import Iterator, Tuple, Union

from logtree.value.fields import F, M

_context_fields: contextvars.ContextVar = contextvars.ContextVar(
    "logtree_context_fields", default=M()
)


def current_fields() -> M:
    """The fields attached to the current context."""
    return _context_fields.get()


@contextmanager
def context_fields(*fields: Union[F, Tuple[str, object]]) -> Iterator[M]:
    """
    Attach fields to the current context for the duration of the block.

    Nested blocks append to the fields of the enclosing ones.

    Yields:
        M: All fields attached inside the block
    """
    combined = current_fields().combine(M(*fields))
    token = _context_fields.set(combined)
    try:
        yield combined
    finally:
        _context_fields.reset(token)
