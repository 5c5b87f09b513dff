"""Context variable for the active file abstract layer.

Lets pipeline code deep in a build reach the layer of the current stage
without passing it through every call.
"""

import contextvars
from contextlib import contextmanager
from typing import Any, Iterator

# Context variable holding the current file abstract layer
current_fal: contextvars.ContextVar[Any] = contextvars.ContextVar(
    "docfal_current_fal", default=None
)


def get_current_fal() -> Any:
    """Return the active layer.

    Raises:
        LookupError: If no layer is active in this context.
    """
    fal = current_fal.get()
    if fal is None:
        raise LookupError("No file abstract layer is active; wrap the call in use_fal()")
    return fal


@contextmanager
def use_fal(fal: Any) -> Iterator[Any]:
    """Make ``fal`` the active layer for the duration of the block.

    Nested blocks restore the outer layer on exit.

    Example::

        with use_fal(stage1):
            render_pages()   # calls get_current_fal() internally
    """
    token = current_fal.set(fal)
    try:
        yield fal
    finally:
        current_fal.reset(token)
