"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    def my_mw(context: DispatchContext, next: Next) -> None: ...

No base class required. The chain checks the shape, not the lineage.

``next()`` continues with the following entry (or the route handler
after the last one). ``next(err)`` with any value other than None stops
the dispatch: no later middleware and no handler runs.
"""

from collections.abc import Callable
from typing import Protocol, TypeAlias

from wren.context import DispatchContext

# The continuation handed to each middleware
Next: TypeAlias = Callable[..., None]


class Middleware(Protocol):
    """Protocol for wren middleware.

    Accepts both functions and callable objects::

        # Function middleware
        def require_user(context: DispatchContext, next: Next) -> None:
            if "user" not in context.params:
                next(PermissionError("login required"))
                return
            next()

        # Class middleware
        class Stamp:
            def __call__(self, context: DispatchContext, next: Next) -> None:
                ...
    """

    def __call__(self, context: DispatchContext, next: Next) -> None: ...
