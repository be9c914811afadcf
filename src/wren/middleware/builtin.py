"""Built-in middleware: request timing and parameter injection.

Both follow the plain-function protocol::

    router.use(request_timer)
    router.use("/admin/*rest", inject_params(section="admin"))
"""

import time
from typing import Any

from wren.context import DispatchContext
from wren.middleware.protocol import Middleware, Next


def request_timer(context: DispatchContext, next: Next) -> None:
    """Record when the dispatch entered the chain in ``context.state["time"]``.

    The value is wall-clock milliseconds since the epoch.
    """
    context.state["time"] = int(time.time() * 1000)
    next()


def inject_params(**values: Any) -> Middleware:
    """Build a middleware that merges fixed *values* into the dispatch params.

    Injected values overwrite parameters from the URL. A parsed request
    body still wins, since it is folded in after the chain.
    """

    def inject(context: DispatchContext, next: Next) -> None:
        context.params.update(values)
        next()

    return inject
