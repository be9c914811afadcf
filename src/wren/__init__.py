"""Wren — one URL router for browsers, servers, and the command line.

Resolves paths like ``/profile/1`` to route patterns such as
``/profile/:id`` and calls the matching handler with the merged
parameters. Middleware runs in front of every handler.

Basic usage::

    from wren import Router

    router = Router({
        "/profile": list_profiles,
        "/profile/:id": show_profile,
        "/profile/:id/user/:uId": show_user,
        "*": fallback,
    })

    router.dispatch("/profile/42")   # show_profile({"id": "42"})

Hosts (``wren.adapters``)::

    ASGIAdapter(router)              # HTTP servers
    cli.run(router)                  # python prog.py /profile/1 --foo=bar
    Navigator(router, url).href(p)   # browser-style navigation
    handle_event(router, event)      # serverless proxy events
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DispatchContext",
    "DispatchError",
    "DispatchOutcome",
    "Halted",
    "HostRequest",
    "Middleware",
    "MiddlewareError",
    "Next",
    "NotFound",
    "OutcomeKind",
    "Router",
    "RouterConfig",
    "WrenError",
    "compile_pattern",
    "merge_params",
]

# public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "wren.errors",
    "DispatchContext": "wren.context",
    "DispatchError": "wren.errors",
    "DispatchOutcome": "wren.dispatch",
    "Halted": "wren.errors",
    "HostRequest": "wren.context",
    "Middleware": "wren.middleware.protocol",
    "MiddlewareError": "wren.errors",
    "Next": "wren.middleware.protocol",
    "NotFound": "wren.errors",
    "OutcomeKind": "wren.dispatch",
    "Router": "wren.router",
    "RouterConfig": "wren.config",
    "WrenError": "wren.errors",
    "compile_pattern": "wren.routing.pattern",
    "merge_params": "wren.routing.params",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
