"""Locate the Router a ``wren`` command operates on.

``"pkg.module:name"`` names a module attribute; a bare ``"pkg.module"``
means ``pkg.module:router``. The attribute may be a Router or a
zero-argument function that builds one.
"""

import importlib

from wren.errors import ConfigurationError
from wren.router import Router

DEFAULT_ATTRIBUTE = "router"


def resolve_router(target: str) -> Router:
    """Return the Router named by *target*.

    Every failure (module not importable, attribute missing, builder
    raising, wrong type) is reported as ``ConfigurationError`` with the
    target in the message.
    """
    module_name, _, attribute = target.partition(":")
    attribute = attribute or DEFAULT_ATTRIBUTE

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"Cannot import {module_name!r} for {target!r}: {exc}"
        raise ConfigurationError(msg) from exc

    found = getattr(module, attribute, None)
    if found is None:
        msg = f"Module {module_name!r} has no attribute {attribute!r}."
        raise ConfigurationError(msg)

    if not isinstance(found, Router) and callable(found):
        try:
            found = found()
        except Exception as exc:
            msg = f"Building the router from {target!r} failed: {exc}"
            raise ConfigurationError(msg) from exc

    if not isinstance(found, Router):
        msg = f"{target!r} is a {type(found).__name__}, not a wren.Router."
        raise ConfigurationError(msg)
    return found
