"""Shared type aliases used across wren modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Flat parameter mapping from one source (or the merged result). Values are
# strings from paths and queries, True for bare CLI flags, or whatever a
# parsed body holds
ParamSet: TypeAlias = dict[str, Any]

# Route handler: receives the final merged ParamSet
Handler: TypeAlias = Callable[[ParamSet], Any]
