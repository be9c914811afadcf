"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(strict_patterns=True, default_path="/home")
    """

    # Resolution
    default_path: str = "/"  # Used when a host supplies no path (bare CLI call, empty href)
    strict_patterns: bool = False  # Validate patterns at registration instead of degrading

    # HTTP adapters
    max_body_size: int = 1024 * 1024  # 1 MB
    json_indent: int | None = 2

    # Error responses carry the failure detail when True
    debug: bool = False
