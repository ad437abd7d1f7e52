"""Router configuration.

RouterConfig is a frozen dataclass, immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(strict=True)
    """

    # Raise RouteNotFound instead of silently ignoring unknown names/paths
    strict: bool = False

    # Route name the root path resolves to; navigating to it never pushes history
    index_route: str = "index"
    root_path: str = "/"
