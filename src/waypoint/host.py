"""Navigation host protocol.

A host is whatever owns the URL bar: a browser history bridge, a desktop
shell, or ``waypoint.testing.MemoryHost`` in tests. Any object matching::

    class BrowserHost:
        def supports_history_api(self) -> bool: ...
        def push_state(self, state: NavigationState, url: str) -> None: ...

No base class required. The Router checks the shape, not the lineage.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class NavigationState:
    """The opaque state entry pushed alongside a URL."""

    route: str
    params: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class NavigationHost(Protocol):
    """Protocol for the external history/URL integration."""

    def supports_history_api(self) -> bool: ...

    def push_state(self, state: NavigationState, url: str) -> None: ...


class NullHost:
    """Host without history support. Used when a Router is built without one."""

    __slots__ = ()

    def supports_history_api(self) -> bool:
        return False

    def push_state(self, state: NavigationState, url: str) -> None:
        return None
