"""Waypoint exception hierarchy.

Shared across the pattern compiler, Router, and route lifecycle so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


@dataclass(frozen=True, slots=True)
class InvalidPatternError(WaypointError, ValueError):
    """A path template could not be compiled.

    Raised synchronously by ``compile_path()`` and therefore by
    ``Router.add_route()``. The registry is untouched when this is raised.
    """

    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.reason}: {self.path!r}"


class RouteInitializationError(WaypointError):
    """A route's ``init_route()`` raised on first visit.

    The route stays uninitialized, so the next visit retries ``init_route()``.
    """

    def __init__(self, route: str, message: str) -> None:
        self.route = route
        self.message = message
        super().__init__(f'Unable to initialize route "{route}": {message}')


class RouteNotFound(WaypointError, LookupError):  # noqa: N818
    """No registered route matched a name or path.

    Only raised by ``Router.url_for()`` and by a Router built with
    ``RouterConfig(strict=True)``. The default Router treats a miss as a no-op.
    """

    def __init__(self, target: str, detail: str = "") -> None:
        self.target = target
        super().__init__(detail or f"No route matches {target!r}")
