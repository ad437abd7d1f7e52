"""Waypoint: named path routing for client-side navigation.

Compiles path templates like ``/user/:id/edit`` into matchers, resolves
raw paths back to the most specific route, and rebuilds URLs from a route
name plus parameters.

Basic usage::

    from waypoint import Router
    from waypoint.testing import MemoryHost

    router = Router(host=MemoryHost())
    router.add_routes({"/blog/:slug": lambda params: print(params)})

    router.go("blog.slug", {"slug": "hello-world", "ref": "rss"})
    # pushes /blog/hello-world?ref=rss

    router.go("/blog/hello-world")
    # resolves to blog.slug with {"slug": "hello-world"}
"""

import importlib

__version__ = "0.1.0"
__all__ = [
    "Candidate",
    "InvalidPatternError",
    "Navigation",
    "NavigationHost",
    "NavigationState",
    "NullHost",
    "RouteEntry",
    "RouteInitializationError",
    "RouteLifecycle",
    "RouteNotFound",
    "RoutePattern",
    "RouteRegistry",
    "Router",
    "RouterConfig",
    "WaypointError",
    "compile_path",
    "route_name_from_path",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "Candidate": "waypoint.routing.route",
    "InvalidPatternError": "waypoint.errors",
    "Navigation": "waypoint.routing.route",
    "NavigationHost": "waypoint.host",
    "NavigationState": "waypoint.host",
    "NullHost": "waypoint.host",
    "RouteEntry": "waypoint.routing.route",
    "RouteInitializationError": "waypoint.errors",
    "RouteLifecycle": "waypoint.lifecycle",
    "RouteNotFound": "waypoint.errors",
    "RoutePattern": "waypoint.routing.pattern",
    "RouteRegistry": "waypoint.lifecycle",
    "Router": "waypoint.routing.router",
    "RouterConfig": "waypoint.config",
    "WaypointError": "waypoint.errors",
    "compile_path": "waypoint.routing.pattern",
    "route_name_from_path": "waypoint.routing.router",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is not None:
        return getattr(importlib.import_module(module_path), name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
