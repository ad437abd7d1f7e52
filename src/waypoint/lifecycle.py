"""Per-route lifecycle: ``init_route`` on the first visit, ``revisit_route`` after.

A lifecycle is registered once per route name in an explicit
``RouteRegistry`` owned by the application, and the registry hands back
an invoker suitable for ``Router.add_route()``::

    class Inbox(RouteLifecycle):
        def init_route(self, params):
            self.view = build_inbox(params)

        def revisit_route(self, params):
            self.view.refresh(params)

    lifecycles = RouteRegistry()
    router.add_route("inbox", "/inbox/:folder", lifecycles.route("inbox", Inbox()))
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

from waypoint.errors import RouteInitializationError

logger = logging.getLogger("waypoint.lifecycle")


class RouteLifecycle:
    """Base class for route lifecycles. Override either hook, or neither."""

    initialized: bool = False

    def init_route(self, params: Any = None) -> None:
        """Called on the first visit to the route."""

    def revisit_route(self, params: Any = None) -> None:
        """Called on every visit after the first."""


class RouteRegistry:
    """Holds one ``RouteLifecycle`` per route name.

    Replaces a process-wide singleton table: create one per application and
    pass it to whatever registers routes.
    """

    __slots__ = ("_lifecycles", "_lock")

    def __init__(self) -> None:
        self._lifecycles: dict[str, RouteLifecycle] = {}
        self._lock = threading.Lock()

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._lifecycles

    def get(self, name: str) -> RouteLifecycle | None:
        with self._lock:
            return self._lifecycles.get(name)

    def route(
        self,
        name: str,
        lifecycle: RouteLifecycle | None = None,
    ) -> Callable[[Any], None]:
        """Return the invoker for *name*, registering *lifecycle* on first use.

        Later calls for the same name reuse the stored lifecycle and ignore
        *lifecycle*. Neither registering nor re-fetching calls any hook.
        """
        with self._lock:
            instance = self._lifecycles.get(name)
            if instance is None:
                instance = lifecycle if lifecycle is not None else RouteLifecycle()
                self._lifecycles[name] = instance

        def invoke(params: Any = None) -> None:
            if instance.initialized:
                instance.revisit_route(params)
                return
            try:
                instance.init_route(params)
            except Exception as exc:
                logger.debug("init_route failed for %r", name, exc_info=True)
                raise RouteInitializationError(name, str(exc)) from exc
            instance.initialized = True

        return invoke
