"""Named-route registry with reverse path resolution.

Routes are registered by name during setup and may be added or replaced
at any time. Navigation looks a route up by name first and falls back to
matching every compiled pattern against a raw path.
"""

import logging
import re
import threading
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from waypoint._internal.types import NavigationCallback
from waypoint.config import RouterConfig
from waypoint.errors import RouteNotFound
from waypoint.host import NavigationHost, NavigationState, NullHost
from waypoint.routing.pattern import QUERY_MARKER, QUERY_NAME, WILDCARD_NAME, compile_path
from waypoint.routing.route import Candidate, Navigation, NavigationRequest, RouteEntry

logger = logging.getLogger("waypoint.router")

# Characters encodeURIComponent leaves unescaped
_URI_COMPONENT_SAFE = "-_.!~*'()"

_NAME_STRIP = re.compile(r"^\.|:|\.$")


def route_name_from_path(path: str) -> str:
    """Derive a default route name from a template.

    Examples::

        "/this/page/thing/:id" -> "this.page.thing.id"
        "/blog/:slug"          -> "blog.slug"
        "/"                    -> ""
    """
    return _NAME_STRIP.sub("", path.replace("/", "."))


def _to_text(value: object) -> str:
    """Stringify a param value the way a browser URL would spell it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _encode(value: object) -> str:
    return quote(_to_text(value), safe=_URI_COMPONENT_SAFE)


def _substitute(url: str, key: str, value: object) -> tuple[str, bool]:
    """Replace the first ``:key`` or ``*key`` placeholder in *url*.

    A placeholder ends at ``/``, ``?`` or the end of the template, so
    ``:id`` never matches inside ``:identifier``. Returns the new URL and
    whether a placeholder was found.
    """
    placeholder = r"[:*]" + re.escape(str(key))
    if key == WILDCARD_NAME:
        placeholder = rf"(?:{placeholder}|\*)"
    text = _to_text(value)
    url, count = re.subn(placeholder + r"(?=[/?]|$)", lambda _m: text, url, count=1)
    return url, count > 0


class Router:
    """Route registry and navigation dispatcher.

    Usage::

        router = Router(host=BrowserHost())
        router.add_routes({"/blog/:slug": show_post})
        router.go("blog.slug", {"slug": "hello-world", "ref": "rss"})
        # pushes /blog/hello-world?ref=rss

        router.go("/blog/hello-world")   # reverse resolution, no push

    The registry is guarded by a single lock. Callbacks run outside it, so
    they may register routes or navigate again.
    """

    __slots__ = ("_host", "_lock", "_routes", "_supports_history", "config")

    def __init__(
        self,
        host: NavigationHost | None = None,
        config: RouterConfig | None = None,
    ) -> None:
        self._host: NavigationHost = host if host is not None else NullHost()
        self._supports_history = bool(self._host.supports_history_api())
        self._routes: dict[str, RouteEntry] = {}
        self._lock = threading.Lock()
        self.config = config or RouterConfig()

    @property
    def supports_history(self) -> bool:
        return self._supports_history

    @property
    def routes(self) -> dict[str, RouteEntry]:
        """Snapshot of the registry, in registration order."""
        with self._lock:
            return dict(self._routes)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._routes

    def __len__(self) -> int:
        with self._lock:
            return len(self._routes)

    # -- Registration --

    def add_routes(self, routes: Mapping[str, NavigationCallback | None]) -> None:
        """Bulk add routes, naming each one after its path.

        ``/this/page/thing/:id`` is registered as ``this.page.thing.id``.
        """
        for path, callback in routes.items():
            self.add_route(route_name_from_path(path), path, callback)

    def add_route(
        self,
        name: str,
        path: str,
        callback: NavigationCallback | None = None,
    ) -> RouteEntry:
        """Register *path* under *name*, replacing any existing entry.

        Re-registration drops every callback attached to the old entry.
        Raises ``InvalidPatternError`` before touching the registry if the
        template does not compile.
        """
        entry = RouteEntry(name=name, path=path, pattern=compile_path(path))
        if callable(callback):
            entry.callbacks.append(callback)

        with self._lock:
            replaced = name in self._routes
            self._routes[name] = entry

        logger.debug(
            "%s route %r -> %r (weight %d)",
            "Replaced" if replaced else "Added",
            name,
            path,
            entry.pattern.weight,
        )
        return entry

    def on(self, name: str, callback: NavigationCallback) -> None:
        """Attach an observer to a registered route.

        Unknown names are ignored unless the router is strict.
        """
        with self._lock:
            entry = self._routes.get(name)
            if entry is not None:
                entry.callbacks.append(callback)
                return

        if self.config.strict:
            raise RouteNotFound(name, f"Cannot observe unknown route {name!r}")
        logger.debug("Ignoring observer for unknown route %r", name)

    # -- Navigation --

    def go(
        self,
        route_name_or_path: str,
        params: Mapping[str, Any] | None = None,
        update_url: bool = True,
    ) -> Navigation | None:
        """Navigate to a route by name, or by raw path.

        A registered name runs the route's callbacks and, when the host
        supports history, pushes the rebuilt URL. Anything else is resolved
        as a path and dispatched to the best match without a push.

        Returns ``None`` when nothing matched. Callback exceptions propagate.
        """
        request = NavigationRequest(route_name_or_path, dict(params or {}))

        with self._lock:
            entry = self._routes.get(request.route_name_or_path)
            callbacks = list(entry.callbacks) if entry is not None else []

        if entry is None:
            return self._go_from_path(request.route_name_or_path)

        for callback in callbacks:
            # Callbacks may return defaults for params the caller left out
            request.merge_defaults(callback(request.params))

        if not self._supports_history:
            return Navigation(route=entry.name, params=request.params)

        url = self._build_url(entry, request.params)
        pushed = update_url and entry.name != self.config.index_route
        if pushed:
            state = NavigationState(route=entry.name, params=dict(request.params))
            self._host.push_state(state, url)
            logger.debug("Pushed %r for route %r", url, entry.name)

        return Navigation(route=entry.name, params=request.params, url=url, pushed=pushed)

    def _go_from_path(self, path: str) -> Navigation | None:
        candidates = self.resolve_from_path(path)
        if not candidates:
            if self.config.strict:
                raise RouteNotFound(path)
            logger.debug("No route matches %r", path)
            return None

        best = candidates[0]
        logger.debug("Resolved %r to route %r with %r", path, best.name, best.params)
        # Never push history for a navigation that came from the URL
        return self.go(best.name, best.params, update_url=False)

    def resolve_from_path(self, path: str) -> list[Candidate]:
        """Return every route matching *path*, most specific first.

        The root path resolves to the index route when one is registered.
        Candidates are ordered by ``Candidate.rank`` descending; routes
        with an identical rank keep registration order.
        """
        with self._lock:
            entries = list(self._routes.values())

        if path == self.config.root_path:
            for entry in entries:
                if entry.name == self.config.index_route:
                    return [Candidate(name=entry.name, params={}, pattern=entry.pattern)]

        candidates: list[Candidate] = []
        for entry in entries:
            params = entry.pattern.match(path)
            if params is not None:
                candidates.append(Candidate(name=entry.name, params=params, pattern=entry.pattern))

        candidates.sort(key=lambda c: c.rank, reverse=True)
        return candidates

    # -- URL building --

    def url_for(self, name: str, params: Mapping[str, Any] | None = None) -> str:
        """Build the URL for a registered route without navigating.

        Raises ``RouteNotFound`` if *name* is not registered.
        """
        with self._lock:
            entry = self._routes.get(name)
        if entry is None:
            raise RouteNotFound(name)
        return self._build_url(entry, params or {})

    def _build_url(self, entry: RouteEntry, params: Mapping[str, Any]) -> str:
        url = entry.path
        query: list[str] = []

        has_query_marker = url.endswith(QUERY_MARKER)
        if has_query_marker:
            url = url[:-1]

        for key, value in params.items():
            if has_query_marker and key == QUERY_NAME:
                # The opaque query capture goes back verbatim
                if value:
                    query.insert(0, str(value))
                continue
            url, found = _substitute(url, key, value)
            if not found:
                query.append(f"{_encode(key)}={_encode(value)}")

        return f"{url}?{'&'.join(query)}" if query else url
