"""RouteEntry, NavigationRequest, Candidate, and Navigation dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from waypoint._internal.types import NavigationCallback, Params
from waypoint.routing.pattern import QUERY_NAME, RoutePattern


@dataclass(slots=True)
class RouteEntry:
    """A registered route. Owned by the Router, one per name.

    ``callbacks`` is append-only; re-registering the name replaces the
    whole entry rather than extending it.
    """

    name: str
    path: str
    pattern: RoutePattern
    callbacks: list[NavigationCallback] = field(default_factory=list)


@dataclass(slots=True)
class NavigationRequest:
    """One ``Router.go()`` call. ``params`` grows as callbacks add defaults."""

    route_name_or_path: str
    params: Params = field(default_factory=dict)

    def merge_defaults(self, extra: object) -> None:
        """Fill keys missing from ``params`` with values from *extra*.

        Existing values win. Non-mapping return values are ignored.
        """
        if not isinstance(extra, Mapping):
            return
        for key, value in extra.items():
            self.params.setdefault(key, value)


@dataclass(frozen=True, slots=True)
class Candidate:
    """A route whose pattern matched a raw path during reverse resolution."""

    name: str
    params: dict[str, str]
    pattern: RoutePattern

    @property
    def weight(self) -> int:
        return self.pattern.weight

    @property
    def rank(self) -> tuple[tuple[int, ...], bool, int]:
        """Ordering key: segment shape, then an exact query fit, then weight.

        A template with a query marker matched without a query string ranks
        below an equally shaped template that has no marker.
        """
        exact = not self.pattern.has_query_marker or QUERY_NAME in self.params
        return self.pattern.specificity, exact, self.pattern.weight


@dataclass(frozen=True, slots=True)
class Navigation:
    """Result of a dispatched navigation.

    ``url`` is ``None`` when the host has no history support.
    ``pushed`` is True when a history entry was pushed for this navigation.
    """

    route: str
    params: Params
    url: str | None = None
    pushed: bool = False
