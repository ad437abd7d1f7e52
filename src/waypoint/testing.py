"""In-memory navigation host for testing waypoint routers.

Records every pushed state the same way a browser history stack would.
No browser involved.
"""

from dataclasses import dataclass
from typing import Any

from waypoint.host import NavigationState


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One pushed history entry."""

    state: NavigationState
    url: str


class MemoryHost:
    """Navigation host backed by a list.

    Usage::

        host = MemoryHost()
        router = Router(host=host)
        router.add_routes({"/blog/:slug": show_post})
        router.go("blog.slug", {"slug": "hello"})
        assert host.current_url == "/blog/hello"
    """

    __test__ = False  # Tell pytest this is not a test class

    def __init__(self, *, history: bool = True) -> None:
        self._history = history
        self.entries: list[HistoryEntry] = []

    def supports_history_api(self) -> bool:
        return self._history

    def push_state(self, state: NavigationState, url: str) -> None:
        self.entries.append(HistoryEntry(state=state, url=url))

    @property
    def current_url(self) -> str | None:
        return self.entries[-1].url if self.entries else None

    @property
    def urls(self) -> list[str]:
        return [entry.url for entry in self.entries]


# ---------------------------------------------------------------------------
# History assertion helpers
# ---------------------------------------------------------------------------


def assert_pushed(
    host: MemoryHost,
    url: str,
    *,
    route: str | None = None,
    params: dict[str, Any] | None = None,
) -> None:
    """Assert the most recent push went to *url*, optionally checking its state."""
    assert host.entries, f"Expected a push to {url!r}, but nothing was pushed"
    last = host.entries[-1]
    assert last.url == url, f"Expected last push to {url!r}, got {last.url!r}"
    if route is not None:
        assert last.state.route == route, (
            f"Expected route {route!r}, got {last.state.route!r}"
        )
    if params is not None:
        assert last.state.params == params, (
            f"Expected params {params!r}, got {last.state.params!r}"
        )


def assert_no_push(host: MemoryHost) -> None:
    """Assert nothing has been pushed to *host*."""
    assert not host.entries, f"Expected no pushes, got {host.urls!r}"
