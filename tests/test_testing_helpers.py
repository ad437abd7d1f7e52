"""Tests for waypoint.testing: MemoryHost and history assertion helpers."""

import pytest

from waypoint.host import NavigationState
from waypoint.testing import HistoryEntry, MemoryHost, assert_no_push, assert_pushed


class TestMemoryHost:
    def test_history_supported_by_default(self) -> None:
        assert MemoryHost().supports_history_api() is True

    def test_history_disabled(self) -> None:
        assert MemoryHost(history=False).supports_history_api() is False

    def test_records_pushes(self) -> None:
        host = MemoryHost()
        state = NavigationState(route="home", params={"a": 1})
        host.push_state(state, "/home?a=1")
        assert host.entries == [HistoryEntry(state=state, url="/home?a=1")]
        assert host.current_url == "/home?a=1"
        assert host.urls == ["/home?a=1"]

    def test_current_url_empty(self) -> None:
        assert MemoryHost().current_url is None

    def test_not_collected_by_pytest(self) -> None:
        assert MemoryHost.__test__ is False

    def test_class_docstring(self) -> None:
        assert MemoryHost.__doc__ is not None
        assert MemoryHost.__doc__.startswith("Navigation host backed by a list.")


class TestAssertPushed:
    def test_passes(self) -> None:
        host = MemoryHost()
        host.push_state(NavigationState(route="home", params={"a": 1}), "/home")
        assert_pushed(host, "/home", route="home", params={"a": 1})

    def test_nothing_pushed(self) -> None:
        with pytest.raises(AssertionError, match="nothing was pushed"):
            assert_pushed(MemoryHost(), "/home")

    def test_wrong_url(self) -> None:
        host = MemoryHost()
        host.push_state(NavigationState(route="home"), "/home")
        with pytest.raises(AssertionError, match="Expected last push"):
            assert_pushed(host, "/other")

    def test_wrong_route(self) -> None:
        host = MemoryHost()
        host.push_state(NavigationState(route="home"), "/home")
        with pytest.raises(AssertionError, match="Expected route"):
            assert_pushed(host, "/home", route="about")

    def test_wrong_params(self) -> None:
        host = MemoryHost()
        host.push_state(NavigationState(route="home"), "/home")
        with pytest.raises(AssertionError, match="Expected params"):
            assert_pushed(host, "/home", params={"a": 1})


class TestAssertNoPush:
    def test_passes(self) -> None:
        assert_no_push(MemoryHost())

    def test_fails(self) -> None:
        host = MemoryHost()
        host.push_state(NavigationState(route="home"), "/home")
        with pytest.raises(AssertionError, match="Expected no pushes"):
            assert_no_push(host)
