"""Tests for waypoint.lifecycle: first-visit init, later-visit revisit."""

from typing import Any

import pytest

from waypoint.errors import RouteInitializationError
from waypoint.lifecycle import RouteLifecycle, RouteRegistry
from waypoint.routing.router import Router
from waypoint.testing import MemoryHost


class Spy(RouteLifecycle):
    def __init__(self, fail_times: int = 0) -> None:
        self.init_calls: list[Any] = []
        self.revisit_calls: list[Any] = []
        self.fail_times = fail_times

    def init_route(self, params: Any = None) -> None:
        self.init_calls.append(params)
        if self.fail_times:
            self.fail_times -= 1
            raise RuntimeError("database offline")

    def revisit_route(self, params: Any = None) -> None:
        self.revisit_calls.append(params)


class TestRouteRegistry:
    def test_registers_lifecycle(self) -> None:
        registry = RouteRegistry()
        spy = Spy()
        invoke = registry.route("this-is-route", spy)
        assert callable(invoke)
        assert "this-is-route" in registry
        assert registry.get("this-is-route") is spy

    def test_default_lifecycle(self) -> None:
        registry = RouteRegistry()
        registry.route("plain")
        lifecycle = registry.get("plain")
        assert isinstance(lifecycle, RouteLifecycle)
        assert lifecycle.initialized is False

    def test_get_unknown(self) -> None:
        assert RouteRegistry().get("missing") is None

    def test_no_hooks_on_creation_or_refetch(self) -> None:
        registry = RouteRegistry()
        spy = Spy()
        registry.route("another-route", spy)
        registry.route("another-route")
        assert spy.init_calls == []
        assert spy.revisit_calls == []

    def test_refetch_reuses_first_lifecycle(self) -> None:
        registry = RouteRegistry()
        first = Spy()
        registry.route("route", first)
        registry.route("route", Spy())
        assert registry.get("route") is first

    def test_registries_are_independent(self) -> None:
        one = RouteRegistry()
        two = RouteRegistry()
        one.route("shared", Spy())
        assert "shared" not in two


class TestInvoker:
    def test_init_only_on_first_call(self) -> None:
        spy = Spy()
        invoke = RouteRegistry().route("new-route", spy)

        invoke()
        assert len(spy.init_calls) == 1
        assert spy.revisit_calls == []

        invoke()
        assert len(spy.init_calls) == 1
        assert len(spy.revisit_calls) == 1
        assert spy.initialized is True

    def test_params_passed_through(self) -> None:
        spy = Spy()
        invoke = RouteRegistry().route("param-route", spy)

        invoke("hey dog")
        invoke({"id": "2"})

        assert spy.init_calls == ["hey dog"]
        assert spy.revisit_calls == [{"id": "2"}]

    def test_refetched_invoker_shares_state(self) -> None:
        registry = RouteRegistry()
        spy = Spy()
        registry.route("route", spy)()
        registry.route("route")()
        assert len(spy.init_calls) == 1
        assert len(spy.revisit_calls) == 1

    def test_init_failure_wrapped(self) -> None:
        spy = Spy(fail_times=1)
        invoke = RouteRegistry().route("inbox", spy)

        with pytest.raises(RouteInitializationError) as exc_info:
            invoke()

        assert str(exc_info.value) == 'Unable to initialize route "inbox": database offline'
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert spy.initialized is False

    def test_failed_init_retried(self) -> None:
        spy = Spy(fail_times=1)
        invoke = RouteRegistry().route("inbox", spy)

        with pytest.raises(RouteInitializationError):
            invoke()
        invoke()

        assert len(spy.init_calls) == 2
        assert spy.revisit_calls == []
        assert spy.initialized is True

    def test_revisit_errors_propagate_unwrapped(self) -> None:
        class Broken(RouteLifecycle):
            def revisit_route(self, params: Any = None) -> None:
                raise ValueError("stale")

        invoke = RouteRegistry().route("broken", Broken())
        invoke()
        with pytest.raises(ValueError, match="stale"):
            invoke()


class TestWithRouter:
    def test_invoker_as_route_callback(self) -> None:
        router = Router(host=MemoryHost())
        registry = RouteRegistry()
        spy = Spy()
        router.add_route("user", "/user/:id", registry.route("user", spy))

        router.go("/user/1")
        router.go("user", {"id": "2"})

        assert spy.init_calls == [{"id": "1"}]
        assert spy.revisit_calls == [{"id": "2"}]
