"""Shared type aliases used across waypoint modules."""

from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

# Navigation parameters: parameter name to value
Params: TypeAlias = dict[str, Any]

# Navigation observer: receives the params, may return extra defaults
NavigationCallback: TypeAlias = Callable[[Params], Mapping[str, Any] | None]
