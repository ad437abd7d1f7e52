"""Path template compiler.

Turns a template such as ``/user/:id/edit`` into an anchored,
case-insensitive regular expression plus a map of capture groups to
parameter names, and scores it so overlapping templates can be ranked.

Template grammar::

    /literal     literal path separator and text
    :name        named parameter, one or more non-``/`` characters
    *name        wildcard, one or more of ``[\\w/.-]`` (the name is optional)
    ?            trailing query placeholder, a single opaque capture
"""

import re
from dataclasses import dataclass
from enum import Enum

from waypoint.errors import InvalidPatternError

PATH_DELIMITER = "/"
PARAM_MARKER = ":"
WILDCARD_MARKER = "*"
QUERY_MARKER = "?"

# Regex fragment emitted for each kind of capture
PARAM_CAPTURE = r"([^\/]+)"
# A parameter directly before the query marker must not swallow the "?"
PARAM_BEFORE_QUERY_CAPTURE = r"([^\/?]+)"
WILDCARD_CAPTURE = r"([\w\/.-]+)"
QUERY_CAPTURE = r"(?:\?(.*))?"

# Names recorded for captures the template leaves unnamed
WILDCARD_NAME = "wildcard"
QUERY_NAME = "query"

# Per-segment specificity: a segment scores by its broadest capture
SEGMENT_LITERAL = 2
SEGMENT_PARAM = 1
SEGMENT_WILDCARD = 0

INVALID_CHARACTER = "Invalid character in route path"
WILDCARD_NOT_LAST = "Wildcards must end a route or be followed by a path marker"
QUERY_NOT_LAST = "Cannot have additional path/parameters after a query string marker"

_WILDCARD_NAME_CHAR = re.compile(r"[\w-]")


class _Mode(Enum):
    STANDARD = 0
    PARAM = 1
    WILDCARD = 2


@dataclass(frozen=True, slots=True)
class RoutePattern:
    """A compiled path template. Created once at registration, never mutated.

    ``param_map`` maps 1-based capture group ordinals to parameter names in
    the order they appear in ``raw_path``.

    ``weight`` is ``len(source) + param_count - wildcard_count`` where
    ``param_count`` starts at 1 and counts parameters closed by a following
    ``/`` or ``?``. ``specificity`` holds one score per path segment
    (literal > parameter > wildcard). ``rank`` orders overlapping templates:
    higher is more specific.
    """

    raw_path: str
    source: str
    matcher: re.Pattern[str]
    param_map: dict[int, str]
    weight: int
    specificity: tuple[int, ...] = ()

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(self.param_map.values())

    @property
    def has_query_marker(self) -> bool:
        return self.raw_path.endswith(QUERY_MARKER)

    @property
    def rank(self) -> tuple[tuple[int, ...], int]:
        return self.specificity, self.weight

    def match(self, path: str) -> dict[str, str] | None:
        """Match *path* against this template.

        Returns the captured parameters keyed by name, or ``None`` when the
        path does not match. An absent optional query capture is omitted.
        """
        result = self.matcher.fullmatch(path)
        if result is None:
            return None
        params: dict[str, str] = {}
        for index, name in self.param_map.items():
            value = result.group(index)
            if value is not None:
                params[name] = value
        return params


class _PatternBuilder:
    """Accumulates matcher source while scanning a template. Single use."""

    __slots__ = (
        "mode",
        "name",
        "names",
        "param_count",
        "parts",
        "path",
        "segment",
        "segments",
        "wildcard_count",
    )

    def __init__(self, path: str) -> None:
        self.path = path
        self.parts: list[str] = ["^"]
        self.names: list[str] = []
        self.segments: list[int] = []
        self.segment = SEGMENT_LITERAL
        self.mode = _Mode.STANDARD
        self.name = ""
        # Starts at 1, not 0: every template carries a baseline of one
        self.param_count = 1
        self.wildcard_count = 0

    def fail(self, reason: str) -> InvalidPatternError:
        return InvalidPatternError(path=self.path, reason=reason)

    def close_param(self, *, counted: bool, before_query: bool = False) -> None:
        if not self.name:
            raise self.fail(INVALID_CHARACTER)
        self.parts.append(PARAM_BEFORE_QUERY_CAPTURE if before_query else PARAM_CAPTURE)
        self.names.append(self.name)
        self.segment = min(self.segment, SEGMENT_PARAM)
        # A parameter that ends the template is mapped but not counted
        if counted:
            self.param_count += 1
        self.name = ""
        self.mode = _Mode.STANDARD

    def close_wildcard(self) -> None:
        self.parts.append(WILDCARD_CAPTURE)
        self.names.append(self.name or WILDCARD_NAME)
        self.segment = SEGMENT_WILDCARD
        self.wildcard_count += 1
        self.name = ""
        self.mode = _Mode.STANDARD

    def delimiter(self) -> None:
        self.parts.append(r"\/")
        self.segments.append(self.segment)
        self.segment = SEGMENT_LITERAL

    def build(self) -> RoutePattern:
        self.segments.append(self.segment)
        source = "".join(self.parts) + "$"
        return RoutePattern(
            raw_path=self.path,
            source=source,
            matcher=re.compile(source, re.IGNORECASE),
            param_map=dict(enumerate(self.names, start=1)),
            weight=len(source) + self.param_count - self.wildcard_count,
            specificity=tuple(self.segments),
        )


def compile_path(path: str) -> RoutePattern:
    """Compile a path template into a ``RoutePattern``.

    Raises ``InvalidPatternError`` for a ``:`` or ``*`` inside a parameter
    name, an empty parameter name, a wildcard segment that does not end at
    ``/`` or the end of the template, or anything after a ``?`` marker.

    Examples::

        compile_path("/user/:id").param_map      -> {1: "id"}
        compile_path("/files/*path").match("/files/a/b")  -> {"path": "a/b"}
    """
    builder = _PatternBuilder(path)
    has_query = False

    for char in path:
        if has_query:
            raise builder.fail(QUERY_NOT_LAST)

        if builder.mode is _Mode.PARAM:
            if char in (PARAM_MARKER, WILDCARD_MARKER):
                raise builder.fail(INVALID_CHARACTER)
            if char not in (PATH_DELIMITER, QUERY_MARKER):
                builder.name += char
                continue
            builder.close_param(counted=True, before_query=char == QUERY_MARKER)
        elif builder.mode is _Mode.WILDCARD:
            if _WILDCARD_NAME_CHAR.fullmatch(char):
                builder.name += char
                continue
            if char not in (PATH_DELIMITER, QUERY_MARKER):
                raise builder.fail(WILDCARD_NOT_LAST)
            builder.close_wildcard()

        # The character that closed a parameter or wildcard is handled here too
        if char == PARAM_MARKER:
            builder.mode = _Mode.PARAM
        elif char == WILDCARD_MARKER:
            builder.mode = _Mode.WILDCARD
        elif char == QUERY_MARKER:
            has_query = True
            builder.parts.append(QUERY_CAPTURE)
            builder.names.append(QUERY_NAME)
        elif char == PATH_DELIMITER:
            builder.delimiter()
        else:
            builder.parts.append(re.escape(char))

    if builder.mode is _Mode.PARAM:
        builder.close_param(counted=False)
    elif builder.mode is _Mode.WILDCARD:
        builder.close_wildcard()

    return builder.build()
