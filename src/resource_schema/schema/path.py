"""Field path compiler.

Turns path text such as ``items[].tags[]`` or ``user['first.name']`` into a
tuple of segments. Indexed access (``items[0]``) and ``[*]`` collapse onto the
same array wildcard since all elements of an array are documented alike.
"""

import re

from resource_schema.errors import MalformedPathError
from resource_schema.schema.base import ARRAY_WILDCARD, CompiledPath, Key, PathSegment

_TOKEN = re.compile(
    r"""
    \[(?:(?P<index>\d*|\*)|'(?P<quoted>[^']+)')\]
    | (?P<key>[^.\[\]]+)
    """,
    re.VERBOSE,
)


def compile_path(path: str) -> CompiledPath:
    """Compile a field path into segments, raising MalformedPathError on bad syntax."""
    if not path:
        raise MalformedPathError(path, "path is empty")

    segments: list[PathSegment] = []
    pos = 0
    after_dot = False

    while pos < len(path):
        if path[pos] == ".":
            if pos == 0:
                raise MalformedPathError(path, "path starts with a separator")
            if after_dot:
                raise MalformedPathError(path, f"consecutive separators at position {pos}")
            after_dot = True
            pos += 1
            continue

        match = _TOKEN.match(path, pos)
        if match is None:
            raise MalformedPathError(path, f"unmatched or malformed bracket at position {pos}")

        if match.group("key") is not None:
            if segments and not after_dot:
                raise MalformedPathError(path, f"missing separator before {match.group('key')!r}")
            segments.append(Key(name=match.group("key")))
        else:
            if after_dot:
                raise MalformedPathError(path, f"bracket directly after separator at position {pos}")
            if match.group("quoted") is not None:
                segments.append(Key(name=match.group("quoted")))
            else:
                segments.append(ARRAY_WILDCARD)

        after_dot = False
        pos = match.end()

    if after_dot:
        raise MalformedPathError(path, "path ends with a separator")

    return tuple(segments)
