"""Caret-style rendering of parse failures.

Given the full input and a ``ParseFailure``, ``render_failure`` produces
output such as this report for ``a::b;`` followed by a second line
``c::d e::f;``, parsed with ``FurthestFailureWins``::

    err: at line 2:
    c::d e::f;
         ^
    expected ';'

Under the default ``LastAlternativeWins`` the same input reports column 1
with ``expected 'if'``, the first alternative a statement tries.

Only the first expected description is shown unless ``verbose`` is set.
"""
from __future__ import annotations

from dataclasses import dataclass

from keyscript.parser.errors import ParseFailure


@dataclass(frozen=True, slots=True)
class FailureLocation:
    """Line and column of a failure, both 1-based, plus the line text."""

    line: int
    column: int
    text: str


def locate(source: str, offset: int) -> FailureLocation:
    """Return the line, column and trimmed line text for ``offset``."""
    prefix = source[:offset]
    line_number = prefix.count("\n") + 1
    line_begin = prefix.rfind("\n") + 1
    line_end = source.find("\n", line_begin)
    if line_end == -1:
        line_end = len(source)
    text = source[line_begin:line_end].rstrip()
    return FailureLocation(line=line_number, column=offset - line_begin + 1, text=text)


def render_failure(source: str, failure: ParseFailure, verbose: bool = False) -> str:
    """Render ``failure`` as a human-readable diagnostic.

    Parameters
    ----------
    source:
        The complete input the failure came from.
    failure:
        The failure to describe.
    verbose:
        When ``True``, list every accumulated expected description
        instead of only the first.

    Returns
    -------
    str
        Four lines of diagnostic text ending with a newline, or a short
        placeholder when ``source`` is empty.
    """
    expected = failure.expected[0] if failure.expected else "<nothing>"

    if not source:
        lines = ["err: empty input", f"expected '{expected}'"]
    else:
        offset = failure.offset_in(source)
        location = locate(source, offset)
        lines = [
            f"err: at line {location.line}:",
            location.text,
            "^".rjust(location.column),
            f"expected '{expected}'",
        ]

    if verbose and len(failure.expected) > 1:
        alternatives = ", ".join(f"'{e}'" for e in failure.expected[1:])
        lines.append(f"also tried {alternatives}")
    return "\n".join(lines) + "\n"
