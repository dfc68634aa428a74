"""Parse failure types for the keyscript parser.

A ``ParseFailure`` is raised by a grammar rule that does not match at
the current position.  Alternation catches it, tries the next branch at
the same position and, when every branch fails, merges the failures
through a ``MergePolicy``.  Only the top-level driver turns a failure
into a user-facing ``ScriptSyntaxError``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum, auto


class FailureKind(Enum):
    """What went wrong at the failure position.

    SYNTAX
        An expected token, literal or sub-rule did not match.
    UNKNOWN_KEY
        A key or alias name has no registry entry.
    MALFORMED_LITERAL
        A string or number literal could not be converted to its value.
    """

    SYNTAX = auto()
    UNKNOWN_KEY = auto()
    MALFORMED_LITERAL = auto()


@dataclass(frozen=True)
class ParseFailure(Exception):
    """A failed grammar rule.

    Parameters
    ----------
    source:
        The complete text being parsed.
    offset:
        0-based character offset where the rule failed.
    expected:
        Human-readable descriptions of what would have matched, in the
        order the alternatives were attempted.
    kind:
        Failure category.
    """

    source: str = field(repr=False)
    offset: int
    expected: tuple[str, ...]
    kind: FailureKind = FailureKind.SYNTAX

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", (str(self),))

    def __str__(self) -> str:
        wanted = self.expected[0] if self.expected else "<nothing>"
        return f"{self.kind.name.lower()} failure at offset {self.offset}: expected {wanted!r}"

    @property
    def remaining(self) -> str:
        """The unconsumed input at the failure position."""
        return self.source[self.offset:]

    def offset_in(self, text: str) -> int:
        """Return the failure position within ``text``.

        ``text`` must be the input the failure was produced from (or any
        string ending with the same remaining input).

        Raises
        ------
        ValueError
            If the remaining input is not a suffix of ``text``.
        """
        if text is self.source:
            return self.offset
        remaining = self.remaining
        if not text.endswith(remaining):
            raise ValueError("failure does not belong to the given input")
        return len(text) - len(remaining)


# ---------------------------------------------------------------------------
# Merge policies
# ---------------------------------------------------------------------------


class MergePolicy(ABC):
    """Combines the failures of two alternatives tried at one position."""

    name: str = ""

    @abstractmethod
    def merge(self, first: ParseFailure, second: ParseFailure) -> ParseFailure:
        """Return the failure reported when ``first`` then ``second`` failed."""


class LastAlternativeWins(MergePolicy):
    """Report the most recently tried alternative's position.

    Expected descriptions accumulate in attempt order, so the first entry
    always names what the earliest alternative wanted.
    """

    name = "last"

    def merge(self, first: ParseFailure, second: ParseFailure) -> ParseFailure:
        return replace(second, expected=first.expected + second.expected)


class FurthestFailureWins(MergePolicy):
    """Report whichever alternative got further into the input.

    Ties keep the later position's kind and concatenate the expected
    descriptions in attempt order.
    """

    name = "furthest"

    def merge(self, first: ParseFailure, second: ParseFailure) -> ParseFailure:
        if first.offset > second.offset:
            return first
        if second.offset > first.offset:
            return second
        return replace(second, expected=first.expected + second.expected)


MERGE_POLICIES: dict[str, type[MergePolicy]] = {
    LastAlternativeWins.name: LastAlternativeWins,
    FurthestFailureWins.name: FurthestFailureWins,
}


# ---------------------------------------------------------------------------
# Public error
# ---------------------------------------------------------------------------


class ScriptSyntaxError(Exception):
    """Raised when a script cannot be parsed.

    ``str(error)`` is the rendered caret diagnostic, ready for display.

    Parameters
    ----------
    failure:
        The merged failure that stopped the parse.
    diagnostic:
        The rendered diagnostic text.
    """

    def __init__(self, failure: ParseFailure, diagnostic: str) -> None:
        super().__init__(diagnostic)
        self.failure = failure
        self.diagnostic = diagnostic

    @property
    def kind(self) -> FailureKind:
        return self.failure.kind

    @property
    def offset(self) -> int:
        return self.failure.offset

    @property
    def expected(self) -> tuple[str, ...]:
        return self.failure.expected

    def __str__(self) -> str:
        return self.diagnostic
