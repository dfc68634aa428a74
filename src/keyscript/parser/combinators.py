"""Backtracking primitives shared by the keyscript grammar rules.

A rule is a callable ``rule(pos) -> (value, new_pos)`` over an index
into the source text.  A rule that does not match raises
``ParseFailure``; since positions are plain integers, a failed rule
never consumes input and the caller simply retries from the position it
saved.
"""
from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any, Final, TypeVar

from keyscript.parser.errors import FailureKind, LastAlternativeWins, MergePolicy, ParseFailure

T = TypeVar("T")
A = TypeVar("A")

Rule = Callable[[int], tuple[T, int]]

_WHITESPACE: Final[re.Pattern[str]] = re.compile(r"(?:[ \t\r\n]+|//[^\n]*)*")
_IDENTIFIER: Final[re.Pattern[str]] = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_WORD_CHARS: Final[frozenset[str]] = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_"
)


class Combinators:
    """Position-based parsing primitives.

    Parameters
    ----------
    source:
        The complete text to parse.
    merge_policy:
        How failures of sibling alternatives are combined.  Defaults to
        ``LastAlternativeWins``.
    """

    def __init__(self, source: str, merge_policy: MergePolicy | None = None) -> None:
        self._source: str = source
        self._merge: MergePolicy = merge_policy or LastAlternativeWins()

    # ------------------------------------------------------------------
    # Failures
    # ------------------------------------------------------------------

    def _fail(
        self, pos: int, *expected: str, kind: FailureKind = FailureKind.SYNTAX
    ) -> ParseFailure:
        return ParseFailure(source=self._source, offset=pos, expected=expected, kind=kind)

    # ------------------------------------------------------------------
    # Terminals
    # ------------------------------------------------------------------

    def _tag(self, pos: int, literal: str) -> int:
        """Match ``literal`` exactly and return the position after it."""
        if self._source.startswith(literal, pos):
            return pos + len(literal)
        raise self._fail(pos, literal)

    def _token(self, pos: int, literal: str) -> tuple[str, int]:
        """Like ``_tag`` but also return the matched text."""
        return literal, self._tag(pos, literal)

    def _keyword(self, pos: int, word: str) -> int:
        """Match ``word`` when it is not the prefix of a longer identifier."""
        end = self._tag(pos, word)
        if self._is_word_char(end):
            raise self._fail(pos, word)
        return end

    def _ws0(self, pos: int) -> int:
        """Skip whitespace and ``//`` comments; never fails."""
        return _WHITESPACE.match(self._source, pos).end()

    def _identifier(self, pos: int) -> tuple[str, int]:
        match = _IDENTIFIER.match(self._source, pos)
        if match is None:
            raise self._fail(pos, "identifier")
        return match.group(), match.end()

    def _is_word_char(self, pos: int) -> bool:
        return pos < len(self._source) and self._source[pos] in _WORD_CHARS

    def _at_end(self, pos: int) -> bool:
        return pos >= len(self._source)

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    def _alt(self, pos: int, *rules: Rule[Any]) -> tuple[Any, int]:
        """Return the first rule that matches at ``pos``.

        When all rules fail, their failures are folded together in
        attempt order with the merge policy and the result is raised.
        """
        failure: ParseFailure | None = None
        for rule in rules:
            try:
                return rule(pos)
            except ParseFailure as exc:
                failure = exc if failure is None else self._merge.merge(failure, exc)
        assert failure is not None
        raise failure

    def _opt(self, pos: int, rule: Rule[T]) -> tuple[T | None, int]:
        try:
            return rule(pos)
        except ParseFailure:
            return None, pos

    def _many0(self, pos: int, rule: Rule[T]) -> tuple[list[T], int]:
        """Apply ``rule`` until it fails or stops making progress."""
        items: list[T] = []
        while True:
            try:
                item, next_pos = rule(pos)
            except ParseFailure:
                return items, pos
            if next_pos == pos:
                return items, pos
            items.append(item)
            pos = next_pos

    def _fold_many0(
        self,
        pos: int,
        rule: Rule[T],
        init: A,
        combine: Callable[[A, T], A],
    ) -> tuple[A, int]:
        """Repeat ``rule`` from ``pos`` and fold each match into ``init``.

        Stops without failing the first time ``rule`` does not match and
        returns everything consumed so far.
        """
        acc = init
        while True:
            try:
                item, next_pos = rule(pos)
            except ParseFailure:
                return acc, pos
            if next_pos == pos:
                return acc, pos
            acc = combine(acc, item)
            pos = next_pos

    def _separated_list0(
        self, pos: int, rule: Rule[T], separator: str
    ) -> tuple[list[T], int]:
        """Parse ``rule (ws separator ws rule)*`` or nothing."""
        try:
            first, after = rule(pos)
        except ParseFailure:
            return [], pos

        def rest(p: int) -> tuple[T, int]:
            p = self._ws0(p)
            p = self._tag(p, separator)
            p = self._ws0(p)
            return rule(p)

        items, after = self._many0(after, rest)
        return [first, *items], after
