"""Modifier flags and parsed key actions."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Flag
from typing import Union

from keyscript.keys.registry import Key


class KeyModifierFlags(Flag):
    """Set of modifiers held while a key is clicked."""

    NONE = 0
    SHIFT = 1
    CTRL = 2
    ALT = 4
    META = 8


# Prefix characters accepted in front of a key, in canonical order.
MODIFIER_PREFIXES: dict[str, KeyModifierFlags] = {
    "+": KeyModifierFlags.SHIFT,
    "^": KeyModifierFlags.CTRL,
    "!": KeyModifierFlags.ALT,
    "#": KeyModifierFlags.META,
}


@dataclass(frozen=True, slots=True)
class SingleKey:
    """A key written as its plain name, e.g. ``a`` or ``enter``."""

    key: Key


@dataclass(frozen=True, slots=True)
class CapitalKey:
    """A key written as a capital letter, e.g. ``A``; implies shift."""

    key: Key


ParsedSingleKey = Union[SingleKey, CapitalKey]


@dataclass(frozen=True, slots=True)
class KeyClickActionWithMods:
    """Click ``key`` while holding ``modifiers``."""

    key: Key
    modifiers: KeyModifierFlags = field(default=KeyModifierFlags.NONE)

    @classmethod
    def from_parsed(
        cls, parsed: ParsedSingleKey, modifiers: KeyModifierFlags = KeyModifierFlags.NONE
    ) -> "KeyClickActionWithMods":
        """Combine a parsed key with explicit modifiers.

        A ``CapitalKey`` contributes shift on top of ``modifiers``.
        """
        if isinstance(parsed, CapitalKey):
            modifiers |= KeyModifierFlags.SHIFT
        return cls(key=parsed.key, modifiers=modifiers)

    @property
    def prefix(self) -> str:
        """Return the modifier prefix characters in canonical order."""
        return "".join(ch for ch, flag in MODIFIER_PREFIXES.items() if flag in self.modifiers)


ParsedKeyAction = KeyClickActionWithMods
