"""Key registry: resolves symbolic key names to canonical ``Key`` values.

A ``KeyRegistry`` is built once from the tables in ``keyscript.keys.codes``
and is read-only afterwards.  The parser receives a registry by injection;
callers that do not care use ``default_registry()``, which builds the
process-wide instance on first use.

Example
-------
::

    from keyscript.keys import default_registry

    registry = default_registry()
    enter = registry.lookup("ENTER")
    group = registry.event_group(enter)
    group.down.value
    1
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType

from keyscript.keys.codes import EV_KEY, EV_SYN, KEY_ALIASES, KEY_CODES, SYN_REPORT

logger = logging.getLogger(__name__)


class UnknownKeyError(KeyError):
    """Raised when a key name has no entry in either registry table."""

    def __init__(self, name: str) -> None:
        self.key_name = name
        super().__init__(f"unknown key name {name!r}")

    def __str__(self) -> str:
        return self.args[0]


@dataclass(frozen=True, slots=True)
class Key:
    """Canonical identifier for one physical keyboard or mouse key."""

    code: int

    def __repr__(self) -> str:
        return f"Key({self.code})"


class EventValue(IntEnum):
    """The ``value`` field of an ``EV_KEY`` input event."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2


@dataclass(frozen=True, slots=True)
class InputEvent:
    """A timestamp-less input event template.

    ``sec`` and ``usec`` stay zero until the runtime stamps the event
    before writing it to the output device.
    """

    type: int
    code: int
    value: int
    sec: int = 0
    usec: int = 0


SYN_REPORT_EVENT = InputEvent(type=EV_SYN, code=SYN_REPORT, value=0)


@dataclass(frozen=True, slots=True)
class InputEvGroup:
    """Pre-built press, release and repeat templates for one key."""

    up: InputEvent
    down: InputEvent
    repeat: InputEvent

    @classmethod
    def for_key(cls, key: Key) -> "InputEvGroup":
        """Build the three templates for ``key``."""
        return cls(
            up=InputEvent(type=EV_KEY, code=key.code, value=EventValue.RELEASE),
            down=InputEvent(type=EV_KEY, code=key.code, value=EventValue.PRESS),
            repeat=InputEvent(type=EV_KEY, code=key.code, value=EventValue.REPEAT),
        )

    def to_key(self) -> Key:
        """Return the key these templates were built for."""
        return Key(self.up.code)


class KeyRegistry:
    """Read-only lookup tables for key names, aliases and event templates.

    Parameters
    ----------
    codes:
        Exact-name table mapping canonical names to key codes.
    aliases:
        Alias table mapping short names and printable characters to a
        canonical name in ``codes``.

    Raises
    ------
    ValueError
        If an alias points at a name missing from ``codes``.
    """

    def __init__(
        self,
        codes: Mapping[str, int] = KEY_CODES,
        aliases: Mapping[str, str] = KEY_ALIASES,
    ) -> None:
        keys = {name: Key(code) for name, code in codes.items()}
        alias_keys: dict[str, Key] = {}
        for alias, target in aliases.items():
            if target not in keys:
                raise ValueError(f"alias {alias!r} points at unknown key {target!r}")
            alias_keys[alias] = keys[target]

        names: dict[Key, str] = {}
        for name, key in keys.items():
            names.setdefault(key, name)

        self._keys: Mapping[str, Key] = MappingProxyType(keys)
        self._aliases: Mapping[str, Key] = MappingProxyType(alias_keys)
        self._names: Mapping[Key, str] = MappingProxyType(names)
        self._groups: Mapping[Key, InputEvGroup] = MappingProxyType(
            {key: InputEvGroup.for_key(key) for key in names}
        )
        logger.debug(
            "Built key registry with %d keys and %d aliases",
            len(self._keys),
            len(self._aliases),
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, name: str) -> Key:
        """Return the ``Key`` for ``name``.

        The alias table is consulted first, then the exact-name table.
        Matching is case-sensitive and exact.

        Raises
        ------
        UnknownKeyError
            If ``name`` is in neither table.
        """
        key = self._aliases.get(name)
        if key is None:
            key = self._keys.get(name)
        if key is None:
            raise UnknownKeyError(name)
        return key

    def __contains__(self, name: object) -> bool:
        return name in self._aliases or name in self._keys

    def name_of(self, key: Key) -> str:
        """Return the canonical exact-table name of ``key``."""
        try:
            return self._names[key]
        except KeyError:
            raise UnknownKeyError(repr(key)) from None

    def event_group(self, key: Key) -> InputEvGroup:
        """Return the pre-built event templates for ``key``."""
        try:
            return self._groups[key]
        except KeyError:
            raise UnknownKeyError(repr(key)) from None

    @property
    def names(self) -> Mapping[str, Key]:
        """Read-only view of the exact-name table."""
        return self._keys

    @property
    def aliases(self) -> Mapping[str, Key]:
        """Read-only view of the alias table."""
        return self._aliases

    def __iter__(self) -> Iterator[Key]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"KeyRegistry(keys={len(self._keys)}, aliases={len(self._aliases)})"


_default: KeyRegistry | None = None
_default_lock = threading.Lock()


def default_registry() -> KeyRegistry:
    """Return the process-wide registry, building it on first call.

    Concurrent first callers block on a lock until the single instance
    is fully built; later calls read it without locking.
    """
    global _default
    registry = _default
    if registry is None:
        with _default_lock:
            registry = _default
            if registry is None:
                registry = _default = KeyRegistry()
    return registry
