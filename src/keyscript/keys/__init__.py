"""Key registry module.

Exports the ``KeyRegistry``, the ``Key`` identifier, event templates and
modifier types used by the parser and the runtime.
"""
from __future__ import annotations

from keyscript.keys.modifiers import (
    MODIFIER_PREFIXES,
    CapitalKey,
    KeyClickActionWithMods,
    KeyModifierFlags,
    ParsedKeyAction,
    ParsedSingleKey,
    SingleKey,
)
from keyscript.keys.registry import (
    SYN_REPORT_EVENT,
    EventValue,
    InputEvent,
    InputEvGroup,
    Key,
    KeyRegistry,
    UnknownKeyError,
    default_registry,
)

__all__ = [
    "Key",
    "KeyRegistry",
    "UnknownKeyError",
    "default_registry",
    "EventValue",
    "InputEvent",
    "InputEvGroup",
    "SYN_REPORT_EVENT",
    "KeyModifierFlags",
    "MODIFIER_PREFIXES",
    "SingleKey",
    "CapitalKey",
    "ParsedSingleKey",
    "KeyClickActionWithMods",
    "ParsedKeyAction",
]
