"""keyscript formatter module.

Exports the ``ScriptFormatter`` class and the ``format_script`` convenience function.
"""
from __future__ import annotations

from keyscript.formatter.formatter import ScriptFormatter, format_script

__all__ = ["ScriptFormatter", "format_script"]
