"""CLI package.

The ``cli`` sub-package contains the Click application and its
commands.  Commands import from the public sub-packages
(``keyscript.parser``, ``keyscript.formatter``, ...) lazily so that
``keyscript --help`` stays fast.
"""
from __future__ import annotations
