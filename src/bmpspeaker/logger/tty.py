from __future__ import annotations

import sys
from typing import Any


def _istty(std: Any) -> bool:
    try:
        return bool(std.isatty())
    except (AttributeError, ValueError):
        return False


def istty(std: str) -> bool:
    if std == 'stdout':
        return _istty(sys.stdout)
    if std == 'stderr':
        return _istty(sys.stderr)
    return False
