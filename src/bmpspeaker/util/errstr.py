"""
errstr.py

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import errno


def errstr(exc: BaseException) -> str:
    code = exc.args[0] if exc.args else getattr(exc, 'errno', None)
    if isinstance(code, int):
        reason = getattr(exc, 'strerror', None) or str(exc)
        return f'[Errno {errno.errorcode.get(code, str(code))}] {reason}'
    return f'[Errno unknown] {exc}'
