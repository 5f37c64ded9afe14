"""parsing.py

Readers and writers converting configuration strings to typed values.

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import os
from typing import Any

from bmpspeaker.logger.handler import levels


def integer(_: Any) -> int:
    return int(_)


def unquote(_: str) -> str:
    return _.strip().strip('\'"')


def quote(_: Any) -> str:
    return f"'{_!s}'"


def boolean(_: str) -> bool:
    return _.lower() in ('1', 'yes', 'on', 'enable', 'true')


def lower(_: Any) -> str:
    return str(_).lower()


def port(_: str) -> int:
    value = int(_)
    if not 0 < value < 0x10000:
        raise TypeError(f'port {_} is out of range')
    return value


def hold_time(_: str) -> int:
    # RFC 4271 section 4.2, zero or at least three seconds
    value = int(_)
    if value > 0xFFFF or value < 0 or value in (1, 2):
        raise TypeError(f'hold time {_} must be 0 or between 3 and 65535')
    return value


def path(_: str) -> str:
    return os.path.expanduser(unquote(_))


def syslog_value(log: str) -> str:
    log = log.upper()
    if log not in levels:
        raise TypeError(f'invalid log level {log}')
    return log
