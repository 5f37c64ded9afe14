"""color.py

ANSI colouring of log lines written to a terminal.

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

SOURCES: tuple[str, ...] = ('startup', 'session', 'trace', 'command', 'network', 'wire', 'cli')

# column used for the source name, wide enough for every source
WIDTH: int = max(len(name) for name in SOURCES) + 1

_END: str = '\033[0m'
_BOLD: str = '\033[1m'

# 'CRITICAL ERROR WARNING INFO DEBUG'
_LEVEL: dict[str, str] = {
    'CRITICAL': '\033[00;31m',  # Strong Red
    'ERROR': '\033[01;31m',  # Red
    'WARNING': '\033[01;33m',  # Yellow
    'INFO': '\033[01;32m',  # Green
    'DEBUG': '',
}

# coloured whatever the level
_SOURCE: dict[str, str] = {
    'trace': '\033[01;36m',  # Cyan
    'wire': '\033[02m',  # Dim
}


def source(level: str, name: str) -> str:
    color = _SOURCE.get(name, '') or _LEVEL.get(level, '')
    if color:
        return f'{color}{name:<{WIDTH}}{_END}'
    return f'{name:<{WIDTH}}'


def message(level: str, text: str) -> str:
    if level in ('CRITICAL', 'ERROR', 'WARNING'):
        return f'{_BOLD}{text}{_END}'
    return text
