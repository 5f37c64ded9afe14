from __future__ import annotations

import os
import time
from typing import Callable

from bmpspeaker.logger import color
from bmpspeaker.logger.tty import istty
from bmpspeaker.util.od import od

FormatterFunc = Callable[[str, str, str, time.struct_time], str]


def _short_formater(message: str, source: str, level: str, timestamp: time.struct_time) -> str:
    return f'{source:<{color.WIDTH}} {message}'


def _long_formater(message: str, source: str, level: str, timestamp: time.struct_time) -> str:
    now = time.strftime('%H:%M:%S', timestamp)
    return f'{now} {os.getpid():<6} {source:<{color.WIDTH}} {message}'


def _short_color_formater(message: str, source: str, level: str, timestamp: time.struct_time) -> str:
    return f'\r{color.source(level, source)} {color.message(level, message)}'


def _long_color_formater(message: str, source: str, level: str, timestamp: time.struct_time) -> str:
    now = time.strftime('%H:%M:%S', timestamp)
    return f'\r{now} {os.getpid():<6} {color.source(level, source)} {color.message(level, message)}'


def formater(short: bool, destination: str) -> FormatterFunc:
    # destination, short, tty
    # fmt: off
    _formater: dict[tuple[str, bool, bool], FormatterFunc] = {
        ('stdout', True, True): _short_color_formater,
        ('stdout', True, False): _short_formater,
        ('stdout', False, True): _long_color_formater,
        ('stdout', False, False): _long_formater,

        ('stderr', True, True): _short_color_formater,
        ('stderr', True, False): _short_formater,
        ('stderr', False, True): _long_color_formater,
        ('stderr', False, False): _long_formater,
    }
    # fmt: on
    if destination == 'syslog':
        return _short_formater
    if destination not in ('stdout', 'stderr'):
        return _long_formater
    return _formater[(destination, short, istty(destination))]


# NOTE: Do not convert these functions to use f-strings!
# The % formatting is evaluated only when the message is emitted.
def lazyformat(prefix: str, message: bytes, formater: Callable[[bytes], str] = od) -> Callable[[], str]:
    def _lazy() -> str:
        return '%s (%4d) %s' % (prefix, len(message), formater(message))

    return _lazy


def lazymsg(template: str, **kwargs: object) -> Callable[[], str]:
    """Create a lazy log message from a format string template.

    Usage:
        log.debug(lazymsg('trace.advance tag={tag}', tag=tag), 'trace')
    """

    def _format() -> str:
        return template.format(**kwargs)

    return _format
