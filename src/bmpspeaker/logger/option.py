from __future__ import annotations

import sys
import time
import logging
from typing import ClassVar, Dict, TYPE_CHECKING

if TYPE_CHECKING:
    from bmpspeaker.environment.config import Environment

from bmpspeaker.logger.handler import get_logger
from bmpspeaker.logger.format import formater as get_formater, FormatterFunc


def echo(message: str, source: str, level: str, timestamp: time.struct_time) -> str:
    return message


class option:
    logger: ClassVar[logging.Logger | None] = None
    formater: ClassVar[FormatterFunc] = echo

    short: ClassVar[bool] = True
    level: ClassVar[str] = 'WARNING'
    logit: ClassVar[Dict[str, bool]] = {}

    # where the log should go: stdout, stderr, syslog or a file name
    destination: ClassVar[str] = ''

    enabled: ClassVar[Dict[str, bool]] = {
        'startup': False,
        'session': False,
        'trace': False,
        'command': False,
        'network': False,
        'wire': False,
        'cli': False,
    }

    @classmethod
    def _set_level(cls, level: str) -> None:
        cls.level = level

        levels = 'FATAL CRITICAL ERROR WARNING INFO DEBUG NOTSET'
        index = levels.index(level)
        for name in levels.split():
            cls.logit[name] = levels.index(name) <= index

    @classmethod
    def log_enabled(cls, source: str, level: str) -> bool:
        return cls.enabled.get(source, True) and cls.logit.get(level, False)

    @classmethod
    def load(cls, env: 'Environment') -> None:
        cls.short = env.log.short
        cls._set_level(env.log.level)

        enable = env.log.enable
        everything = env.log.all
        cls.enabled = {
            'startup': enable,
            'session': enable and (everything or env.log.session),
            'trace': enable and (everything or env.log.session),
            'command': enable and (everything or env.log.command),
            'network': enable and (everything or env.log.network),
            'wire': enable and (everything or env.log.packets),
            'cli': enable,
        }

        destination = env.log.destination
        if destination in ('stdout', 'stderr', 'syslog'):
            cls.destination = destination
        elif destination.startswith('file:'):
            cls.destination = destination[5:]
        else:
            cls.destination = 'stderr'

    @classmethod
    def setup(cls, env: 'Environment') -> None:
        cls.load(env)

        # loggers are cached by name, the time makes every setup unique
        now = str(time.time())

        if cls.destination in ('stdout', 'stderr'):
            cls.logger = get_logger(
                f'bmpspeaker {cls.destination} {now}',
                format='%(message)s',
                stream=sys.stdout if cls.destination == 'stdout' else sys.stderr,
                level=cls.level,
            )
        elif cls.destination == 'syslog':
            cls.logger = get_logger(
                f'bmpspeaker syslog {now}',
                format='%(message)s',
                syslog=True,
                level=cls.level,
            )
        else:
            cls.logger = get_logger(
                f'bmpspeaker file {now}',
                format='%(message)s',
                filename=cls.destination,
                level=cls.level,
            )
        cls.formater = get_formater(cls.short, cls.destination)
