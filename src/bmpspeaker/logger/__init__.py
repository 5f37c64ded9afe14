from __future__ import annotations

import time
from typing import Callable, ClassVar, TYPE_CHECKING

if TYPE_CHECKING:
    from bmpspeaker.environment.config import Environment

from bmpspeaker.logger.option import option
from bmpspeaker.logger.handler import get_logger  # noqa: F401,E261,E501
from bmpspeaker.logger.format import formater  # noqa: F401,E261,E501
from bmpspeaker.logger.format import lazyformat  # noqa: F401,E261,E501
from bmpspeaker.logger.format import lazymsg  # noqa: F401,E261,E501

__all__ = [
    'get_logger',
    'formater',
    'lazyformat',
    'lazymsg',
    'option',
    'LogMessage',
    'log',
]

# Log messages are callables returning the text, only evaluated when emitted
LogMessage = Callable[..., str]


def _noop_logger(logger: Callable[[str], None], message: LogMessage, source: str, level: str) -> None:
    pass


class _log:
    logger: ClassVar[Callable[..., None]] = _noop_logger

    @staticmethod
    def init(env: 'Environment') -> None:
        option.setup(env)

    @classmethod
    def disable(cls) -> None:
        cls.logger = _noop_logger
        option.logger = None

    @classmethod
    def debug(cls, message: LogMessage, source: str = '', level: str = 'DEBUG') -> None:
        if option.logger is not None:
            cls.logger(option.logger.debug, message, source, level)

    @classmethod
    def info(cls, message: LogMessage, source: str = '', level: str = 'INFO') -> None:
        if option.logger is not None:
            cls.logger(option.logger.info, message, source, level)

    @classmethod
    def warning(cls, message: LogMessage, source: str = '', level: str = 'WARNING') -> None:
        if option.logger is not None:
            cls.logger(option.logger.warning, message, source, level)

    @classmethod
    def error(cls, message: LogMessage, source: str = '', level: str = 'ERROR') -> None:
        if option.logger is not None:
            cls.logger(option.logger.error, message, source, level)

    @classmethod
    def critical(cls, message: LogMessage, source: str = '', level: str = 'CRITICAL') -> None:
        if option.logger is not None:
            cls.logger(option.logger.critical, message, source, level)


class log(_log):
    @staticmethod
    def logger(logger: Callable[[str], None], message: LogMessage, source: str, level: str) -> None:
        if not option.log_enabled(source, level):
            return

        timestamp = time.localtime()
        for line in message().split('\n'):
            logger(option.formater(line, source, level, timestamp))
