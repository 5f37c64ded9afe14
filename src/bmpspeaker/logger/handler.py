# A wrapper class around logging to make it easier to use
# Uses logging.config.dictConfig for cleaner configuration

from __future__ import annotations

import os
import sys
import logging
import logging.config
from typing import Any

CLEAR: str = '%(levelname)s %(asctime)s %(filename)s: %(message)s'

levels: dict[str, int] = {
    'FATAL': logging.FATAL,
    'CRITICAL': logging.CRITICAL,
    'ERROR': logging.ERROR,
    'WARNING': logging.WARNING,
    'INFO': logging.INFO,
    'DEBUG': logging.DEBUG,
    'NOTSET': logging.NOTSET,
}

# prevent recreation of already created logger
_created: dict[str, logging.Logger] = {}


def _syslog_address() -> str:
    if sys.platform == 'darwin':
        return '/var/run/syslog'
    if sys.platform.startswith(('freebsd', 'netbsd')):
        return '/var/run/log'
    return '/dev/log'


def _build_config(
    name: str,
    level: str = 'DEBUG',
    format_str: str = CLEAR,
    stream: Any = None,
    syslog: bool = False,
    filename: str | None = None,
    max_bytes: int = 1048576,
    backup_count: int = 3,
) -> dict[str, Any]:
    """Build a dictConfig-compatible configuration dictionary."""
    config: dict[str, Any] = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'default': {
                'format': format_str,
            },
        },
        'handlers': {},
        'loggers': {
            name: {
                'level': level,
                'handlers': [],
                'propagate': False,
            },
        },
    }

    handlers: list[str] = []

    if stream is not None:
        stream_name = 'stderr' if stream is sys.stderr else 'stdout'
        handler_name = f'{name}_stream_{stream_name}'
        config['handlers'][handler_name] = {
            'class': 'logging.StreamHandler',
            'level': level,
            'formatter': 'default',
            'stream': f'ext://sys.{stream_name}',
        }
        handlers.append(handler_name)

    if syslog:
        handler_name = f'{name}_syslog'
        config['handlers'][handler_name] = {
            'class': 'logging.handlers.SysLogHandler',
            'level': level,
            'formatter': 'default',
            'address': _syslog_address(),
            'facility': 'user',
        }
        handlers.append(handler_name)

    if filename is not None:
        handler_name = f'{name}_file'
        config['handlers'][handler_name] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': level,
            'formatter': 'default',
            'filename': os.path.expanduser(filename),
            'maxBytes': max_bytes,
            'backupCount': backup_count,
        }
        handlers.append(handler_name)

    config['loggers'][name]['handlers'] = handlers
    return config


def get_logger(name: str, **kwargs: Any) -> logging.Logger:
    """Return the named logger, creating and configuring it on first use.

    Keyword arguments (only honoured on creation):
        level: minimum level name
        format: logging format string
        stream: sys.stdout or sys.stderr
        syslog: send to the local syslog socket
        filename: rotate logs into this file
    """
    if name in _created:
        if len(kwargs) == 0:
            return _created[name]
        raise ValueError(f'a logger with the name "{name}" already exists')

    config = _build_config(
        name=name,
        level=kwargs.get('level', 'DEBUG'),
        format_str=kwargs.get('format', CLEAR),
        stream=kwargs.get('stream'),
        syslog=kwargs.get('syslog', False),
        filename=kwargs.get('filename'),
        max_bytes=kwargs.get('maxBytes', 1048576),
        backup_count=kwargs.get('backupCount', 3),
    )

    logging.config.dictConfig(config)
    logger = logging.getLogger(name)

    _created[name] = logger
    return logger
