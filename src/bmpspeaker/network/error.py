"""Network error types and errno classification.

Key classes:
    error: Errno classification (fatal set)
    NetworkError: Base network exception
    NotConnected, LostConnection: Specific errors

Copyright (c) 2013-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import errno
from typing import ClassVar

__all__ = [
    'error',
    'NetworkError',
    'NotConnected',
    'LostConnection',
]


class error:
    # the peer is gone, any further write will fail the same way
    fatal: ClassVar[set[int]] = set(
        (
            errno.ECONNABORTED,
            errno.EPIPE,
            errno.ECONNREFUSED,
            errno.EBADF,
            errno.ESHUTDOWN,
            errno.ENOTCONN,
            errno.ECONNRESET,
            errno.ETIMEDOUT,
            errno.EINVAL,
        ),
    )


class NetworkError(Exception):
    pass


class NotConnected(NetworkError):
    pass


class LostConnection(NetworkError):
    pass
