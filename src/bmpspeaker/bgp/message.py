"""message.py

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from struct import pack
from typing import ClassVar


# ================================================================== BGP Message
#

# 0                   1                   2                   3
# 0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |                                                               |
# +                                                               +
# |                                                               |
# +                                                               +
# |                           Marker                              |
# +                                                               +
# |                                                               |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |          Length               |      Type     |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+


class Message:
    MARKER: ClassVar[bytes] = bytes([0xFF] * 16)
    HEADER_LEN: ClassVar[int] = 19
    MAX_LEN: ClassVar[int] = 4096

    class CODE:
        OPEN: ClassVar[int] = 0x01
        UPDATE: ClassVar[int] = 0x02
        NOTIFICATION: ClassVar[int] = 0x03
        KEEPALIVE: ClassVar[int] = 0x04
        ROUTE_REFRESH: ClassVar[int] = 0x05

    ID: ClassVar[int]
    TYPE: ClassVar[bytes]

    def _message(self, message: bytes) -> bytes:
        if self.HEADER_LEN + len(message) > 0xFFFF:
            raise ValueError(f'BGP message of {self.HEADER_LEN + len(message)} bytes does not fit its length field')
        message_len: bytes = pack('!H', self.HEADER_LEN + len(message))
        return self.MARKER + message_len + self.TYPE + message

    def pack_message(self) -> bytes:
        raise NotImplementedError('message not implemented in subclasses')

    @classmethod
    def looks_like(cls, data: bytes) -> bool:
        """True if data starts with a marker and a length matching its size."""
        if len(data) < cls.HEADER_LEN or data[:16] != cls.MARKER:
            return False
        return int.from_bytes(data[16:18], 'big') == len(data)
