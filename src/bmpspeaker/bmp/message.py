"""message.py

BMP common header (RFC 7854 section 4.1) and information TLVs.

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from struct import pack
from typing import ClassVar

#  0                   1                   2                   3
#  0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1
# +-+-+-+-+-+-+-+-+
# |    Version    |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |                        Message Length                         |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |   Msg. Type   |
# +---------------+
#
# The speaker reuses the high nibble of the version octet to carry its
# trace tag, a receiver under test masks it off to get the version back.

VERSION: int = 3
HEADER_LEN: int = 6
TRACE_MAX: int = 0x0F


class Message(int):
    ROUTE_MONITORING: ClassVar[int] = 0
    STATISTICS_REPORT: ClassVar[int] = 1
    PEER_DOWN_NOTIFICATION: ClassVar[int] = 2
    PEER_UP_NOTIFICATION: ClassVar[int] = 3
    INITIATION: ClassVar[int] = 4
    TERMINATION: ClassVar[int] = 5
    ROUTE_MIRRORING: ClassVar[int] = 6

    _str: ClassVar[dict[int, str]] = {
        0: 'route monitoring',
        1: 'statistics report',
        2: 'peer down notification',
        3: 'peer up notification',
        4: 'initiation',
        5: 'termination',
        6: 'route mirroring',
    }

    def __str__(self) -> str:
        return self._str.get(self, 'unknown %d' % self)


def version(tag: int) -> int:
    if not 0 <= tag <= TRACE_MAX:
        raise ValueError(f'trace tag {tag} does not fit in four bits')
    return VERSION | (tag << 4)


def pack_message(tag: int, kind: int, body: bytes) -> bytes:
    return pack('!BLB', version(tag), HEADER_LEN + len(body), kind) + body


# ===================================================================== TLV
# Information TLV, used by Initiation, Peer Up and Termination
#
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |          Information Type     |       Information Length      |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |                 Information (variable)                        |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+


class Information(int):
    STRING: ClassVar[int] = 0
    SYS_DESCR: ClassVar[int] = 1
    SYS_NAME: ClassVar[int] = 2


class Termination(int):
    STRING: ClassVar[int] = 0
    REASON: ClassVar[int] = 1


def pack_tlv(kind: int, value: bytes) -> bytes:
    if len(value) > 0xFFFF:
        raise ValueError(f'TLV value of {len(value)} bytes is too long')
    return pack('!HH', kind, len(value)) + value


def pack_string(kind: int, value: str) -> bytes:
    return pack_tlv(kind, value.encode('utf-8'))


TERMINATION_REASONS: dict[int, str] = {
    0: 'Session administratively closed',
    1: 'Unspecified reason',
    2: 'Out of resources',
    3: 'Redundant connection',
    4: 'Session permanently administratively closed',
}

PEER_DOWN_REASONS: dict[int, str] = {
    1: 'Local system closed session, notification sent',
    2: 'Local system closed session, no notification',
    3: 'Remote system closed session, notification sent',
    4: 'Remote system closed session, no notification',
    5: 'Information for this peer will no longer be sent',
}
