"""open.py

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from struct import pack
from typing import ClassVar, Sequence

from bmpspeaker.bgp.family import AFI, SAFI
from bmpspeaker.bgp.message import Message


# =================================================================== Capability
# https://www.iana.org/assignments/capability-codes/


class Capability:
    class CODE(int):
        MULTIPROTOCOL: ClassVar[int] = 0x01  # [RFC2858]
        FOUR_BYTES_ASN: ClassVar[int] = 0x41  # [RFC4893]

    @staticmethod
    def _capability(code: int, value: bytes) -> bytes:
        return bytes([code, len(value)]) + value

    @classmethod
    def multiprotocol(cls, afi: AFI, safi: SAFI) -> bytes:
        return cls._capability(cls.CODE.MULTIPROTOCOL, afi.pack_afi() + bytes([0]) + safi.pack_safi())

    @classmethod
    def four_bytes_asn(cls, asn: int) -> bytes:
        return cls._capability(cls.CODE.FOUR_BYTES_ASN, pack('!L', asn))


# ================================================================ Open (1)

#  0                   1                   2                   3
#  0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1
#  +-+-+-+-+-+-+-+-+
#  |    Version    |
#  +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
#  |     My Autonomous System      |
#  +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
#  |           Hold Time           |
#  +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
#  |                         BGP Identifier                        |
#  +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
#  | Opt Parm Len  |
#  +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
#  |             Optional Parameters (variable)                    |
#  +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+


class Open(Message):
    ID = Message.CODE.OPEN
    TYPE = bytes([Message.CODE.OPEN])

    VERSION: ClassVar[int] = 4
    PARAMETER_CAPABILITIES: ClassVar[int] = 0x02

    def __init__(self, asn: int, hold_time: int, router_id: int, capabilities: Sequence[bytes] = ()) -> None:
        if not 0 <= asn <= 0xFFFF:
            raise ValueError(f'OPEN can only carry a two octet ASN, not {asn}')
        if hold_time > 0xFFFF or hold_time < 0 or hold_time in (1, 2):
            raise ValueError(f'OPEN hold time must be 0 or between 3 and 65535, not {hold_time}')
        self.asn: int = asn
        self.hold_time: int = hold_time
        self.router_id: int = router_id
        self.capabilities: tuple[bytes, ...] = tuple(capabilities)

    def _parameters(self) -> bytes:
        if not self.capabilities:
            return bytes([0])
        caps = b''.join(self.capabilities)
        parameter = bytes([self.PARAMETER_CAPABILITIES, len(caps)]) + caps
        return bytes([len(parameter)]) + parameter

    def pack_message(self) -> bytes:
        return self._message(
            bytes([self.VERSION]) + pack('!HHL', self.asn, self.hold_time, self.router_id) + self._parameters()
        )

    def __str__(self) -> str:
        router_id = '.'.join(str((self.router_id >> shift) & 0xFF) for shift in (24, 16, 8, 0))
        return 'OPEN version=%d asn=%d hold_time=%d router_id=%s' % (
            self.VERSION,
            self.asn,
            self.hold_time,
            router_id,
        )
