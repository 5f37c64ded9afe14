"""peer.py

BMP per-peer header (RFC 7854 section 4.2).

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address
from struct import pack
from typing import ClassVar

#  0                   1                   2                   3
#  0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |   Peer Type   |  Peer Flags   |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |         Peer Distinguisher (present based on peer type)       |
# |                                                               |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |                 Peer Address (16 bytes)                       |
# ~                                                               ~
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |                           Peer AS                             |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |                         Peer BGP ID                           |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |                    Timestamp (seconds)                        |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |                  Timestamp (microseconds)                     |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+

PEER_HEADER_LEN: int = 42
DISTINGUISHER_LEN: int = 8


class PeerType(int):
    GLOBAL_INSTANCE: ClassVar[int] = 0
    RD_INSTANCE: ClassVar[int] = 1
    LOCAL_INSTANCE: ClassVar[int] = 2

    _str: ClassVar[dict[int, str]] = {
        0: 'global',
        1: 'rd',
        2: 'local',
    }

    def __str__(self) -> str:
        return self._str.get(self, 'unknown %d' % self)

    @classmethod
    def named(cls, name: str) -> PeerType:
        for code, text in cls._str.items():
            if text == name:
                return cls(code)
        raise ValueError(f'unknown peer type {name!r}')


class PeerFlag(int):
    V: ClassVar[int] = 0b10000000  # IPv6 peer address
    L: ClassVar[int] = 0b01000000  # post-policy Adj-RIB-In
    A: ClassVar[int] = 0b00100000  # legacy two octet AS_PATH

    def ipv4(self) -> bool:
        return not self & self.V

    def ipv6(self) -> bool:
        return bool(self & self.V)

    def asn4(self) -> bool:
        return not self & self.A

    def __str__(self) -> str:
        names = [name for name in ('V', 'L', 'A') if self & getattr(self, name)]
        return '|'.join(names) if names else '-'


def pack_address(address: IPv4Address | IPv6Address) -> bytes:
    """16 bytes, IPv4 is right aligned after twelve zero bytes."""
    return address.packed.rjust(16, b'\0')


@dataclass(frozen=True)
class PerPeerHeader:
    peer_type: PeerType
    peer_flags: PeerFlag
    distinguisher: bytes
    address: IPv4Address | IPv6Address
    asn: int
    bgp_id: bytes

    def __post_init__(self) -> None:
        if len(self.distinguisher) != DISTINGUISHER_LEN:
            raise ValueError(f'peer distinguisher must be {DISTINGUISHER_LEN} bytes')
        if len(self.bgp_id) != 4:
            raise ValueError('peer BGP identifier must be 4 bytes')
        if not 0 <= self.asn <= 0xFFFFFFFF:
            raise ValueError(f'peer AS {self.asn} is out of range')

    def pack_header(self, timestamp: float | None = None) -> bytes:
        if timestamp is None:
            timestamp = time.time()
        seconds = int(timestamp)
        microseconds = int(round((timestamp - seconds) * 1_000_000)) % 1_000_000
        return (
            bytes([self.peer_type, self.peer_flags])
            + self.distinguisher
            + pack_address(self.address)
            + pack('!L', self.asn)
            + self.bgp_id
            + pack('!LL', seconds, microseconds)
        )

    def __str__(self) -> str:
        return 'peer type=%s flags=%s address=%s asn=%d bgp-id=%s' % (
            PeerType(self.peer_type),
            PeerFlag(self.peer_flags),
            self.address,
            self.asn,
            IPv4Address(self.bgp_id),
        )
