"""attribute.py

Path attributes used when building UPDATE messages.

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from ipaddress import IPv4Address
from struct import pack
from typing import Any, ClassVar, Iterable, Sequence

from bmpspeaker.bgp.family import AFI, SAFI
from bmpspeaker.bgp.nlri import Network, pack_prefixes

# Attribute length encoding constants
ATTR_LENGTH_EXTENDED_MAX: int = 0xFF  # Maximum length for non-extended encoding (255)


# ==================================================================== Attribute
#


class Attribute:
    ID: ClassVar[int] = 0x00
    FLAG: ClassVar[int] = 0x00

    class CODE(int):
        # RFC 4271
        ORIGIN: ClassVar[int] = 0x01
        AS_PATH: ClassVar[int] = 0x02
        NEXT_HOP: ClassVar[int] = 0x03
        # RFC 1997
        COMMUNITY: ClassVar[int] = 0x08
        # RFC 4760
        MP_REACH_NLRI: ClassVar[int] = 0x0E  # 14
        MP_UNREACH_NLRI: ClassVar[int] = 0x0F  # 15
        # RFC 4893
        AS4_PATH: ClassVar[int] = 0x11  # 17

        names: ClassVar[dict[int, str]] = {
            ORIGIN: 'origin',
            AS_PATH: 'as-path',
            NEXT_HOP: 'next-hop',
            COMMUNITY: 'community',
            MP_REACH_NLRI: 'mp-reach-nlri',
            MP_UNREACH_NLRI: 'mp-unreach-nlri',
            AS4_PATH: 'as4-path',
        }

        def __str__(self) -> str:
            return self.names.get(self, 'unknown-attribute-{}'.format(hex(self)))

    class Flag(int):
        EXTENDED_LENGTH: ClassVar[int] = 0x10  # .  16 - 0001 0000
        PARTIAL: ClassVar[int] = 0x20  # .  32 - 0010 0000
        TRANSITIVE: ClassVar[int] = 0x40  # .  64 - 0100 0000
        OPTIONAL: ClassVar[int] = 0x80  # . 128 - 1000 0000

    @classmethod
    def _attribute(klass, value: bytes) -> bytes:
        flag: int = klass.FLAG
        if flag & Attribute.Flag.OPTIONAL and not value:
            return b''
        length: int = len(value)
        if length > 0xFFFF:
            raise ValueError(f'{Attribute.CODE(klass.ID)} attribute of {length} bytes is too long')
        if length > ATTR_LENGTH_EXTENDED_MAX:
            flag |= Attribute.Flag.EXTENDED_LENGTH
        len_value: bytes
        if flag & Attribute.Flag.EXTENDED_LENGTH:
            len_value = pack('!H', length)
        else:
            len_value = bytes([length])
        return bytes([flag, klass.ID]) + len_value + value

    def pack_attribute(self) -> bytes:
        raise NotImplementedError('attribute not implemented in subclasses')

    def __lt__(self, other: Any) -> bool:
        return bool(self.ID < other.ID)


# =================================================================== Origin (1)


class Origin(Attribute):
    ID = Attribute.CODE.ORIGIN
    FLAG = Attribute.Flag.TRANSITIVE

    IGP: ClassVar[int] = 0x00
    EGP: ClassVar[int] = 0x01
    INCOMPLETE: ClassVar[int] = 0x02

    _names: ClassVar[dict[int, str]] = {
        IGP: 'igp',
        EGP: 'egp',
        INCOMPLETE: 'incomplete',
    }

    def __init__(self, origin: int) -> None:
        if origin not in self._names:
            raise ValueError(f'Invalid origin value: {origin}')
        self.origin: int = origin

    def pack_attribute(self) -> bytes:
        return self._attribute(bytes([self.origin]))

    def __repr__(self) -> str:
        return self._names[self.origin]


# ================================================================== ASPath (2)


class ASPath(Attribute):
    ID = Attribute.CODE.AS_PATH
    FLAG = Attribute.Flag.TRANSITIVE

    AS_SEQUENCE: ClassVar[int] = 0x02
    AS_TRANS: ClassVar[int] = 23456
    SEGMENT_MAX_LENGTH: ClassVar[int] = 255  # Maximum number of ASNs in single segment

    def __init__(self, asns: Sequence[int], asn4: bool = True) -> None:
        self.asns: tuple[int, ...] = tuple(asns)
        self.asn4: bool = asn4

    def large(self) -> list[int]:
        """ASNs which can not be represented with two octets."""
        return [asn for asn in self.asns if asn > 0xFFFF]

    def _wire(self) -> tuple[int, ...]:
        if self.asn4:
            return self.asns
        return tuple(asn if asn <= 0xFFFF else self.AS_TRANS for asn in self.asns)

    @classmethod
    def _segment(cls, seg_type: int, values: tuple[int, ...], asn4: bool) -> bytes:
        length = len(values)
        if length == 0:
            return b''
        if length > cls.SEGMENT_MAX_LENGTH:
            return cls._segment(seg_type, values[: cls.SEGMENT_MAX_LENGTH], asn4) + cls._segment(
                seg_type, values[cls.SEGMENT_MAX_LENGTH :], asn4
            )
        fmt = '!%dL' % length if asn4 else '!%dH' % length
        return bytes([seg_type, length]) + pack(fmt, *values)

    def pack_attribute(self) -> bytes:
        return self._attribute(self._segment(self.AS_SEQUENCE, self._wire(), self.asn4))

    def __repr__(self) -> str:
        return '[ {} ]'.format(' '.join(str(asn) for asn in self.asns))


class AS4Path(ASPath):
    ID = Attribute.CODE.AS4_PATH
    FLAG = Attribute.Flag.TRANSITIVE | Attribute.Flag.OPTIONAL

    def __init__(self, asns: Sequence[int]) -> None:
        ASPath.__init__(self, asns, asn4=True)


# ================================================================= NextHop (3)


class NextHop(Attribute):
    ID = Attribute.CODE.NEXT_HOP
    FLAG = Attribute.Flag.TRANSITIVE

    def __init__(self, address: IPv4Address) -> None:
        self.address: IPv4Address = address

    def pack_attribute(self) -> bytes:
        return self._attribute(self.address.packed)

    def __repr__(self) -> str:
        return str(self.address)


# ============================================================= Communities (8)


class Communities(Attribute):
    ID = Attribute.CODE.COMMUNITY
    FLAG = Attribute.Flag.TRANSITIVE | Attribute.Flag.OPTIONAL

    def __init__(self, communities: Iterable[int]) -> None:
        self.communities: tuple[int, ...] = tuple(communities)

    def pack_attribute(self) -> bytes:
        return self._attribute(b''.join(pack('!L', community) for community in self.communities))

    def __repr__(self) -> str:
        return '[ {} ]'.format(' '.join('%d:%d' % (c >> 16, c & 0xFFFF) for c in self.communities))


# ==================================================== MP Reachable NLRI (14)


class MPRNLRI(Attribute):
    ID = Attribute.CODE.MP_REACH_NLRI
    FLAG = Attribute.Flag.OPTIONAL

    def __init__(self, afi: AFI, safi: SAFI, nexthop: bytes, nlris: Sequence[Network]) -> None:
        self.afi: AFI = afi
        self.safi: SAFI = safi
        self.nexthop: bytes = nexthop
        self.nlris: tuple[Network, ...] = tuple(nlris)

    def pack_attribute(self) -> bytes:
        # the reserved octet between the next-hop and the NLRI is always zero
        return self._attribute(
            self.afi.pack_afi()
            + self.safi.pack_safi()
            + bytes([len(self.nexthop)])
            + self.nexthop
            + bytes([0])
            + pack_prefixes(self.nlris)
        )


# ================================================== MP Unreachable NLRI (15)


class MPURNLRI(Attribute):
    ID = Attribute.CODE.MP_UNREACH_NLRI
    FLAG = Attribute.Flag.OPTIONAL

    def __init__(self, afi: AFI, safi: SAFI, nlris: Sequence[Network]) -> None:
        self.afi: AFI = afi
        self.safi: SAFI = safi
        self.nlris: tuple[Network, ...] = tuple(nlris)

    def pack_attribute(self) -> bytes:
        return self._attribute(self.afi.pack_afi() + self.safi.pack_safi() + pack_prefixes(self.nlris))
