"""family.py

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from struct import pack
from typing import ClassVar


# ======================================================================== AFI
# https://www.iana.org/assignments/address-family-numbers/


class AFI(int):
    IPv4: ClassVar[int] = 0x01
    IPv6: ClassVar[int] = 0x02

    ipv4: ClassVar[AFI]
    ipv6: ClassVar[AFI]

    _names: ClassVar[dict[int, str]] = {
        0x01: 'ipv4',
        0x02: 'ipv6',
    }

    def pack_afi(self) -> bytes:
        return pack('!H', self)

    def name(self) -> str:
        return self._names.get(self, f'unknown-afi-{hex(self)}')

    def __repr__(self) -> str:
        return self.name()

    def __str__(self) -> str:
        return self.name()

    @classmethod
    def from_version(cls, version: int) -> AFI:
        # ipaddress objects report 4 or 6
        return cls.ipv4 if version == 4 else cls.ipv6


AFI.ipv4 = AFI(AFI.IPv4)
AFI.ipv6 = AFI(AFI.IPv6)


# ======================================================================= SAFI
# https://www.iana.org/assignments/safi-namespace


class SAFI(int):
    UNICAST: ClassVar[int] = 0x01

    unicast: ClassVar[SAFI]

    def pack_safi(self) -> bytes:
        return bytes([self])

    def name(self) -> str:
        return 'unicast' if self == SAFI.UNICAST else f'unknown-safi-{hex(self)}'

    def __repr__(self) -> str:
        return self.name()

    def __str__(self) -> str:
        return self.name()


SAFI.unicast = SAFI(SAFI.UNICAST)
