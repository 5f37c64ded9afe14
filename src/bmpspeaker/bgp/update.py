"""update.py

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from ipaddress import IPv4Address, IPv6Address
from struct import pack
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from bmpspeaker.route.grammar import Announcement

from bmpspeaker.bgp.family import AFI, SAFI
from bmpspeaker.bgp.message import Message
from bmpspeaker.bgp.nlri import Network, pack_prefixes, split_families
from bmpspeaker.bgp.attribute import (
    AS4Path,
    ASPath,
    Attribute,
    Communities,
    MPRNLRI,
    MPURNLRI,
    NextHop,
    Origin,
)


# =================================================================== Update

# +-----------------------------------------------------+
# |   Withdrawn Routes Length (2 octets)                |
# +-----------------------------------------------------+
# |   Withdrawn Routes (variable)                       |
# +-----------------------------------------------------+
# |   Total Path Attribute Length (2 octets)            |
# +-----------------------------------------------------+
# |   Path Attributes (variable)                        |
# +-----------------------------------------------------+
# |   Network Layer Reachability Information (variable) |
# +-----------------------------------------------------+


class Update(Message):
    ID = Message.CODE.UPDATE
    TYPE = bytes([Message.CODE.UPDATE])

    def __init__(
        self,
        withdrawn: Sequence[Network] = (),
        attributes: Sequence[Attribute] = (),
        nlris: Sequence[Network] = (),
    ) -> None:
        self.withdrawn: tuple[Network, ...] = tuple(withdrawn)
        self.attributes: list[Attribute] = sorted(attributes)
        self.nlris: tuple[Network, ...] = tuple(nlris)
        self.warnings: list[str] = []

    def empty(self) -> bool:
        return not (self.withdrawn or self.attributes or self.nlris)

    def pack_message(self) -> bytes:
        withdrawn = pack_prefixes(self.withdrawn)
        attributes = b''.join(attribute.pack_attribute() for attribute in self.attributes)
        if len(withdrawn) > 0xFFFF:
            raise ValueError(f'withdrawn routes of {len(withdrawn)} bytes do not fit the UPDATE')
        if len(attributes) > 0xFFFF:
            raise ValueError(f'path attributes of {len(attributes)} bytes do not fit the UPDATE')
        return self._message(
            pack('!H', len(withdrawn)) + withdrawn + pack('!H', len(attributes)) + attributes + pack_prefixes(self.nlris)
        )

    @classmethod
    def make_update(cls, withdrawals: Sequence[Network], announcement: Announcement | None, asn4: bool = True) -> Update:
        """Build an UPDATE from withdrawn prefixes and an optional announcement.

        IPv4 unicast uses the RFC 4271 fields, anything else is carried in
        MP_REACH_NLRI / MP_UNREACH_NLRI. Oddities which still produce a
        message (but which a receiver may choke on) are recorded in warnings.
        """
        warnings: list[str] = []
        attributes: list[Attribute] = []

        withdrawn = split_families(withdrawals)
        if withdrawn[AFI.ipv6]:
            attributes.append(MPURNLRI(AFI.ipv6, SAFI.unicast, withdrawn[AFI.ipv6]))

        nlris: list[Network] = []
        if announcement is not None:
            attributes.append(Origin(announcement.origin))

            aspath = ASPath(announcement.as_path, asn4)
            attributes.append(aspath)
            large = aspath.large()
            if large and not asn4:
                attributes.append(AS4Path(announcement.as_path))
                warnings.append(
                    'AS_PATH uses two octet ASNs, {} replaced by AS_TRANS ({}) and AS4_PATH added'.format(
                        ', '.join(str(asn) for asn in large), ASPath.AS_TRANS
                    )
                )

            if announcement.communities:
                attributes.append(Communities(announcement.communities))

            reach = split_families(announcement.prefixes)
            next_hop = announcement.next_hop
            mp_reach: list[MPRNLRI] = []

            if reach[AFI.ipv4]:
                if isinstance(next_hop, IPv4Address):
                    attributes.append(NextHop(next_hop))
                    nlris.extend(reach[AFI.ipv4])
                else:
                    # RFC 8950, IPv4 NLRI with an IPv6 next-hop
                    warnings.append(f'IPv4 NLRI announced with the IPv6 next-hop {next_hop}, using MP_REACH_NLRI')
                    mp_reach.append(MPRNLRI(AFI.ipv4, SAFI.unicast, next_hop.packed, reach[AFI.ipv4]))

            if reach[AFI.ipv6]:
                if isinstance(next_hop, IPv6Address):
                    packed = next_hop.packed
                else:
                    packed = IPv6Address(f'::ffff:{next_hop}').packed
                    warnings.append(f'IPv6 NLRI announced with the IPv4 next-hop {next_hop}, mapped to ::ffff:{next_hop}')
                mp_reach.append(MPRNLRI(AFI.ipv6, SAFI.unicast, packed, reach[AFI.ipv6]))

            if len(mp_reach) > 1:
                warnings.append('UPDATE carries more than one MP_REACH_NLRI attribute')
            attributes.extend(mp_reach)

        update = cls(withdrawn[AFI.ipv4], attributes, nlris)
        if update.empty():
            warnings.append('UPDATE has no withdrawals and no announcements (IPv4 unicast End-of-RIB)')
        update.warnings = warnings
        return update
