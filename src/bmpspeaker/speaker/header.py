"""header.py

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from ipaddress import IPv4Address, IPv6Address
from struct import pack

from bmpspeaker.bmp.peer import DISTINGUISHER_LEN, PeerFlag, PeerType, PerPeerHeader
from bmpspeaker.speaker.error import ArgumentError, UnsupportedPeerType


def build_peer_header(
    peer_type: int,
    peer_flags: int,
    address: IPv4Address | IPv6Address,
    asn: int,
    bgp_id: int,
) -> PerPeerHeader:
    """Per-peer header for a peer of the global instance.

    Route distinguisher and local instance peers need a distinguisher which
    can not be given yet, they are refused rather than sent as global peers.
    """
    if peer_type != PeerType.GLOBAL_INSTANCE:
        raise UnsupportedPeerType(f'peer type {PeerType(peer_type)} is not supported, only global peers are')
    if not 0 <= peer_flags <= 0xFF:
        raise ArgumentError(f'peer flags {peer_flags} do not fit in one byte')
    if not 0 <= asn <= 0xFFFFFFFF:
        raise ArgumentError(f'peer AS {asn} is out of range')
    if not 0 <= bgp_id <= 0xFFFFFFFF:
        raise ArgumentError(f'peer BGP identifier {bgp_id} is out of range')

    return PerPeerHeader(
        peer_type=PeerType(peer_type),
        peer_flags=PeerFlag(peer_flags),
        distinguisher=bytes(DISTINGUISHER_LEN),
        address=address,
        asn=asn,
        bgp_id=pack('!L', bgp_id),
    )
