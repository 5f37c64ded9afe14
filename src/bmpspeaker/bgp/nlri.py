"""nlri.py

RFC 4271 - Section 4.3 - UPDATE Message Format:
NLRI are encoded as <length, prefix> tuples:

    +---------------------------+
    |   Length (1 octet)        |  <- Prefix length in BITS
    +---------------------------+
    |   Prefix (variable)       |  <- Minimum octets to hold Length bits
    +---------------------------+

The same encoding is used inside MP_REACH_NLRI and MP_UNREACH_NLRI (RFC 4760).

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from ipaddress import IPv4Network, IPv6Network
from typing import Iterable

from bmpspeaker.bgp.family import AFI

Network = IPv4Network | IPv6Network


def pack_prefix(network: Network) -> bytes:
    mask = network.prefixlen
    size = (mask + 7) // 8
    return bytes([mask]) + network.network_address.packed[:size]


def pack_prefixes(networks: Iterable[Network]) -> bytes:
    return b''.join(pack_prefix(network) for network in networks)


def split_families(networks: Iterable[Network]) -> dict[AFI, list[Network]]:
    """Group networks per address family, keeping their order."""
    families: dict[AFI, list[Network]] = {AFI.ipv4: [], AFI.ipv6: []}
    for network in networks:
        families[AFI.from_version(network.version)].append(network)
    return families
