"""encode.py

Build complete BMP messages, one function per message type.

Every function is pure: it takes the trace tag and the message content and
returns the bytes to write together with advisory warnings about anything a
receiver may find odd. Warnings never prevent a message from being built.

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from ipaddress import IPv4Address, IPv6Address
from struct import pack
from typing import NamedTuple, Sequence

from bmpspeaker.bgp.attribute import ASPath
from bmpspeaker.bgp.family import AFI, SAFI
from bmpspeaker.bgp.message import Message as BGPMessage
from bmpspeaker.bgp.open import Capability, Open
from bmpspeaker.bgp.update import Update
from bmpspeaker.bmp.message import (
    PEER_DOWN_REASONS,
    TERMINATION_REASONS,
    Information,
    Message,
    Termination,
    pack_message,
    pack_string,
    pack_tlv,
)
from bmpspeaker.bmp.peer import PeerFlag, PerPeerHeader, pack_address
from bmpspeaker.route.grammar import Announcements, Prefixes

DEFAULT_HOLD_TIME: int = 90
DEFAULT_PEER_DOWN_REASON: int = 4
DEFAULT_TERMINATION_REASON: int = 0


class Encoded(NamedTuple):
    data: bytes
    warnings: list[str]


def _check_family(header: PerPeerHeader) -> list[str]:
    flags = PeerFlag(header.peer_flags)
    if flags.ipv6() and isinstance(header.address, IPv4Address):
        return [f'peer flag V is set but the peer address {header.address} is IPv4']
    if flags.ipv4() and isinstance(header.address, IPv6Address):
        return [f'peer flag V is not set but the peer address {header.address} is IPv6']
    return []


def _open_asn(asn: int, side: str, warnings: list[str]) -> int:
    if asn > 0xFFFF:
        warnings.append(f'{side} OPEN AS {asn} does not fit in two octets, using AS_TRANS ({ASPath.AS_TRANS})')
        return ASPath.AS_TRANS
    return asn


# ================================================================ Initiation (4)


def initiation(tag: int, sys_name: str, sys_descr: str, information: Sequence[str] = ()) -> Encoded:
    body = pack_string(Information.SYS_NAME, sys_name) + pack_string(Information.SYS_DESCR, sys_descr)
    body += b''.join(pack_string(Information.STRING, text) for text in information)
    return Encoded(pack_message(tag, Message.INITIATION, body), [])


# ============================================================= Peer Up (3)
#
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |                 Local Address (16 bytes)                      |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |         Local Port            |        Remote Port            |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |                    Sent OPEN Message                          |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |                  Received OPEN Message                        |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
# |                 Information (variable)                        |
# +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+


def peer_up_notification(
    tag: int,
    header: PerPeerHeader,
    local_address: IPv4Address | IPv6Address,
    local_port: int,
    remote_port: int,
    sent_open_asn: int,
    received_open_asn: int,
    sent_bgp_id: int,
    received_bgp_id: int,
    information: Sequence[str] = (),
    four_octet: bool = True,
    hold_time: int = DEFAULT_HOLD_TIME,
    timestamp: float | None = None,
) -> Encoded:
    warnings = _check_family(header)

    if received_open_asn not in (header.asn, ASPath.AS_TRANS if header.asn > 0xFFFF else header.asn):
        warnings.append(f'received OPEN AS {received_open_asn} does not match the peer AS {header.asn}')

    sent_asn = _open_asn(sent_open_asn, 'sent', warnings)
    received_asn = _open_asn(received_open_asn, 'received', warnings)

    capabilities = [
        Capability.multiprotocol(AFI.ipv4, SAFI.unicast),
        Capability.multiprotocol(AFI.ipv6, SAFI.unicast),
    ]
    sent = list(capabilities)
    received = list(capabilities)
    if four_octet:
        sent.append(Capability.four_bytes_asn(sent_open_asn))
        received.append(Capability.four_bytes_asn(header.asn))

    body = (
        header.pack_header(timestamp)
        + pack_address(local_address)
        + pack('!HH', local_port, remote_port)
        + Open(sent_asn, hold_time, sent_bgp_id, sent).pack_message()
        + Open(received_asn, hold_time, received_bgp_id, received).pack_message()
        + b''.join(pack_string(Information.STRING, text) for text in information)
    )
    return Encoded(pack_message(tag, Message.PEER_UP_NOTIFICATION, body), warnings)


# ===================================================== Route Monitoring (0)


def route_monitoring(
    tag: int,
    header: PerPeerHeader,
    withdrawals: Prefixes,
    announcements: Announcements,
    timestamp: float | None = None,
) -> Encoded:
    warnings = _check_family(header)

    update = Update.make_update(
        list(withdrawals),
        announcements.announcement,
        asn4=PeerFlag(header.peer_flags).asn4(),
    )
    warnings.extend(update.warnings)

    message = update.pack_message()
    if len(message) > BGPMessage.MAX_LEN:
        warnings.append(f'UPDATE is {len(message)} bytes, larger than the {BGPMessage.MAX_LEN} bytes BGP maximum')

    body = header.pack_header(timestamp) + message
    return Encoded(pack_message(tag, Message.ROUTE_MONITORING, body), warnings)


def raw_route_monitoring(tag: int, header: PerPeerHeader, payload: bytes, timestamp: float | None = None) -> Encoded:
    warnings = _check_family(header)
    if not BGPMessage.looks_like(payload):
        warnings.append(f'payload of {len(payload)} bytes is not a BGP message (bad marker or length)')

    body = header.pack_header(timestamp) + payload
    return Encoded(pack_message(tag, Message.ROUTE_MONITORING, body), warnings)


# ======================================================== Peer Down (2)


def peer_down_notification(
    tag: int,
    header: PerPeerHeader,
    reason: int = DEFAULT_PEER_DOWN_REASON,
    timestamp: float | None = None,
) -> Encoded:
    warnings = _check_family(header)
    if reason not in PEER_DOWN_REASONS:
        warnings.append(f'peer down reason {reason} is not defined')
    body = header.pack_header(timestamp) + bytes([reason])
    return Encoded(pack_message(tag, Message.PEER_DOWN_NOTIFICATION, body), warnings)


# ====================================================== Termination (5)


def termination(tag: int, reason: int = DEFAULT_TERMINATION_REASON) -> Encoded:
    warnings = []
    if reason not in TERMINATION_REASONS:
        warnings.append(f'termination reason {reason} is not defined')
    body = pack_tlv(Termination.REASON, pack('!H', reason))
    return Encoded(pack_message(tag, Message.TERMINATION, body), warnings)
