"""parsing.py

Readers turning command arguments into typed values.

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from ipaddress import IPv4Address, IPv6Address, ip_address

from bmpspeaker.bmp.peer import PeerType
from bmpspeaker.route.grammar import Announcements, GrammarError, Prefixes, parse_asn
from bmpspeaker.speaker.error import ArgumentError


def _unsigned(text: str, bits: int) -> int:
    try:
        value = int(text, 16) if text[:2].lower() == '0x' else int(text, 10)
    except ValueError:
        raise ArgumentError(f'{text!r} is not a number') from None
    if not 0 <= value < (1 << bits):
        raise ArgumentError(f'{text!r} does not fit in {bits} bits')
    return value


def u8(text: str) -> int:
    return _unsigned(text, 8)


def u16(text: str) -> int:
    return _unsigned(text, 16)


def u32(text: str) -> int:
    return _unsigned(text, 32)


def peer_type(text: str) -> int:
    if text.isdigit():
        return u8(text)
    try:
        return PeerType.named(text.lower())
    except ValueError:
        raise ArgumentError(f'invalid peer type {text!r}, expected global, rd, local or a number') from None


def address(text: str) -> IPv4Address | IPv6Address:
    try:
        return ip_address(text)
    except ValueError:
        raise ArgumentError(f'{text!r} is not an IP address') from None


def asn(text: str) -> int:
    try:
        return parse_asn(text)
    except GrammarError as exc:
        raise ArgumentError(str(exc)) from None


def bgp_id(text: str) -> int:
    if '.' in text:
        try:
            return int(IPv4Address(text))
        except ValueError:
            raise ArgumentError(f'{text!r} is not a BGP identifier') from None
    return u32(text)


def string(text: str) -> str:
    return text


def prefixes(text: str) -> Prefixes:
    try:
        return Prefixes.parse(text)
    except GrammarError as exc:
        raise ArgumentError(str(exc)) from None


def announcements(text: str) -> Announcements:
    try:
        return Announcements.parse(text)
    except GrammarError as exc:
        raise ArgumentError(str(exc)) from None


def hexadecimal(text: str) -> str:
    # decoded while the session is held, see dispatch
    return text
