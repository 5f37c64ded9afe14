"""grammar.py

Textual description of withdrawals and announcements.

    withdrawals   := 'none' | PREFIX [',' PREFIX]*
    announcements := 'none' | ORIGIN '[' [ASN [',' ASN]*] ']' NEXT-HOP COMMUNITIES PREFIXES
    ORIGIN        := 'i' | 'igp' | 'e' | 'egp' | '?' | 'incomplete'
    COMMUNITIES   := 'none' | COMMUNITY [',' COMMUNITY]*
    COMMUNITY     := ASN16 ':' VALUE16 | well-known name (BLACKHOLE, NO_EXPORT, ...)

for example:

    e [123,456,789] 10.0.0.1 BLACKHOLE,123:44 127.0.0.1/32

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address, ip_address, ip_network
from typing import ClassVar, Iterator

from bmpspeaker.bgp.attribute import Origin
from bmpspeaker.bgp.nlri import Network


class GrammarError(ValueError):
    pass


NONE: str = 'none'

ORIGINS: dict[str, int] = {
    'i': Origin.IGP,
    'igp': Origin.IGP,
    'e': Origin.EGP,
    'egp': Origin.EGP,
    '?': Origin.INCOMPLETE,
    'incomplete': Origin.INCOMPLETE,
}

# RFC 1997, RFC 3765 and RFC 7999
WELL_KNOWN_COMMUNITIES: dict[str, int] = {
    'NO_EXPORT': 0xFFFFFF01,
    'NO_ADVERTISE': 0xFFFFFF02,
    'NO_EXPORT_SUBCONFED': 0xFFFFFF03,
    'NO_PEER': 0xFFFFFF04,
    'BLACKHOLE': 0xFFFF029A,
}


def _items(text: str) -> Iterator[str]:
    for item in text.split(','):
        item = item.strip()
        if not item:
            raise GrammarError(f'empty element in {text!r}')
        yield item


def parse_prefix(text: str) -> Network:
    try:
        return ip_network(text, strict=False)
    except ValueError:
        raise GrammarError(f'invalid prefix {text!r}') from None


def parse_asn(text: str) -> int:
    digits = text[2:] if text[:2].upper() == 'AS' else text
    if not digits.isdigit() or int(digits) > 0xFFFFFFFF:
        raise GrammarError(f'invalid ASN {text!r}')
    return int(digits)


def parse_community(text: str) -> int:
    name = text.upper().replace('-', '_')
    if name in WELL_KNOWN_COMMUNITIES:
        return WELL_KNOWN_COMMUNITIES[name]

    high, colon, low = text.partition(':')
    if not colon or not high.isdigit() or not low.isdigit():
        raise GrammarError(f'invalid community {text!r}')
    if int(high) > 0xFFFF or int(low) > 0xFFFF:
        raise GrammarError(f'community {text!r} is out of range')
    return (int(high) << 16) + int(low)


@dataclass(frozen=True)
class Prefixes:
    prefixes: tuple[Network, ...] = ()

    @classmethod
    def parse(cls, text: str) -> Prefixes:
        text = text.strip()
        if not text:
            raise GrammarError(f"no prefixes given, use '{NONE}' for none")
        if text.lower() == NONE:
            return cls()
        return cls(tuple(parse_prefix(item) for item in _items(text)))

    def __iter__(self) -> Iterator[Network]:
        return iter(self.prefixes)

    def __len__(self) -> int:
        return len(self.prefixes)

    def __str__(self) -> str:
        if not self.prefixes:
            return NONE
        return ','.join(str(prefix) for prefix in self.prefixes)


@dataclass(frozen=True)
class Announcement:
    origin: int
    as_path: tuple[int, ...]
    next_hop: IPv4Address | IPv6Address
    communities: tuple[int, ...]
    prefixes: Prefixes

    FORMAT: ClassVar[re.Pattern[str]] = re.compile(
        r'^\s*(?P<origin>\S+)\s+\[(?P<aspath>[^\]]*)\]\s+(?P<nexthop>\S+)\s+(?P<communities>\S+)\s+(?P<prefixes>\S+)\s*$'
    )

    @classmethod
    def parse(cls, text: str) -> Announcement:
        match = cls.FORMAT.match(text)
        if match is None:
            raise GrammarError(
                f'invalid announcement {text!r}, expected: ORIGIN [ASN,...] NEXT-HOP COMMUNITIES PREFIXES'
            )

        origin = match.group('origin').lower()
        if origin not in ORIGINS:
            raise GrammarError(f'invalid origin {match.group("origin")!r}, expected one of i, e or ?')

        aspath = match.group('aspath').strip()
        as_path = tuple(parse_asn(asn) for asn in _items(aspath)) if aspath else ()

        try:
            next_hop = ip_address(match.group('nexthop'))
        except ValueError:
            raise GrammarError(f'invalid next-hop {match.group("nexthop")!r}') from None

        communities = match.group('communities')
        if communities.lower() == NONE:
            parsed: tuple[int, ...] = ()
        else:
            parsed = tuple(parse_community(community) for community in _items(communities))

        prefixes = Prefixes.parse(match.group('prefixes'))
        if not prefixes:
            raise GrammarError('an announcement needs at least one prefix')

        return cls(ORIGINS[origin], as_path, next_hop, parsed, prefixes)


@dataclass(frozen=True)
class Announcements:
    announcement: Announcement | None = None

    @classmethod
    def parse(cls, text: str) -> Announcements:
        if text.strip().lower() == NONE:
            return cls()
        return cls(Announcement.parse(text))

    def __bool__(self) -> bool:
        return self.announcement is not None
