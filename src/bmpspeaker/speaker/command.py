"""command.py

The commands an operator can issue, one class per BMP message sent.

    initiation "router" "test router"
    peer_up_notification global 0 10.0.0.1 65001 10.0.0.2 179 34567 65000 65001 1.1.1.1 2.2.2.2
    route_monitoring global 0 10.0.0.1 12345 0 none "e [123,456,789] 10.0.0.1 BLACKHOLE,123:44 127.0.0.1/32"
    raw_route_monitoring global 0 10.0.0.1 12345 0 "0xffff 0xffff ..."
    peer_down_notification global 0 10.0.0.1 12345 0
    termination

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field, fields
from ipaddress import IPv4Address, IPv6Address
from typing import Any, Callable, ClassVar, Sequence, Type

from bmpspeaker.route.grammar import Announcements, Prefixes
from bmpspeaker.speaker import parsing
from bmpspeaker.speaker.error import ArgumentError


def argument(reader: Callable[[str], Any], help: str) -> Any:
    return field(metadata={'reader': reader, 'help': help})


class Command:
    NAME: ClassVar[str] = ''
    HELP: ClassVar[str] = ''

    registered_command: ClassVar[dict[str, Type[Command]]] = {}

    @classmethod
    def register(cls, klass: Type[Command]) -> Type[Command]:
        if klass.NAME in cls.registered_command:
            raise RuntimeError('only one class can be registered per command')
        cls.registered_command[klass.NAME] = klass
        return klass

    @classmethod
    def names(cls) -> list[str]:
        return list(cls.registered_command)

    @classmethod
    def klass(cls, name: str) -> Type[Command]:
        if name in cls.registered_command:
            return cls.registered_command[name]
        raise ArgumentError(f"unknown command '{name}', known commands are {', '.join(cls.names())}")

    @classmethod
    def arguments(cls) -> list[tuple[str, str]]:
        return [(argument.name, argument.metadata['help']) for argument in fields(cls)]  # type: ignore[arg-type]

    @classmethod
    def usage(cls) -> str:
        return ' '.join([cls.NAME] + [f'<{name}>' for name, _ in cls.arguments()])

    @classmethod
    def from_arguments(cls, values: Sequence[str]) -> Command:
        expected = fields(cls)  # type: ignore[arg-type]
        if len(values) != len(expected):
            raise ArgumentError(
                f'{cls.NAME} takes {len(expected)} argument{"" if len(expected) == 1 else "s"}, '
                f'{len(values)} given\nusage: {cls.usage()}'
            )
        parsed: dict[str, Any] = {}
        for argument, value in zip(expected, values):
            try:
                parsed[argument.name] = argument.metadata['reader'](value)
            except ArgumentError as exc:
                raise ArgumentError(f'{cls.NAME} {argument.name}: {exc}') from None
        return cls(**parsed)

    @classmethod
    def parse(cls, line: str) -> Command:
        try:
            words = shlex.split(line)
        except ValueError as exc:
            raise ArgumentError(f'could not split the command line: {exc}') from None
        if not words:
            raise ArgumentError('no command given')
        return cls.klass(words[0]).from_arguments(words[1:])


# ================================================================= Initiation


@Command.register
@dataclass(frozen=True)
class Initiation(Command):
    NAME: ClassVar[str] = 'initiation'
    HELP: ClassVar[str] = 'send an initiation message with the given system name and description'

    sys_name: str = argument(parsing.string, 'sysName information')
    sys_descr: str = argument(parsing.string, 'sysDescr information')


# ================================================================ Peer fields


@dataclass(frozen=True)
class PeerCommand(Command):
    peer_type: int = argument(parsing.peer_type, 'global, rd or local (only global is supported)')
    peer_flags: int = argument(parsing.u8, 'peer flags, V=0x80 L=0x40 A=0x20')
    peer_address: IPv4Address | IPv6Address = argument(parsing.address, 'peer IP address')
    peer_as: int = argument(parsing.asn, 'peer AS number')


@Command.register
@dataclass(frozen=True)
class PeerUpNotification(PeerCommand):
    NAME: ClassVar[str] = 'peer_up_notification'
    HELP: ClassVar[str] = 'send a peer up notification, the header uses the received BGP identifier'

    local_address: IPv4Address | IPv6Address = argument(parsing.address, 'local IP address of the BGP session')
    local_port: int = argument(parsing.u16, 'local TCP port')
    remote_port: int = argument(parsing.u16, 'remote TCP port')
    sent_open_asn: int = argument(parsing.asn, 'AS number in the sent OPEN')
    received_open_asn: int = argument(parsing.asn, 'AS number in the received OPEN')
    sent_bgp_identifier: int = argument(parsing.bgp_id, 'BGP identifier in the sent OPEN')
    received_bgp_identifier: int = argument(parsing.bgp_id, 'BGP identifier in the received OPEN')


@dataclass(frozen=True)
class IdentifiedPeerCommand(PeerCommand):
    peer_bgp_id: int = argument(parsing.bgp_id, 'peer BGP identifier')


@Command.register
@dataclass(frozen=True)
class RouteMonitoring(IdentifiedPeerCommand):
    NAME: ClassVar[str] = 'route_monitoring'
    HELP: ClassVar[str] = 'send a route monitoring message built from route descriptions'

    withdrawals: Prefixes = argument(parsing.prefixes, "withdrawn prefixes, comma separated, or 'none'")
    announcements: Announcements = argument(
        parsing.announcements,
        "'ORIGIN [ASN,...] NEXT-HOP COMMUNITIES PREFIXES' or 'none'",
    )


@Command.register
@dataclass(frozen=True)
class RawRouteMonitoring(IdentifiedPeerCommand):
    NAME: ClassVar[str] = 'raw_route_monitoring'
    HELP: ClassVar[str] = 'send a route monitoring message carrying the given bytes as BGP PDU'

    payload: str = argument(parsing.hexadecimal, '16 bit hexadecimal codes separated by spaces or commas')


@Command.register
@dataclass(frozen=True)
class PeerDownNotification(IdentifiedPeerCommand):
    NAME: ClassVar[str] = 'peer_down_notification'
    HELP: ClassVar[str] = 'send a peer down notification (remote system closed, no notification)'


@Command.register
@dataclass(frozen=True)
class Termination(Command):
    NAME: ClassVar[str] = 'termination'
    HELP: ClassVar[str] = 'send a termination message (session administratively closed)'
