"""dispatch.py

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from typing import Callable, NamedTuple, Type

from bmpspeaker.bmp import encode
from bmpspeaker.bmp.encode import Encoded
from bmpspeaker.logger import log
from bmpspeaker.logger import lazymsg
from bmpspeaker.network.error import NetworkError

from bmpspeaker.speaker.command import (
    Command,
    Initiation,
    PeerDownNotification,
    PeerUpNotification,
    RawRouteMonitoring,
    RouteMonitoring,
    Termination,
)
from bmpspeaker.speaker.error import ArgumentError, WriteError
from bmpspeaker.speaker.header import build_peer_header
from bmpspeaker.speaker.payload import parse_hex
from bmpspeaker.speaker.session import Session, Writer
from bmpspeaker.speaker.trace import TraceSequencer

# given the trace tag, returns the encoded message
Encoder = Callable[[int], Encoded]


class Emission(NamedTuple):
    command: str
    tag: int
    size: int
    warnings: list[str]


def _report(warning: str) -> None:
    log.warning(lazymsg('command.warning {warning}', warning=warning), 'command')


class Dispatcher:
    """Turn commands into BMP messages written on the session.

    For every command, with the session held: the peer header is built and
    the payload decoded, the current trace tag is read, the message encoded
    and written, its warnings reported and only then the tag advanced. A
    message which could not be written does not consume a tag.
    """

    def __init__(
        self,
        session: Session,
        report: Callable[[str], None] = _report,
        four_octet: bool = True,
        hold_time: int = encode.DEFAULT_HOLD_TIME,
    ) -> None:
        self.session: Session = session
        self.report: Callable[[str], None] = report
        self.four_octet: bool = four_octet
        self.hold_time: int = hold_time

        self._handlers: dict[Type[Command], Callable[..., Encoder]] = {
            Initiation: self._initiation,
            PeerUpNotification: self._peer_up_notification,
            RouteMonitoring: self._route_monitoring,
            RawRouteMonitoring: self._raw_route_monitoring,
            PeerDownNotification: self._peer_down_notification,
            Termination: self._termination,
        }

        registered = set(Command.registered_command.values())
        if registered != set(self._handlers):
            missing = ', '.join(sorted(klass.NAME for klass in registered - set(self._handlers)))
            raise RuntimeError(f'no handler for the command(s): {missing or "none"}')

    # each handler validates its command and returns the encoder to call with the tag

    def _initiation(self, command: Initiation) -> Encoder:
        return lambda tag: encode.initiation(tag, command.sys_name, command.sys_descr)

    def _peer_up_notification(self, command: PeerUpNotification) -> Encoder:
        header = build_peer_header(
            command.peer_type,
            command.peer_flags,
            command.peer_address,
            command.peer_as,
            command.received_bgp_identifier,
        )
        return lambda tag: encode.peer_up_notification(
            tag,
            header,
            command.local_address,
            command.local_port,
            command.remote_port,
            command.sent_open_asn,
            command.received_open_asn,
            command.sent_bgp_identifier,
            command.received_bgp_identifier,
            four_octet=self.four_octet,
            hold_time=self.hold_time,
        )

    def _route_monitoring(self, command: RouteMonitoring) -> Encoder:
        header = build_peer_header(
            command.peer_type, command.peer_flags, command.peer_address, command.peer_as, command.peer_bgp_id
        )
        return lambda tag: encode.route_monitoring(tag, header, command.withdrawals, command.announcements)

    def _raw_route_monitoring(self, command: RawRouteMonitoring) -> Encoder:
        header = build_peer_header(
            command.peer_type, command.peer_flags, command.peer_address, command.peer_as, command.peer_bgp_id
        )
        payload = parse_hex(command.payload)
        return lambda tag: encode.raw_route_monitoring(tag, header, payload)

    def _peer_down_notification(self, command: PeerDownNotification) -> Encoder:
        header = build_peer_header(
            command.peer_type, command.peer_flags, command.peer_address, command.peer_as, command.peer_bgp_id
        )
        return lambda tag: encode.peer_down_notification(tag, header)

    def _termination(self, command: Termination) -> Encoder:
        return lambda tag: encode.termination(tag)

    def dispatch(self, command: Command) -> Emission:
        handler = self._handlers[type(command)]

        def emit(connection: Writer, sequencer: TraceSequencer) -> Emission:
            encoder = handler(command)
            tag = sequencer.current()
            try:
                encoded = encoder(tag)
            except ValueError as exc:
                raise ArgumentError(f'{command.NAME}: {exc}') from None

            try:
                connection.write(encoded.data)
            except NetworkError as exc:
                raise WriteError(f'{command.NAME} not sent: {exc}') from exc

            log.debug(
                lazymsg('command.sent {name} tag={tag} size={size}', name=command.NAME, tag=tag, size=len(encoded.data)),
                'command',
            )
            for warning in encoded.warnings:
                self.report(warning)
            sequencer.advance()
            return Emission(command.NAME, tag, len(encoded.data), encoded.warnings)

        return self.session.with_exclusive_access(emit)

    def run(self, line: str) -> Emission:
        """Parse and dispatch one command line."""
        command = Command.parse(line)
        log.debug(lazymsg('command.parsed {command!r}', command=command), 'command')
        return self.dispatch(command)
