"""connection.py

Outgoing TCP connection towards a BMP monitoring station.

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import socket
from typing import ClassVar

from bmpspeaker.util.errstr import errstr

from bmpspeaker.logger import log
from bmpspeaker.logger import lazymsg
from bmpspeaker.logger import lazyformat

from bmpspeaker.network.error import error
from bmpspeaker.network.error import NetworkError
from bmpspeaker.network.error import NotConnected
from bmpspeaker.network.error import LostConnection


def endpoint(server: str, default_port: int) -> tuple[str, int]:
    """Split HOST, HOST:PORT, [IPV6] or [IPV6]:PORT into a host and a port."""
    server = server.strip()
    if not server:
        raise ValueError('no server address given')

    if server.startswith('['):
        host, bracket, rest = server[1:].partition(']')
        if not bracket or not host:
            raise ValueError(f'invalid server address {server!r}')
        if not rest:
            return host, default_port
        if not rest.startswith(':'):
            raise ValueError(f'invalid server address {server!r}')
        return host, _port(rest[1:], server)

    # a bare IPv6 address has more than one colon and no port
    if server.count(':') > 1:
        return server, default_port

    if ':' not in server:
        return server, default_port

    host, _, port = server.partition(':')
    if not host:
        raise ValueError(f'invalid server address {server!r}')
    return host, _port(port, server)


def _port(text: str, server: str) -> int:
    if not text.isdigit() or not 0 < int(text) < 0x10000:
        raise ValueError(f'invalid port in server address {server!r}')
    return int(text)


class Connection:
    direction: ClassVar[str] = 'outgoing'

    def __init__(self, host: str, port: int, timeout: float | None = None) -> None:
        self.host: str = host
        self.port: int = port
        self.timeout: float | None = timeout or None

        self.io: socket.socket | None = None

    def address(self) -> str:
        host = f'[{self.host}]' if ':' in self.host else self.host
        return f'{host}:{self.port}'

    def name(self) -> str:
        return f'{self.direction} {self.address()}'

    def established(self) -> bool:
        return self.io is not None

    def establish(self) -> None:
        log.debug(lazymsg('connection.attempting peer={p} port={pt}', p=self.host, pt=self.port), 'network')
        try:
            io = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except OSError as exc:
            log.debug(lazymsg('connection.failed error={e}', e=errstr(exc)), 'network')
            raise NotConnected(f"failed to connect to server at '{self.address()}': {errstr(exc)}") from exc
        # writes either complete or fail, the connect timeout does not apply to them
        io.settimeout(None)
        self.io = io
        log.info(lazymsg('connection.established {name}', name=self.name()), 'network')

    def write(self, data: bytes) -> None:
        """Send the whole buffer or raise, the connection is never closed here."""
        if self.io is None:
            raise NotConnected(f'{self.name()} is not connected')

        log.debug(lazyformat('sending BMP message', data), 'wire')
        try:
            self.io.sendall(data)
        except OSError as exc:
            message = f'{self.name()} write failed: {errstr(exc)}'
            log.error(lambda: message, 'network')
            if exc.errno in error.fatal:
                raise LostConnection(message) from exc
            raise NetworkError(message) from exc

    def close(self) -> None:
        if self.io is None:
            return
        try:
            self.io.close()
            message = f'connection to {self.host} closed'
        except OSError as exc:
            message = f'error while closing connection: {errstr(exc)}'
        self.io = None
        log.info(lambda: message, 'network')
