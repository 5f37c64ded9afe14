"""session.py

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import threading
from typing import Callable, Protocol, TypeVar

from bmpspeaker.logger import log
from bmpspeaker.logger import lazymsg

from bmpspeaker.network.connection import Connection
from bmpspeaker.network.connection import endpoint
from bmpspeaker.network.error import NetworkError

from bmpspeaker.speaker.error import ConnectError
from bmpspeaker.speaker.trace import TraceSequencer

T = TypeVar('T')


class Writer(Protocol):
    def write(self, data: bytes) -> None: ...

    def close(self) -> None: ...


class Session:
    """The connection to the monitoring station and its trace tag.

    Both are only handed out to the work given to with_exclusive_access, one
    caller at a time, so that building, tagging and writing a message can
    not interleave with another command.
    """

    def __init__(self, connection: Writer, sequencer: TraceSequencer) -> None:
        self._connection: Writer = connection
        self._sequencer: TraceSequencer = sequencer
        self._lock: threading.Lock = threading.Lock()

    def with_exclusive_access(self, work: Callable[[Writer, TraceSequencer], T]) -> T:
        with self._lock:
            log.debug(lazymsg('session.locked tag={tag}', tag=self._sequencer.current()), 'session')
            try:
                return work(self._connection, self._sequencer)
            finally:
                log.debug(lazymsg('session.released tag={tag}', tag=self._sequencer.current()), 'session')

    def close(self) -> None:
        with self._lock:
            self._connection.close()

    @classmethod
    def connect(cls, server: str, tracing: bool, default_port: int, timeout: float | None = None) -> Session:
        """Open the connection to the monitoring station, or raise ConnectError."""
        try:
            host, port = endpoint(server, default_port)
        except ValueError as exc:
            raise ConnectError(str(exc)) from None

        connection = Connection(host, port, timeout)
        try:
            connection.establish()
        except NetworkError as exc:
            raise ConnectError(str(exc)) from exc

        sequencer = TraceSequencer.tracing(tracing)
        log.info(
            lazymsg('session.started server={server} tracing={tracing}', server=connection.address(), tracing=sequencer.enabled()),
            'session',
        )
        return cls(connection, sequencer)
