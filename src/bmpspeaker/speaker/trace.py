"""trace.py

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from typing import ClassVar

from bmpspeaker.logger import log
from bmpspeaker.logger import lazymsg


class TraceSequencer:
    """Trace tag stamped on every emitted message.

    The tag is four bits wide. Zero means tracing is off and stays off,
    otherwise the tag counts 1, 2, ... 15 and wraps back to 1.
    """

    DISABLED: ClassVar[int] = 0
    FIRST: ClassVar[int] = 1
    LAST: ClassVar[int] = 15

    def __init__(self, tag: int = DISABLED) -> None:
        if not self.DISABLED <= tag <= self.LAST:
            raise ValueError(f'trace tag must be between {self.DISABLED} and {self.LAST}, not {tag}')
        self._tag: int = tag

    @classmethod
    def tracing(cls, enabled: bool) -> TraceSequencer:
        return cls(cls.FIRST if enabled else cls.DISABLED)

    def current(self) -> int:
        return self._tag

    def enabled(self) -> bool:
        return self._tag != self.DISABLED

    def advance(self) -> None:
        if not self.enabled():
            return
        self._tag = self.FIRST if self._tag == self.LAST else self._tag + 1
        log.info(lazymsg('trace.advance tag={tag}', tag=self._tag), 'trace')

    def __repr__(self) -> str:
        return f'TraceSequencer(tag={self._tag})'
