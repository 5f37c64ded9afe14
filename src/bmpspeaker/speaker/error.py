"""error.py

Errors raised while running speaker commands.

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations


class SpeakerError(Exception):
    pass


# Bad operator input, only the command being run fails


class InputError(SpeakerError):
    pass


class ArgumentError(InputError):
    pass


class HexParseError(InputError):
    pass


class UnsupportedPeerType(InputError, NotImplementedError):
    pass


# The message could not be written, the session is kept as it is


class WriteError(SpeakerError):
    pass


# Fatal, raised before any command can run


class ConnectError(SpeakerError):
    pass
