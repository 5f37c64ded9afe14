"""payload.py

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import re

from bmpspeaker.speaker.error import HexParseError

# a 16 bit code, written with two or four digits
_CODE = re.compile(r'^(?:0[xX])?([0-9a-fA-F]{2}|[0-9a-fA-F]{4})$')
_SEPARATOR = re.compile(r'[ ,]+')


def parse_hex(text: str) -> bytes:
    """Parse '0x007b 0x01c8' or '007b,01c8' into big endian 16 bit values.

    The whole input is rejected on the first invalid code.
    """
    data = bytearray()
    for token in _SEPARATOR.split(text.strip()):
        if not token:
            continue
        match = _CODE.match(token)
        if match is None:
            raise HexParseError(f'invalid hexadecimal code {token!r}, expected a 16 bit value such as 0x01c8')
        data += int(match.group(1), 16).to_bytes(2, 'big')
    return bytes(data)
