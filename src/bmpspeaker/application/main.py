"""main.py

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import sys
import argparse

from bmpspeaker.application import speak
from bmpspeaker.application import environ
from bmpspeaker.application import version

SUBCOMMANDS = ('version', 'env', 'speak')


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    # bmp-speaker -s HOST is short for bmp-speaker speak -s HOST
    if argv and not ('-h' in argv or '--help' in argv):
        if argv[0] not in SUBCOMMANDS:
            argv = ['speak'] + argv

    parser = argparse.ArgumentParser(prog='bmp-speaker', description='BMP test speaker, drives a monitoring station')

    subparsers = parser.add_subparsers()

    sub = subparsers.add_parser('version', help='report bmp-speaker version', description=version.__doc__)
    sub.set_defaults(func=version.cmdline)
    version.setargs(sub)

    sub = subparsers.add_parser('env', help='show bmp-speaker configuration information', description=environ.__doc__)
    sub.set_defaults(func=environ.cmdline)
    environ.setargs(sub)

    sub = subparsers.add_parser('speak', help='connect to a monitoring station (default)', description=speak.__doc__)
    sub.set_defaults(func=speak.cmdline)
    speak.setargs(sub)

    cmdarg = parser.parse_args(argv)

    if 'func' in vars(cmdarg):
        code: int = cmdarg.func(cmdarg)
        return code
    parser.print_help()
    environ.default()
    return 1


if __name__ == '__main__':
    try:
        sys.exit(main())
    except BrokenPipeError:
        sys.exit(1)
