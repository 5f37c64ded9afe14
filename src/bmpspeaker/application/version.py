"""bmp-speaker current version"""

from __future__ import annotations

import sys
import argparse
import platform

from bmpspeaker.version import version, get_root


def setargs(sub: argparse.ArgumentParser) -> None:
    # fmt:off
    pass
    # fmt:on


def cmdline(cmdarg: argparse.Namespace) -> int:
    python_version = sys.version.replace('\n', ' ')
    sys.stdout.write(f'bmp-speaker : {version}\n')
    sys.stdout.write(f'Python      : {python_version}\n')
    uname_str = ' '.join(platform.uname()[:5])
    sys.stdout.write(f'Uname       : {uname_str}\n')
    sys.stdout.write(f'From        : {get_root()}\n')
    sys.stdout.flush()
    return 0
