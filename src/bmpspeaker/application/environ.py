"""bmp-speaker configuration values"""

from __future__ import annotations

import sys
import argparse

from bmpspeaker.environment import Environment


def setargs(sub: argparse.ArgumentParser) -> None:
    # fmt: off
    sub.add_argument('-d', '--diff', help='show only the different from the defaults', action='store_true')
    sub.add_argument('-e', '--env', help='display using environment (not ini)', action='store_true')
    sub.add_argument('--defaults', help='list every option with its documentation and default', action='store_true')
    # fmt: on


def default() -> None:
    sys.stdout.write('\nEnvironment values are:\n')
    sys.stdout.write('\n'.join('    %s' % _ for _ in Environment.default()))
    sys.stdout.write('\n')
    sys.stdout.flush()


def cmdline(cmdarg: argparse.Namespace) -> int:
    if cmdarg.defaults:
        default()
        return 0

    dispatch = {
        True: Environment.iter_env,
        False: Environment.iter_ini,
    }

    for line in dispatch[cmdarg.env](cmdarg.diff):
        sys.stdout.write('%s\n' % line)
        sys.stdout.flush()
    return 0
