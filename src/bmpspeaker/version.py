from __future__ import annotations

import os
import sys


def get_root() -> str:
    return os.path.abspath(os.path.sep.join(__file__.split(os.path.sep)[:-1]))


def _get_base_version() -> str:
    """Version of the installed package, 'unknown' for a bare checkout."""
    try:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        return pkg_version('bmp-speaker')
    except PackageNotFoundError:
        return 'unknown'


version = os.environ.get('bmpspeaker_version', _get_base_version())

REQUIRED_PYTHON_MAJOR = 3
REQUIRED_PYTHON_MINOR = 10

if sys.version_info[:2] < (REQUIRED_PYTHON_MAJOR, REQUIRED_PYTHON_MINOR):
    sys.exit('bmp-speaker requires python3.10 or later')


if __name__ == '__main__':
    sys.stdout.write(version)
