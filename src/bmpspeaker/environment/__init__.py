from __future__ import annotations

from bmpspeaker.environment.base import APPLICATION  # noqa: F401,E261
from bmpspeaker.environment.base import ENVFILE  # noqa: F401,E261
from bmpspeaker.environment.base import ROOT  # noqa: F401,E261
from bmpspeaker.environment.base import ETC  # noqa: F401,E261

from bmpspeaker.environment.config import Environment  # noqa: F401,E261

__all__ = [
    'ROOT',
    'ENVFILE',
    'ETC',
    'APPLICATION',
    'Environment',
    'getenv',
]

# Setup environment on import
Environment.setup()


def getenv() -> Environment:
    """Return the global environment configuration."""
    return Environment()
