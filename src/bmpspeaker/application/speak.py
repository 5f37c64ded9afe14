"""connect to a BMP monitoring station and send it messages"""

from __future__ import annotations

import sys
import argparse

from bmpspeaker.environment import getenv
from bmpspeaker.logger import log
from bmpspeaker.logger import lazymsg

from bmpspeaker.cli.colors import OutputFormatter
from bmpspeaker.speaker.dispatch import Dispatcher
from bmpspeaker.speaker.error import ConnectError
from bmpspeaker.speaker.session import Session

from bmpspeaker.application.repl import Repl


def setargs(sub: argparse.ArgumentParser) -> None:
    # fmt:off
    sub.add_argument('-s', '--server', help='monitoring station, HOST, HOST:PORT, [IPV6] or [IPV6]:PORT', required=True, type=str)
    sub.add_argument('-t', '--tracing', help='inject diagnostic trace tags in the emitted messages', action='store_true')
    sub.add_argument('-c', '--command', help='run the command and exit instead of starting the interactive prompt (can be repeated)', action='append', dest='commands', default=[])
    sub.add_argument('--no-color', help='disable colored output', action='store_true')
    # fmt:on


def cmdline(cmdarg: argparse.Namespace) -> int:
    env = getenv()
    log.init(env)

    formatter = OutputFormatter(env.cli.color and not cmdarg.no_color)

    try:
        session = Session.connect(
            cmdarg.server,
            cmdarg.tracing or env.speaker.tracing,
            env.tcp.port,
            env.tcp.timeout,
        )
    except ConnectError as exc:
        log.debug(lazymsg('speaker.connect failed: {exc}', exc=exc), 'startup')
        sys.stderr.write(formatter.format_error(f'{exc}') + '\n')
        sys.stderr.flush()
        return 1

    dispatcher = Dispatcher(session, four_octet=env.speaker.four_octet, hold_time=env.speaker.hold_time)
    repl = Repl(dispatcher, formatter, env.cli.history)

    try:
        if cmdarg.commands:
            return repl.batch(cmdarg.commands)
        repl.run()
        return 0
    finally:
        session.close()
