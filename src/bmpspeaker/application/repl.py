"""repl.py

Interactive command loop of the speaker.

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import os
from typing import Iterable

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory, InMemoryHistory

from bmpspeaker.cli.colors import OutputFormatter
from bmpspeaker.logger import log
from bmpspeaker.logger import lazymsg
from bmpspeaker.speaker.command import Command
from bmpspeaker.speaker.dispatch import Dispatcher
from bmpspeaker.speaker.error import ArgumentError, InputError, WriteError

BUILTINS = ('help', 'quit', 'exit')


class Repl:
    def __init__(self, dispatcher: Dispatcher, formatter: OutputFormatter, history: str = '') -> None:
        self.dispatcher = dispatcher
        self.formatter = formatter
        self.history = history
        self.running = True

        # encoder warnings are shown as they happen, before the next command
        self.dispatcher.report = self.warn

    def warn(self, warning: str) -> None:
        print(self.formatter.format_warning(warning))

    def help(self, name: str = '') -> None:
        if name:
            try:
                klass = Command.klass(name)
            except ArgumentError as exc:
                print(self.formatter.format_error(str(exc)))
                return
            print(self.formatter.format_help(klass.usage(), klass.HELP))
            for argument, text in klass.arguments():
                print(f'    {argument:<26} {text}')
            return

        for command in Command.names():
            klass = Command.klass(command)
            print(self.formatter.format_help(klass.usage(), klass.HELP))
        print(self.formatter.format_help('help [command]', 'show the usage of every command, or of one'))
        print(self.formatter.format_help('quit', 'leave the speaker (exit and Ctrl-D work too)'))

    def execute(self, line: str) -> bool:
        """Run one line, False if the command failed."""
        words = line.split()
        if not words:
            return True

        if words[0] in ('quit', 'exit'):
            self.running = False
            return True

        if words[0] == 'help':
            self.help(words[1] if len(words) > 1 else '')
            return True

        log.debug(lazymsg('cli.execute line={line!r}', line=line), 'cli')
        try:
            emission = self.dispatcher.run(line)
        except (InputError, WriteError) as exc:
            print(self.formatter.format_error(str(exc)))
            return False

        tag = f', trace tag {emission.tag}' if emission.tag else ''
        print(self.formatter.format_success(f'{emission.command} sent ({emission.size} bytes{tag})'))
        return True

    def batch(self, lines: Iterable[str]) -> int:
        """Run every line, stopping on quit, the exit code is 1 if any failed."""
        code = 0
        for line in lines:
            if not self.execute(line):
                code = 1
            if not self.running:
                break
        return code

    def _history(self) -> FileHistory | InMemoryHistory:
        if not self.history:
            return InMemoryHistory()
        return FileHistory(os.path.expanduser(self.history))

    def run(self) -> None:
        session: PromptSession[str] = PromptSession(
            history=self._history(),
            completer=WordCompleter(Command.names() + list(BUILTINS), sentence=True),
            auto_suggest=AutoSuggestFromHistory(),
            enable_history_search=True,
        )

        print("Type 'help' for the available commands, 'quit' or Ctrl-D to leave")
        while self.running:
            try:
                line = session.prompt(self.formatter.format_prompt())
            except KeyboardInterrupt:
                # Ctrl-C clears the line
                continue
            except EOFError:
                print()
                break
            self.execute(line.strip())
