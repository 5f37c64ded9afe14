"""colors.py

ANSI color codes for the command line output.

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import os
import sys


class Colors:
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    CYAN = '\033[36m'

    @classmethod
    def supports_color(cls) -> bool:
        if not hasattr(sys.stdout, 'isatty') or not sys.stdout.isatty():
            return False

        if os.environ.get('TERM', '') in ('dumb', ''):
            return False

        # https://no-color.org/
        if os.environ.get('NO_COLOR'):
            return False

        return True


class OutputFormatter:
    """Format and colorize what the speaker prints"""

    def __init__(self, use_color: bool = True):
        self.use_color = use_color and Colors.supports_color()

    def format_prompt(self, name: str = 'bmp-speaker') -> str:
        # prompt_toolkit renders the prompt itself, no escape codes here
        return f'{name}> '

    def format_error(self, message: str) -> str:
        if self.use_color:
            return f'{Colors.BOLD}{Colors.RED}Error:{Colors.RESET} {message}'
        return f'Error: {message}'

    def format_warning(self, message: str) -> str:
        if self.use_color:
            return f'{Colors.BOLD}{Colors.YELLOW}Warning:{Colors.RESET} {message}'
        return f'Warning: {message}'

    def format_success(self, message: str) -> str:
        if self.use_color:
            return f'{Colors.BOLD}{Colors.GREEN}✓{Colors.RESET} {message}'
        return f'✓ {message}'

    def format_help(self, usage: str, text: str) -> str:
        if self.use_color:
            return f'{Colors.CYAN}{usage}{Colors.RESET}\n    {Colors.DIM}{text}{Colors.RESET}'
        return f'{usage}\n    {text}'
