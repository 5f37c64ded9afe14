"""config.py

Typed configuration system using dataclasses and descriptors.

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Generic, Iterator, TypeVar, cast
import configparser as ConfigParser

from bmpspeaker.environment import base
from bmpspeaker.environment import parsing
from bmpspeaker.environment.base import ENVFILE

T = TypeVar('T')

DEFAULT_BMP_PORT: int = 11019


@dataclass
class ConfigOption(Generic[T]):
    """Descriptor for typed configuration options."""

    default: T
    help: str
    reader: Callable[[str], T] | None = None
    writer: Callable[[T], str] | None = None

    name: str = field(default='', init=False)

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: Any, owner: type) -> T | ConfigOption[T]:
        if obj is None:
            return self
        result: T = obj._values.get(self.name, self.default)
        return result

    def __set__(self, obj: Any, value: T) -> None:
        obj._values[self.name] = value

    def parse(self, value: str) -> T:
        if self.reader is not None:
            return self.reader(value)
        if isinstance(self.default, bool):
            return cast(T, parsing.boolean(value))
        if isinstance(self.default, int):
            return cast(T, parsing.integer(value))
        if isinstance(self.default, str):
            return cast(T, parsing.unquote(value))
        raise TypeError(f'Unsupported config type: {type(self.default).__name__}')

    def format(self, value: T) -> str:
        if self.writer is not None:
            return self.writer(value)
        if isinstance(self.default, bool):
            return parsing.lower(value)
        if isinstance(self.default, str):
            return parsing.quote(value)
        return str(value)


def option(
    default: T,
    help: str,
    reader: Callable[[str], T] | None = None,
    writer: Callable[[T], str] | None = None,
) -> T:
    """Factory for ConfigOption - returns T for type inference."""
    return cast(T, ConfigOption(default, help, reader, writer))


class ConfigSection:
    _section_name: ClassVar[str] = ''

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    @classmethod
    def options(cls) -> dict[str, ConfigOption[Any]]:
        result: dict[str, ConfigOption[Any]] = {}
        for name in dir(cls):
            attr = getattr(cls, name, None)
            if isinstance(attr, ConfigOption):
                result[name] = attr
        return result

    def __getitem__(self, key: str) -> Any:
        return getattr(self, key.replace('-', '_'))

    def __setitem__(self, key: str, value: Any) -> None:
        setattr(self, key.replace('-', '_'), value)

    def reset(self) -> None:
        self._values.clear()


_SPACE: str = ' ' * 33
LOGGING_HELP_STDOUT: str = f"""\
where logging should log
{_SPACE} syslog sends the data to the local syslog
{_SPACE} stdout sends the data to stdout
{_SPACE} stderr sends the data to stderr
{_SPACE} file:<filename> send the data to a file"""


class LogSection(ConfigSection):
    _section_name: ClassVar[str] = 'log'

    enable: bool = option(True, 'enable logging')
    level: str = option(
        'INFO',
        'log message with at least the priority SYSLOG.<level>',
        reader=parsing.syslog_value,
        writer=parsing.syslog_value,
    )
    destination: str = option('stderr', LOGGING_HELP_STDOUT)
    all: bool = option(False, 'report debug information for everything')
    session: bool = option(True, 'report session locking and trace tag changes')
    network: bool = option(True, 'report networking information (TCP/IP, connection state)')
    command: bool = option(True, 'report command dispatching')
    packets: bool = option(False, 'report BMP messages sent as hexadecimal')
    short: bool = option(True, 'use short log format (not prepended with time and pid)')


class TcpSection(ConfigSection):
    _section_name: ClassVar[str] = 'tcp'

    port: int = option(DEFAULT_BMP_PORT, 'port of the monitoring station when none is given', reader=parsing.port)
    timeout: int = option(0, 'seconds to wait for the connection to establish (0 for the OS default)')


class SpeakerSection(ConfigSection):
    _section_name: ClassVar[str] = 'speaker'

    tracing: bool = option(False, 'inject diagnostic trace tags in the emitted messages')
    hold_time: int = option(
        90, 'hold time placed in the OPEN messages of peer up notifications', reader=parsing.hold_time
    )
    four_octet: bool = option(True, 'advertise the four octet AS capability in peer up OPEN messages')


class CliSection(ConfigSection):
    _section_name: ClassVar[str] = 'cli'

    history: str = option('~/.bmpspeaker_history', 'file used to keep the command line history', reader=parsing.path)
    color: bool = option(True, 'use colors when the output is a terminal')


nonedict: dict[str, str] = {}


class Environment:
    """Typed environment configuration singleton."""

    _instance: ClassVar[Environment | None] = None
    _setup_done: ClassVar[bool] = False

    log: LogSection
    tcp: TcpSection
    speaker: SpeakerSection
    cli: CliSection

    def __new__(cls) -> Environment:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._init_sections()
        return cls._instance

    def _init_sections(self) -> None:
        self.log = LogSection()
        self.tcp = TcpSection()
        self.speaker = SpeakerSection()
        self.cli = CliSection()

    def _sections(self) -> dict[str, ConfigSection]:
        return {
            'log': self.log,
            'tcp': self.tcp,
            'speaker': self.speaker,
            'cli': self.cli,
        }

    @classmethod
    def setup(cls, envfile: str = ENVFILE) -> None:
        """Load configuration from environment variables and INI file."""
        if cls._setup_done:
            return
        cls._setup_done = True

        env = cls()

        ini: ConfigParser.ConfigParser = ConfigParser.ConfigParser()
        if os.path.exists(envfile):
            ini.read(envfile)

        for section_name, section in env._sections().items():
            for option_name, opt in section.options().items():
                proxy_section = f'{base.APPLICATION}.{section_name}'
                env_name = f'{proxy_section}.{option_name}'
                rep_name = env_name.replace('.', '_')

                # Priority: env var (dot) > env var (underscore) > INI file > default
                conf: str | None = None
                if env_name in os.environ:
                    conf = os.environ.get(env_name)
                elif rep_name in os.environ:
                    conf = os.environ.get(rep_name)
                else:
                    try:
                        conf = parsing.unquote(ini.get(proxy_section, option_name, vars=nonedict))
                    except (ConfigParser.NoSectionError, ConfigParser.NoOptionError):
                        conf = None

                if conf is not None:
                    try:
                        section[option_name] = opt.parse(conf)
                    except (TypeError, ValueError):
                        raise ValueError(f'invalid value for {section_name}.{option_name} : {conf}') from None

    @classmethod
    def reload(cls, envfile: str = ENVFILE) -> None:
        """Forget every loaded value and read the configuration again."""
        env = cls()
        for section in env._sections().values():
            section.reset()
        cls._setup_done = False
        cls.setup(envfile)

    def __getitem__(self, key: str) -> ConfigSection:
        result: ConfigSection = getattr(self, key.replace('-', '_'))
        return result

    def __iter__(self) -> Iterator[str]:
        return iter(self._sections().keys())

    @classmethod
    def default(cls) -> Iterator[str]:
        """Yield default configuration lines."""
        env = cls()
        for section_name, section in env._sections().items():
            for option_name, opt in section.options().items():
                default = f"'{opt.default}'" if isinstance(opt.default, str) else opt.default
                padding = ' ' * (18 - len(section_name) - len(option_name))
                yield f'{base.APPLICATION}.{section_name}.{option_name} {padding} {opt.help}. default ({default})'

    @classmethod
    def iter_ini(cls, diff: bool = False) -> Iterator[str]:
        """Yield INI-format configuration lines."""
        env = cls()
        for section_name, section in env._sections().items():
            header = f'\n[{base.APPLICATION}.{section_name}]'
            for option_name, opt in section.options().items():
                value = getattr(section, option_name)
                if diff and value == opt.default:
                    continue
                if header:
                    yield header
                    header = ''
                yield f'{option_name} = {opt.format(value)}'

    @classmethod
    def iter_env(cls, diff: bool = False) -> Iterator[str]:
        """Yield environment variable format lines."""
        env = cls()
        for section_name, section in env._sections().items():
            for option_name, opt in section.options().items():
                value = getattr(section, option_name)
                if diff and value == opt.default:
                    continue
                yield f'{base.APPLICATION}.{section_name}.{option_name}={opt.format(value)}'
