# encoding: utf-8
"""test_environment.py

Unit tests for bmpspeaker.environment modules
"""

import os
from unittest.mock import patch

import pytest

os.environ['bmpspeaker_log_enable'] = 'false'

from bmpspeaker.environment import APPLICATION, Environment, getenv
from bmpspeaker.environment import parsing
from bmpspeaker.environment.config import DEFAULT_BMP_PORT, ConfigSection, option


@pytest.fixture
def environment(tmp_path):
    """Reload the configuration around a test, from a missing file"""
    envfile = str(tmp_path / 'bmpspeaker.env')
    yield envfile
    Environment.reload(str(tmp_path / 'missing.env'))


class TestConfigOption:
    """Test ConfigOption descriptor"""

    def test_option_default(self) -> None:
        """Test ConfigOption returns default value"""

        class TestSection(ConfigSection):
            _section_name = 'test'
            value: bool = option(True, 'test option')

        section = TestSection()
        assert section.value is True

    def test_option_dict_access(self) -> None:
        """Test ConfigSection supports dict-style access with dashes"""

        class TestSection(ConfigSection):
            _section_name = 'test'
            test_key: str = option('value', 'test option')

        section = TestSection()
        assert section['test-key'] == 'value'
        section['test-key'] = 'modified'
        assert section.test_key == 'modified'

    def test_option_parse(self) -> None:
        """Test values are parsed by the type of their default"""

        class TestSection(ConfigSection):
            _section_name = 'test'
            flag: bool = option(False, 'a flag')
            count: int = option(1, 'a count')
            name: str = option('', 'a name')

        options = TestSection.options()
        assert options['flag'].parse('yes') is True
        assert options['count'].parse('42') == 42
        assert options['name'].parse("'quoted'") == 'quoted'

    def test_reset(self) -> None:
        """Test reset returns to the defaults"""

        class TestSection(ConfigSection):
            _section_name = 'test'
            count: int = option(1, 'a count')

        section = TestSection()
        section.count = 5
        section.reset()
        assert section.count == 1


class TestEnvironment:
    """Test the configuration singleton"""

    def test_singleton(self) -> None:
        """Test getenv always returns the same instance"""
        assert getenv() is getenv()
        assert getenv() is Environment()

    def test_application(self) -> None:
        """Test the configuration prefix"""
        assert APPLICATION == 'bmpspeaker'

    def test_defaults(self, environment: str) -> None:
        """Test the documented defaults"""
        Environment.reload(environment)
        env = getenv()

        assert env.tcp.port == DEFAULT_BMP_PORT == 11019
        assert env.speaker.tracing is False
        assert env.speaker.hold_time == 90
        assert env.speaker.four_octet is True
        assert env.log.level == 'INFO'

    def test_dotted_variable(self, environment: str) -> None:
        """Test bmpspeaker.section.option variables"""
        with patch.dict(os.environ, {'bmpspeaker.speaker.tracing': 'true', 'bmpspeaker.tcp.port': '1790'}):
            Environment.reload(environment)
            assert getenv().speaker.tracing is True
            assert getenv().tcp.port == 1790

    def test_underscore_variable(self, environment: str) -> None:
        """Test bmpspeaker_section_option variables"""
        with patch.dict(os.environ, {'bmpspeaker_speaker_hold_time': '30'}):
            Environment.reload(environment)
            assert getenv().speaker.hold_time == 30

    def test_ini_file(self, environment: str) -> None:
        """Test values read from the INI file"""
        with open(environment, 'w') as envfile:
            envfile.write('[bmpspeaker.speaker]\nfour_octet = false\n\n[bmpspeaker.log]\nlevel = debug\n')

        Environment.reload(environment)
        assert getenv().speaker.four_octet is False
        assert getenv().log.level == 'DEBUG'

    def test_variable_beats_ini(self, environment: str) -> None:
        """Test environment variables have priority over the file"""
        with open(environment, 'w') as envfile:
            envfile.write('[bmpspeaker.tcp]\nport = 2000\n')

        with patch.dict(os.environ, {'bmpspeaker_tcp_port': '3000'}):
            Environment.reload(environment)
            assert getenv().tcp.port == 3000

    def test_invalid_value(self, environment: str) -> None:
        """Test an unparsable value names the option"""
        with patch.dict(os.environ, {'bmpspeaker.tcp.port': '70000'}):
            with pytest.raises(ValueError, match='tcp.port'):
                Environment.reload(environment)

    def test_invalid_hold_time(self, environment: str) -> None:
        """Test a hold time the OPEN cannot carry is refused at load time"""
        with patch.dict(os.environ, {'bmpspeaker_speaker_hold_time': '70000'}):
            with pytest.raises(ValueError, match='speaker.hold_time'):
                Environment.reload(environment)

    def test_iter_env_diff(self, environment: str) -> None:
        """Test only changed values are listed with diff"""
        with patch.dict(os.environ, {'bmpspeaker.speaker.tracing': 'true'}):
            Environment.reload(environment)
            lines = list(Environment.iter_env(diff=True))
            assert 'bmpspeaker.speaker.tracing=true' in lines
            assert not any(line.startswith('bmpspeaker.tcp.') for line in lines)

    def test_iter_ini(self, environment: str) -> None:
        """Test the INI output has a header per section"""
        Environment.reload(environment)
        lines = list(Environment.iter_ini())
        assert '\n[bmpspeaker.tcp]' in lines
        assert 'port = 11019' in lines

    def test_default_lines(self) -> None:
        """Test every option is documented"""
        lines = list(Environment.default())
        assert any(line.startswith('bmpspeaker.tcp.port') for line in lines)
        assert any(line.startswith('bmpspeaker.cli.history') for line in lines)


class TestParsing:
    """Test configuration readers"""

    @pytest.mark.parametrize('text', ['1', 'yes', 'on', 'enable', 'TRUE'])
    def test_boolean_true(self, text: str) -> None:
        """Test truthy spellings"""
        assert parsing.boolean(text) is True

    def test_boolean_false(self) -> None:
        """Test anything else is false"""
        assert parsing.boolean('no') is False

    def test_port(self) -> None:
        """Test port range"""
        assert parsing.port('179') == 179
        with pytest.raises(TypeError):
            parsing.port('0')

    def test_hold_time(self) -> None:
        """Test hold times are zero or three to 65535 seconds"""
        assert parsing.hold_time('0') == 0
        assert parsing.hold_time('180') == 180
        for value in ('1', '2', '65536', '-5'):
            with pytest.raises(TypeError):
                parsing.hold_time(value)

    def test_level(self) -> None:
        """Test log levels are normalised"""
        assert parsing.syslog_value('warning') == 'WARNING'
        with pytest.raises(TypeError):
            parsing.syslog_value('LOUD')
