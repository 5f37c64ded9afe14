# encoding: utf-8
"""test_connection.py

Tests for the connection to the monitoring station.
"""

import errno
import os
from unittest.mock import Mock, patch

import pytest

os.environ['bmpspeaker_log_enable'] = 'false'

from bmpspeaker.network.connection import Connection, endpoint
from bmpspeaker.network.error import LostConnection, NetworkError, NotConnected
from bmpspeaker.speaker.error import ConnectError
from bmpspeaker.speaker.session import Session


class TestEndpoint:
    """Test server address parsing"""

    @pytest.mark.parametrize(
        'server,expected',
        [
            ('127.0.0.1', ('127.0.0.1', 11019)),
            ('127.0.0.1:5000', ('127.0.0.1', 5000)),
            ('collector.example.com', ('collector.example.com', 11019)),
            ('collector.example.com:1790', ('collector.example.com', 1790)),
            ('[2001:db8::1]', ('2001:db8::1', 11019)),
            ('[2001:db8::1]:5000', ('2001:db8::1', 5000)),
            ('2001:db8::1', ('2001:db8::1', 11019)),
            ('::1', ('::1', 11019)),
        ],
    )
    def test_valid(self, server: str, expected: tuple) -> None:
        """Test every accepted form"""
        assert endpoint(server, 11019) == expected

    @pytest.mark.parametrize('server', ['', ':5000', '127.0.0.1:', '127.0.0.1:70000', '[::1', '[::1]5000', '[]:1', 'host:port'])
    def test_invalid(self, server: str) -> None:
        """Test malformed addresses"""
        with pytest.raises(ValueError):
            endpoint(server, 11019)


class TestConnection:
    """Test the outgoing connection"""

    def test_initial_state(self) -> None:
        """Test a new connection is not established"""
        conn = Connection('192.0.2.1', 11019)
        assert conn.io is None
        assert conn.established() is False
        assert conn.address() == '192.0.2.1:11019'

    def test_ipv6_address(self) -> None:
        """Test IPv6 hosts are bracketed"""
        assert Connection('2001:db8::1', 5000).address() == '[2001:db8::1]:5000'

    def test_zero_timeout(self) -> None:
        """Test a zero timeout means the OS default"""
        assert Connection('192.0.2.1', 11019, 0).timeout is None

    @patch('bmpspeaker.network.connection.socket.create_connection')
    def test_establish(self, mock_create: Mock) -> None:
        """Test establishing uses the host and port, then blocks on writes"""
        sock = Mock()
        mock_create.return_value = sock
        conn = Connection('192.0.2.1', 11019, 5)

        conn.establish()

        mock_create.assert_called_once_with(('192.0.2.1', 11019), timeout=5)
        sock.settimeout.assert_called_once_with(None)
        assert conn.established()

    @patch('bmpspeaker.network.connection.socket.create_connection')
    def test_establish_failure(self, mock_create: Mock) -> None:
        """Test a refused connection"""
        mock_create.side_effect = ConnectionRefusedError(errno.ECONNREFUSED, 'Connection refused')
        conn = Connection('192.0.2.1', 11019)

        with pytest.raises(NotConnected, match='192.0.2.1:11019'):
            conn.establish()
        assert not conn.established()

    def test_write(self) -> None:
        """Test the whole buffer is handed to sendall"""
        conn = Connection('192.0.2.1', 11019)
        conn.io = Mock()

        conn.write(b'\x03\x00\x00\x00\x06\x04')
        conn.io.sendall.assert_called_once_with(b'\x03\x00\x00\x00\x06\x04')

    def test_write_not_connected(self) -> None:
        """Test writing before connecting"""
        with pytest.raises(NotConnected):
            Connection('192.0.2.1', 11019).write(b'data')

    def test_write_fatal(self) -> None:
        """Test a reset connection is lost but stays open"""
        conn = Connection('192.0.2.1', 11019)
        conn.io = Mock()
        conn.io.sendall.side_effect = ConnectionResetError(errno.ECONNRESET, 'Connection reset by peer')

        with pytest.raises(LostConnection):
            conn.write(b'data')
        assert conn.io is not None
        conn.io.close.assert_not_called()

    def test_write_other(self) -> None:
        """Test other errors are network errors"""
        conn = Connection('192.0.2.1', 11019)
        conn.io = Mock()
        conn.io.sendall.side_effect = OSError(errno.ENOBUFS, 'No buffer space available')

        with pytest.raises(NetworkError) as exc:
            conn.write(b'data')
        assert not isinstance(exc.value, LostConnection)

    def test_close(self) -> None:
        """Test closing releases the socket, twice is harmless"""
        conn = Connection('192.0.2.1', 11019)
        sock = Mock()
        conn.io = sock

        conn.close()
        conn.close()

        sock.close.assert_called_once()
        assert conn.io is None


class TestSessionConnect:
    """Test opening a session"""

    @patch('bmpspeaker.network.connection.socket.create_connection')
    def test_connect(self, mock_create: Mock) -> None:
        """Test the session starts with tracing as asked"""
        mock_create.return_value = Mock()

        session = Session.connect('[::1]:5000', True, 11019)

        mock_create.assert_called_once_with(('::1', 5000), timeout=None)
        assert session.with_exclusive_access(lambda connection, sequencer: sequencer.current()) == 1

    @patch('bmpspeaker.network.connection.socket.create_connection')
    def test_connect_untraced(self, mock_create: Mock) -> None:
        """Test tracing off starts at 0"""
        mock_create.return_value = Mock()
        session = Session.connect('127.0.0.1', False, 11019)
        assert session.with_exclusive_access(lambda connection, sequencer: sequencer.current()) == 0

    @patch('bmpspeaker.network.connection.socket.create_connection')
    def test_connect_refused(self, mock_create: Mock) -> None:
        """Test a refused connection is a connect error"""
        mock_create.side_effect = ConnectionRefusedError(errno.ECONNREFUSED, 'Connection refused')
        with pytest.raises(ConnectError):
            Session.connect('127.0.0.1', False, 11019)

    def test_connect_bad_address(self) -> None:
        """Test an invalid server is a connect error"""
        with pytest.raises(ConnectError):
            Session.connect('127.0.0.1:port', False, 11019)
