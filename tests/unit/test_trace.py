# encoding: utf-8
"""test_trace.py

Tests for the trace tag sequencer.
"""

import os
from unittest.mock import patch

import pytest

os.environ['bmpspeaker_log_enable'] = 'false'

from bmpspeaker.speaker.trace import TraceSequencer


class TestTraceSequencer:
    """Test the four bit trace tag counter"""

    @pytest.mark.parametrize('tag', range(1, 15))
    def test_advance_increments(self, tag: int) -> None:
        """Test tags below 15 advance by one"""
        sequencer = TraceSequencer(tag)
        sequencer.advance()
        assert sequencer.current() == tag + 1

    def test_advance_wraps_to_one(self) -> None:
        """Test 15 wraps to 1, never to 0"""
        sequencer = TraceSequencer(15)
        sequencer.advance()
        assert sequencer.current() == 1

    def test_disabled_is_sticky(self) -> None:
        """Test advance() does nothing when tracing is off"""
        sequencer = TraceSequencer(0)
        for _ in range(20):
            sequencer.advance()
        assert sequencer.current() == 0
        assert sequencer.enabled() is False

    def test_full_cycle(self) -> None:
        """Test thirty advances from 1 go around twice"""
        sequencer = TraceSequencer(1)
        seen = []
        for _ in range(30):
            seen.append(sequencer.current())
            sequencer.advance()
        assert seen == list(range(1, 16)) * 2
        assert 0 not in seen

    def test_tracing_factory(self) -> None:
        """Test tracing() starts at 1 when enabled and 0 otherwise"""
        assert TraceSequencer.tracing(True).current() == 1
        assert TraceSequencer.tracing(False).current() == 0

    @pytest.mark.parametrize('tag', [-1, 16, 255])
    def test_out_of_range(self, tag: int) -> None:
        """Test a tag which does not fit four bits is refused"""
        with pytest.raises(ValueError):
            TraceSequencer(tag)

    def test_advance_reports_new_tag(self) -> None:
        """Test the new tag is reported at info level on the trace source"""
        sequencer = TraceSequencer(15)
        with patch('bmpspeaker.speaker.trace.log') as logged:
            sequencer.advance()

        message, source = logged.info.call_args.args
        assert source == 'trace'
        assert message() == 'trace.advance tag=1'
        logged.debug.assert_not_called()

    def test_disabled_reports_nothing(self) -> None:
        """Test a disabled sequencer stays silent"""
        with patch('bmpspeaker.speaker.trace.log') as logged:
            TraceSequencer(0).advance()
        logged.info.assert_not_called()
