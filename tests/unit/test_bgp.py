# encoding: utf-8
"""test_bgp.py

Tests for the BGP OPEN and UPDATE messages carried by BMP.
"""

import os
from ipaddress import ip_address, ip_network

import pytest

os.environ['bmpspeaker_log_enable'] = 'false'

from bmpspeaker.bgp.attribute import AS4Path, ASPath, Attribute, Communities, MPRNLRI, MPURNLRI, NextHop, Origin
from bmpspeaker.bgp.family import AFI, SAFI
from bmpspeaker.bgp.message import Message
from bmpspeaker.bgp.nlri import pack_prefix
from bmpspeaker.bgp.open import Capability, Open
from bmpspeaker.bgp.update import Update
from bmpspeaker.route.grammar import Announcement


def _codes(update: Update) -> list[int]:
    return [attribute.ID for attribute in update.attributes]


class TestMessage:
    """Test the BGP header"""

    def test_looks_like(self) -> None:
        """Test a KEEPALIVE is recognised and garbage is not"""
        keepalive = Message.MARKER + bytes([0, 19, Message.CODE.KEEPALIVE])
        assert Message.looks_like(keepalive)
        assert not Message.looks_like(keepalive[:-1])
        assert not Message.looks_like(bytes(19))
        assert not Message.looks_like(keepalive + b'\0')


class TestPrefix:
    """Test NLRI encoding"""

    @pytest.mark.parametrize(
        'prefix,expected',
        [
            ('0.0.0.0/0', b'\x00'),
            ('10.0.0.0/8', b'\x08\x0a'),
            ('10.128.0.0/9', b'\x09\x0a\x80'),
            ('192.0.2.1/32', b'\x20\xc0\x00\x02\x01'),
            ('2001:db8::/32', b'\x20\x20\x01\x0d\xb8'),
        ],
    )
    def test_pack_prefix(self, prefix: str, expected: bytes) -> None:
        """Test only the octets covered by the length are sent"""
        assert pack_prefix(ip_network(prefix)) == expected


class TestOpen:
    """Test OPEN messages"""

    def test_pack(self) -> None:
        """Test an OPEN with the multiprotocol and four octet capabilities"""
        capabilities = [Capability.multiprotocol(AFI.ipv4, SAFI.unicast), Capability.four_bytes_asn(65000)]
        data = Open(65000, 90, 0x01010101, capabilities).pack_message()

        assert data[:16] == Message.MARKER
        assert int.from_bytes(data[16:18], 'big') == len(data)
        assert data[18] == Message.CODE.OPEN
        assert data[19] == 4
        assert data[20:22] == (65000).to_bytes(2, 'big')
        assert data[22:24] == (90).to_bytes(2, 'big')
        assert data[24:28] == b'\x01\x01\x01\x01'
        # one capabilities parameter holding both capabilities
        assert data[28] == 2 + 6 + 6
        assert data[29:31] == bytes([2, 12])
        assert data[31:37] == bytes([1, 4, 0, 1, 0, 1])
        assert data[37:43] == bytes([0x41, 4]) + (65000).to_bytes(4, 'big')

    def test_no_capability(self) -> None:
        """Test an OPEN without optional parameters"""
        data = Open(1, 0, 1).pack_message()
        assert len(data) == 29
        assert data[-1] == 0

    def test_large_asn(self) -> None:
        """Test the OPEN refuses ASNs which need four octets"""
        with pytest.raises(ValueError):
            Open(65536, 90, 1)

    @pytest.mark.parametrize('hold_time', [-1, 1, 2, 65536, 70000])
    def test_invalid_hold_time(self, hold_time: int) -> None:
        """Test the OPEN refuses hold times RFC 4271 does not allow"""
        with pytest.raises(ValueError, match='hold time'):
            Open(65000, hold_time, 1)

    @pytest.mark.parametrize('hold_time', [0, 3, 65535])
    def test_valid_hold_time(self, hold_time: int) -> None:
        """Test zero and three seconds or more are accepted"""
        assert Open(65000, hold_time, 1).pack_message()[22:24] == hold_time.to_bytes(2, 'big')


class TestAttributes:
    """Test path attribute encoding"""

    def test_origin(self) -> None:
        """Test ORIGIN is well-known transitive"""
        assert Origin(Origin.EGP).pack_attribute() == bytes([0x40, 1, 1, 1])

    def test_aspath_four_octets(self) -> None:
        """Test an AS_SEQUENCE of four octet ASNs"""
        data = ASPath([1, 4200000000]).pack_attribute()
        assert data == bytes([0x40, 2, 10, 2, 2]) + (1).to_bytes(4, 'big') + (4200000000).to_bytes(4, 'big')

    def test_aspath_two_octets(self) -> None:
        """Test large ASNs become AS_TRANS in a two octet AS_PATH"""
        data = ASPath([1, 4200000000], asn4=False).pack_attribute()
        assert data == bytes([0x40, 2, 6, 2, 2]) + (1).to_bytes(2, 'big') + (ASPath.AS_TRANS).to_bytes(2, 'big')

    def test_aspath_segments(self) -> None:
        """Test long paths are split every 255 ASNs and use extended length"""
        data = ASPath(list(range(1, 301))).pack_attribute()
        assert data[0] & Attribute.Flag.EXTENDED_LENGTH
        length = int.from_bytes(data[2:4], 'big')
        assert length == 2 + 255 * 4 + 2 + 45 * 4
        assert data[4:6] == bytes([2, 255])

    def test_empty_aspath(self) -> None:
        """Test an empty AS_PATH is still sent"""
        assert ASPath([]).pack_attribute() == bytes([0x40, 2, 0])

    def test_communities(self) -> None:
        """Test COMMUNITY is optional transitive"""
        data = Communities([0xFFFF029A]).pack_attribute()
        assert data == bytes([0xC0, 8, 4, 0xFF, 0xFF, 0x02, 0x9A])

    def test_oversized_attribute(self) -> None:
        """Test a value which does not fit the extended length is refused"""
        with pytest.raises(ValueError, match='community attribute'):
            Communities(range(16384)).pack_attribute()

    def test_attribute_order(self) -> None:
        """Test attributes sort by type code"""
        attributes = sorted([Communities([1]), NextHop(ip_address('10.0.0.1')), Origin(0), AS4Path([1])])
        assert [attribute.ID for attribute in attributes] == [1, 3, 8, 17]


class TestUpdate:
    """Test UPDATE building from route descriptions"""

    def test_empty(self) -> None:
        """Test nothing to send is an End-of-RIB, with a warning"""
        update = Update.make_update([], None)
        assert update.pack_message() == Message.MARKER + bytes([0, 23, 2, 0, 0, 0, 0])
        assert any('End-of-RIB' in warning for warning in update.warnings)

    def test_ipv4_withdrawal(self) -> None:
        """Test IPv4 withdrawals use the withdrawn routes field"""
        update = Update.make_update([ip_network('10.0.0.0/8')], None)
        data = update.pack_message()
        assert data[19:21] == (2).to_bytes(2, 'big')
        assert data[21:23] == b'\x08\x0a'
        assert data[23:25] == bytes(2)
        assert update.warnings == []

    def test_ipv6_withdrawal(self) -> None:
        """Test IPv6 withdrawals use MP_UNREACH_NLRI"""
        update = Update.make_update([ip_network('2001:db8::/32')], None)
        assert _codes(update) == [MPURNLRI.ID]
        assert update.withdrawn == ()

    def test_ipv4_announcement(self) -> None:
        """Test an IPv4 announcement uses NEXT_HOP and the NLRI field"""
        announcement = Announcement.parse('e [123,456,789] 10.0.0.1 BLACKHOLE,123:44 127.0.0.1/32')
        update = Update.make_update([], announcement)

        assert _codes(update) == [Origin.ID, ASPath.ID, NextHop.ID, Communities.ID]
        assert update.nlris == (ip_network('127.0.0.1/32'),)
        assert update.warnings == []
        assert update.pack_message().endswith(b'\x20\x7f\x00\x00\x01')

    def test_ipv6_announcement(self) -> None:
        """Test IPv6 NLRI are carried in MP_REACH_NLRI"""
        announcement = Announcement.parse('i [65000] 2001:db8::1 none 2001:db8:1::/48')
        update = Update.make_update([], announcement)

        assert _codes(update) == [Origin.ID, ASPath.ID, MPRNLRI.ID]
        assert update.nlris == ()
        assert update.warnings == []

    def test_ipv6_nlri_ipv4_nexthop(self) -> None:
        """Test an IPv4 next-hop is mapped for IPv6 NLRI"""
        announcement = Announcement.parse('i [65000] 10.0.0.1 none 2001:db8:1::/48')
        update = Update.make_update([], announcement)

        mp = [attribute for attribute in update.attributes if isinstance(attribute, MPRNLRI)]
        assert mp[0].nexthop == ip_address('::ffff:10.0.0.1').packed
        assert len(update.warnings) == 1

    def test_mixed_families(self) -> None:
        """Test IPv4 NLRI with an IPv6 next-hop need a second MP_REACH_NLRI"""
        announcement = Announcement.parse('i [65000] 2001:db8::1 none 10.0.0.0/8,2001:db8:1::/48')
        update = Update.make_update([], announcement)

        assert _codes(update).count(MPRNLRI.ID) == 2
        assert any('more than one MP_REACH_NLRI' in warning for warning in update.warnings)

    def test_two_octet_path(self) -> None:
        """Test AS4_PATH is added when large ASNs are sent in two octets"""
        announcement = Announcement.parse('i [65000,4200000000] 10.0.0.1 none 10.0.0.0/8')
        update = Update.make_update([], announcement, asn4=False)

        assert AS4Path.ID in _codes(update)
        assert any('AS_TRANS' in warning for warning in update.warnings)

    def test_two_octet_path_small(self) -> None:
        """Test no AS4_PATH when every ASN fits in two octets"""
        announcement = Announcement.parse('i [65000] 10.0.0.1 none 10.0.0.0/8')
        update = Update.make_update([], announcement, asn4=False)

        assert AS4Path.ID not in _codes(update)
        assert update.warnings == []
