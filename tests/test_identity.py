"""Tests for hostname and management address discovery."""

import ipaddress
import socket
from collections import namedtuple
from unittest.mock import patch

import pytest

from snapmon.errors import IdentityError
from snapmon.identity import Identity, get_hostname, is_global_unicast, resolve_identity

# Mirrors psutil's snicaddr
Addr = namedtuple('Addr', ['family', 'address', 'netmask', 'broadcast', 'ptp'])


def v4(address, netmask='255.255.255.0'):
    return Addr(socket.AF_INET, address, netmask, None, None)


def v6(address, netmask='ffff:ffff:ffff:ffff::'):
    return Addr(socket.AF_INET6, address, netmask, None, None)


def mac(address='00:11:22:33:44:55'):
    return Addr(-1, address, None, None, None)


@pytest.fixture
def hostname():
    with patch('snapmon.identity.socket.gethostname', return_value='sw1'):
        yield 'sw1'


def _resolve(interfaces):
    with patch('snapmon.identity.psutil.net_if_addrs', return_value=interfaces):
        return resolve_identity()


class TestResolveIdentity:
    def test_eth0_v4_and_global_v6(self, hostname):
        identity = _resolve({
            'lo': [v4('127.0.0.1', '255.0.0.0'), v6('::1', 'ffff:ffff:ffff:ffff:ffff:ffff:ffff:ffff')],
            'eth0': [v4('10.1.1.5'), v6('2001:db8::5'), mac()],
        })
        assert identity == Identity(hostname='sw1', mgmt_ipv4='10.1.1.5/24', mgmt_ipv6='2001:db8::5/64')

    def test_ma1_is_used(self, hostname):
        identity = _resolve({'ma1': [v4('192.168.0.10', '255.255.0.0')]})
        assert identity.mgmt_ipv4 == '192.168.0.10/16'
        assert identity.mgmt_ipv6 == ''

    def test_link_local_v6_is_not_a_management_address(self, hostname):
        identity = _resolve({'eth0': [v4('10.1.1.5'), v6('fe80::1%eth0')]})
        assert identity.mgmt_ipv4 == '10.1.1.5/24'
        assert identity.mgmt_ipv6 == ''

    def test_other_interfaces_are_ignored(self, hostname):
        identity = _resolve({'eth1': [v4('10.9.9.9')], 'fpPort1': [v6('2001:db8::9')]})
        assert identity == Identity(hostname='sw1')

    def test_last_candidate_wins(self, hostname):
        identity = _resolve({'ma1': [v4('10.0.0.1')], 'eth0': [v4('10.0.0.2')]})
        assert identity.mgmt_ipv4 == '10.0.0.2/24'

    def test_no_interfaces(self, hostname):
        assert _resolve({}) == Identity(hostname='sw1', mgmt_ipv4='', mgmt_ipv6='')

    def test_missing_netmask_leaves_plain_address(self, hostname):
        identity = _resolve({'eth0': [v4('10.1.1.5', None)]})
        assert identity.mgmt_ipv4 == '10.1.1.5'

    def test_enumeration_failure(self, hostname):
        with patch('snapmon.identity.psutil.net_if_addrs', side_effect=OSError("netlink")):
            with pytest.raises(IdentityError):
                resolve_identity()


class TestHelpers:
    @pytest.mark.parametrize("address, expected", [
        ('2001:db8::1', True),
        ('10.0.0.1', True),
        ('fe80::1', False),
        ('::1', False),
        ('::', False),
        ('ff02::1', False),
        ('127.0.0.1', False),
    ])
    def test_is_global_unicast(self, address, expected):
        assert is_global_unicast(ipaddress.ip_address(address)) is expected

    def test_get_hostname_failure_returns_empty(self):
        with patch('snapmon.identity.socket.gethostname', side_effect=OSError("nope")):
            assert get_hostname() == ''

    def test_tag_shapes(self):
        identity = Identity(hostname='sw1', mgmt_ipv4='10.0.0.5/24')
        assert identity.host_tags() == {'hostname': 'sw1'}
        assert identity.device_tags() == {'hostname': 'sw1', 'mgmt-ip': '10.0.0.5/24', 'mgmt-ipv6': ''}
        assert identity.entry_tags('VlanId', '10') == {
            'VlanId': '10', 'Hostname': 'sw1', 'mgmtip': '10.0.0.5/24', 'mgmtipv6': '',
        }
