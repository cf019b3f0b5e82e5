# -----------------------------------------------------------------------------
# Copyright (c) 2026 SnapRoute Telemetry Collector contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Host identity used to tag every sample: hostname and management addresses.
"""

import ipaddress
import logging
import socket
from dataclasses import dataclass
from typing import Dict, Optional

import psutil

from snapmon.errors import IdentityError

LOG = logging.getLogger(__name__)

# Front-panel management port on SnapRoute boxes, and the usual VM/dev NIC
MANAGEMENT_INTERFACES = ('ma1', 'eth0')


@dataclass(frozen=True)
class Identity:
    hostname: str
    mgmt_ipv4: str = ''
    mgmt_ipv6: str = ''

    def host_tags(self) -> Dict[str, str]:
        return {'hostname': self.hostname}

    def device_tags(self) -> Dict[str, str]:
        return {'hostname': self.hostname, 'mgmt-ip': self.mgmt_ipv4, 'mgmt-ipv6': self.mgmt_ipv6}

    def entry_tags(self, key: str, value: str) -> Dict[str, str]:
        """Tags for one object of a list endpoint, discriminator first."""
        return {
            key: value,
            'Hostname': self.hostname,
            'mgmtip': self.mgmt_ipv4,
            'mgmtipv6': self.mgmt_ipv6,
        }


def get_hostname() -> str:
    try:
        return socket.gethostname()
    except OSError as e:
        LOG.error(f"Hostname get error: {e}")
        return ''


def _prefix_length(netmask: Optional[str]) -> Optional[int]:
    if not netmask:
        return None
    try:
        return bin(int(ipaddress.ip_address(netmask))).count('1')
    except ValueError:
        return None


def is_global_unicast(ip) -> bool:
    """Any unicast address outside loopback and link-local, private ranges included."""
    return not (ip.is_unspecified or ip.is_loopback or ip.is_multicast or ip.is_link_local)


def resolve_identity() -> Identity:
    """
    Discover hostname plus management IPv4/IPv6 from ma1 and eth0.

    Addresses are returned CIDR-qualified as configured on the interface.
    When several candidates exist the last one enumerated wins. Missing
    management interfaces leave the addresses empty.

    Raises:
        IdentityError: the interface list cannot be read
    """
    hostname = get_hostname()
    try:
        interfaces = psutil.net_if_addrs()
    except (OSError, psutil.Error) as e:
        raise IdentityError(f"Cannot enumerate network interfaces: {e}") from e

    mgmt_ipv4 = ''
    mgmt_ipv6 = ''
    for name, addrs in interfaces.items():
        if name not in MANAGEMENT_INTERFACES:
            continue
        for addr in addrs:
            address = addr.address.split('%', 1)[0]
            try:
                ip = ipaddress.ip_address(address)
            except ValueError:
                # link-layer entries carry a MAC address
                continue

            prefix = _prefix_length(addr.netmask)
            cidr = f"{address}/{prefix}" if prefix is not None else address

            if ip.version == 6 and ip.ipv4_mapped is not None:
                ip = ip.ipv4_mapped

            if ip.version == 4:
                mgmt_ipv4 = cidr
            elif is_global_unicast(ip):
                mgmt_ipv6 = cidr

    LOG.debug(f"ipv4={mgmt_ipv4} ipv6={mgmt_ipv6}")
    return Identity(hostname=hostname, mgmt_ipv4=mgmt_ipv4, mgmt_ipv6=mgmt_ipv6)
