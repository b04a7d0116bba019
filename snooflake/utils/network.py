"""Machine ID discovery.

This module provides:
- is_private_ipv4: a function to check an address against the private IPv4 ranges
- private_ipv4: a function to find the host's first private IPv4 address
- lower_16bit_private_ip: the default machine ID provider
- fixed_machine_id: a function to make a provider out of a configured value
"""

import logging
import socket
from collections.abc import Callable
from ipaddress import IPv4Address, IPv4Network

import psutil

from .errors import MachineIDError

logger = logging.getLogger(__name__)

PRIVATE_NETWORKS = (
    IPv4Network("10.0.0.0/8"),
    IPv4Network("172.16.0.0/12"),
    IPv4Network("192.168.0.0/16"),
)


def is_private_ipv4(address: IPv4Address) -> bool:
    """Returns True if ``address`` lies in 10/8, 172.16/12 or 192.168/16."""
    return any(address in network for network in PRIVATE_NETWORKS)


def private_ipv4() -> IPv4Address:
    """Finds the first non-loopback private IPv4 address among the host's interfaces.

    Raises:
        MachineIDError: If interfaces can't be listed or none has a private address
    """
    try:
        interfaces = psutil.net_if_addrs()
    except OSError as e:
        raise MachineIDError(f"could not list network interfaces: {e}") from e
    for name, addresses in interfaces.items():
        for snic in addresses:
            if snic.family != socket.AF_INET:
                continue
            address = IPv4Address(snic.address)
            if address.is_loopback:
                continue
            if is_private_ipv4(address):
                logger.debug("Using %s on %s for machine ID", address, name)
                return address
    raise MachineIDError("no private ip address")


def lower_16bit_private_ip() -> int:
    """Returns the last two octets of the private IPv4 address as a 16-bit int."""
    octets = private_ipv4().packed
    return octets[2] << 8 | octets[3]


def fixed_machine_id(value: int) -> Callable[[], int]:
    """Makes a machine ID provider that always returns ``value``."""

    def provider() -> int:
        return value

    return provider
