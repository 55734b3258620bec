"""
Target Resolution

Turns the positional target argument into one IP address. Literal
addresses are returned unchanged; host names go through a single
getaddrinfo lookup and the first IPv4 answer is preferred.
"""

import socket
from ipaddress import ip_address, IPv4Address, IPv6Address
from typing import List, Union

from .errors import UnresolvableTarget
from .logger import get_logger

logger = get_logger(__name__)


def _lookup(name: str) -> List[Union[IPv4Address, IPv6Address]]:
    try:
        infos = socket.getaddrinfo(name, None, proto=socket.IPPROTO_TCP)
    except (socket.gaierror, UnicodeError) as e:
        raise UnresolvableTarget(f"Could not resolve '{name}': {e}") from e

    addresses = []
    for family, _, _, _, sockaddr in infos:
        if family not in (socket.AF_INET, socket.AF_INET6):
            continue
        # Strip the IPv6 scope id, e.g. fe80::1%eth0
        address = ip_address(sockaddr[0].split('%')[0])
        if address not in addresses:
            addresses.append(address)
    return addresses


def resolve_target(target: str) -> Union[IPv4Address, IPv6Address]:
    """
    Resolve an IP literal or domain name

    Args:
        target: IP address or domain name from the command line

    Returns:
        The resolved address

    Raises:
        UnresolvableTarget: The lookup failed or returned no usable address
    """
    target = (target or '').strip()
    if not target:
        raise UnresolvableTarget("No target given")

    try:
        return ip_address(target.strip('[]'))
    except ValueError:
        pass

    addresses = _lookup(target)
    if not addresses:
        raise UnresolvableTarget(f"'{target}' did not resolve to any address")

    for address in addresses:
        if address.version == 4:
            logger.debug(f"Resolved to ip: {address}")
            return address

    logger.debug(f"Resolved to ip: {addresses[0]} (no IPv4 address available)")
    return addresses[0]
