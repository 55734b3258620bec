"""
Connect Probe

One bounded-time TCP connect attempt against a single port. Refused,
timed out and unreachable connections are all reported as CLOSED.
"""

import socket
from enum import Enum
from typing import Union
from ipaddress import IPv4Address, IPv6Address


class ProbeOutcome(Enum):
    """Result of a single probe"""
    OPEN = 'open'
    CLOSED = 'closed'

    @property
    def is_open(self) -> bool:
        return self is ProbeOutcome.OPEN


def probe_port(host: Union[str, IPv4Address, IPv6Address], port: int, timeout: float) -> ProbeOutcome:
    """
    Attempt one TCP connection to host:port

    Args:
        host: Resolved IP address of the target
        port: TCP port to connect to
        timeout: Maximum seconds to wait for the connection

    Returns:
        ProbeOutcome.OPEN if the connection was accepted, otherwise ProbeOutcome.CLOSED
    """
    try:
        # host is already an IP literal, so create_connection makes exactly one attempt
        with socket.create_connection((str(host), port), timeout=timeout):
            return ProbeOutcome.OPEN
    except OSError:
        return ProbeOutcome.CLOSED
