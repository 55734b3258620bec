"""Test utilities and helpers for PortSniff test suite"""

import socket
import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterable, List, Optional, Set

from portsniff.probe import ProbeOutcome

LOOPBACK = '127.0.0.1'


@contextmanager
def listening_ports(count: int, host: str = LOOPBACK):
    """Open listening TCP sockets on ephemeral loopback ports"""
    sockets = []
    try:
        for _ in range(count):
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            sock.bind((host, 0))
            sock.listen(16)
            sockets.append(sock)
        yield sorted(sock.getsockname()[1] for sock in sockets)
    finally:
        for sock in sockets:
            sock.close()


def unused_ports(count: int, exclude: Iterable[int] = (), host: str = LOOPBACK) -> List[int]:
    """Ports that were free a moment ago; connecting to them is refused"""
    exclude = set(exclude)
    ports: Set[int] = set()
    while len(ports) < count:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind((host, 0))
            port = sock.getsockname()[1]
        if port not in exclude:
            ports.add(port)
    return sorted(ports)


class FakeProbe:
    """
    Probe double recording every call

    Ports in open_ports are reported OPEN. on_call, if given, runs before the
    outcome is returned and receives the 1-based call number and the port.
    """

    def __init__(self, open_ports: Iterable[int] = (), on_call: Optional[Callable[[int, int], None]] = None):
        self.open_ports = set(open_ports)
        self.on_call = on_call
        self.calls: List[int] = []
        self._lock = threading.Lock()

    def __call__(self, host, port: int, timeout: float) -> ProbeOutcome:
        with self._lock:
            self.calls.append(port)
            call_number = len(self.calls)
        if self.on_call:
            self.on_call(call_number, port)
        return ProbeOutcome.OPEN if port in self.open_ports else ProbeOutcome.CLOSED


def wait_until(predicate: Callable[[], bool], timeout: float = 5.0, interval: float = 0.01) -> bool:
    """Poll predicate until it is true or timeout expires"""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()
