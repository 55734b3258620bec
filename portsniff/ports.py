"""
Port Set Module

Builds the immutable set of ports a scan visits:
- Parsing of single ports ("80") and inclusive ranges ("1000-2000")
- Validation against the TCP port range
- De-duplication across every supplied item
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .constants import MIN_PORT, MAX_PORT, RANGE_SEPARATOR, LIST_SEPARATOR
from .errors import InvalidPortSpec, InvalidRange


PortItem = Union[int, str, 'PortRange']


def validate_port(port: int) -> int:
    """Return the port unchanged, or raise InvalidRange if it is out of bounds"""
    if isinstance(port, bool) or not isinstance(port, int):
        raise InvalidPortSpec(f"Port must be an integer, got {port!r}")
    if port < MIN_PORT or port > MAX_PORT:
        raise InvalidRange(f"Port {port} is outside {MIN_PORT}-{MAX_PORT}")
    return port


def _parse_bound(text: str, spec: str) -> int:
    text = text.strip()
    if not (text.isascii() and text.isdigit()):
        raise InvalidPortSpec(f"Invalid port '{text}' in '{spec}'")
    return int(text)


@dataclass(frozen=True)
class PortRange:
    """Inclusive range of ports; a single port is a range with start == end"""
    start: int
    end: int

    def __post_init__(self):
        validate_port(self.start)
        validate_port(self.end)
        if self.start > self.end:
            raise InvalidRange(f"Range start {self.start} is greater than end {self.end}")

    @classmethod
    def parse(cls, spec: str) -> 'PortRange':
        """
        Parse a port range expression

        Args:
            spec: Either a single port ("443") or a range ("1000-2000")

        Returns:
            PortRange covering the expression

        Raises:
            InvalidPortSpec: Text is not a port or has more than one separator
            InvalidRange: Bounds are reversed or outside 0-65535
        """
        spec = spec.strip()
        parts = spec.split(RANGE_SEPARATOR)
        if len(parts) == 1:
            port = _parse_bound(parts[0], spec)
            return cls(port, port)
        if len(parts) == 2:
            return cls(_parse_bound(parts[0], spec), _parse_bound(parts[1], spec))
        raise InvalidPortSpec(f"Invalid port range '{spec}': more than one '{RANGE_SEPARATOR}'")

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __str__(self) -> str:
        if self.start == self.end:
            return str(self.start)
        return f"{self.start}{RANGE_SEPARATOR}{self.end}"


def split_port_specs(values: Iterable[str]) -> List[str]:
    """Split comma separated -p values into individual port expressions"""
    specs = []
    for value in values:
        for item in value.split(LIST_SEPARATOR):
            item = item.strip()
            if not item:
                raise InvalidPortSpec(f"Empty port expression in '{value}'")
            specs.append(item)
    return specs


def _expand(item: PortItem) -> Iterable[int]:
    if isinstance(item, PortRange):
        return item
    if isinstance(item, str):
        return PortRange.parse(item)
    return (validate_port(item),)


class PortSet:
    """
    Immutable, de-duplicated collection of ports to scan

    Ports are stored in ascending order. Workers index into the set with
    their stripe, so the order must not change once the set is built.
    """

    __slots__ = ('_ports',)

    def __init__(self, ports: Iterable[int] = ()):
        self._ports: Tuple[int, ...] = tuple(sorted({validate_port(p) for p in ports}))

    @classmethod
    def build(cls, items: Optional[Iterable[PortItem]] = None) -> 'PortSet':
        """
        Build a port set from ports and ranges

        Args:
            items: Ints, range expressions or PortRange objects. None or an
                empty collection means every port from 0 to 65535.

        Returns:
            PortSet with every requested port exactly once
        """
        items = list(items) if items is not None else []
        if not items:
            return cls.full()

        ports = set()
        for item in items:
            ports.update(_expand(item))
        return cls(ports)

    @classmethod
    def full(cls) -> 'PortSet':
        """Every TCP port"""
        return cls(range(MIN_PORT, MAX_PORT + 1))

    @property
    def ports(self) -> Tuple[int, ...]:
        return self._ports

    def __len__(self) -> int:
        return len(self._ports)

    def __getitem__(self, index: int) -> int:
        return self._ports[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self._ports)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PortSet):
            return self._ports == other._ports
        if isinstance(other, (set, frozenset)):
            return set(self._ports) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._ports)

    def __repr__(self) -> str:
        if len(self._ports) > 8:
            return f"PortSet({len(self._ports)} ports, {self._ports[0]}..{self._ports[-1]})"
        return f"PortSet({list(self._ports)})"
