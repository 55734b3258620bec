"""
PortSniff

Concurrent TCP connect port scanner including:
- Port set construction and validation
- Bounded-time connect probes
- Fixed worker pool with stripe partitioning and cooperative cancellation
- Terminal progress and result reporting
"""

from .env import PORTSNIFF_VERSION
from .errors import (
    PortSniffError,
    InvalidPortSpec,
    InvalidRange,
    UnresolvableTarget,
    InvalidConfiguration,
    InterruptHookError,
)
from .ports import PortRange, PortSet
from .probe import ProbeOutcome, probe_port
from .scanner import ScanCoordinator, ScanCounters, ScanJob, ScanOutcome, scan
from .target import resolve_target

__version__ = PORTSNIFF_VERSION
__all__ = [
    'PortRange',
    'PortSet',
    'ProbeOutcome',
    'probe_port',
    'ScanCoordinator',
    'ScanCounters',
    'ScanJob',
    'ScanOutcome',
    'scan',
    'resolve_target',
    'PortSniffError',
    'InvalidPortSpec',
    'InvalidRange',
    'UnresolvableTarget',
    'InvalidConfiguration',
    'InterruptHookError',
]
