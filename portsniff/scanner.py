"""
Scanning Engine

Concurrent TCP connect scanning including:
- Static stripe partitioning of a port set across a fixed worker pool
- Shared counters and an unbounded channel of discovered open ports
- Cooperative cancellation with immediate partial results
"""

import math
import queue
import threading
from dataclasses import dataclass
from enum import Enum
from ipaddress import ip_address, IPv4Address, IPv6Address
from typing import Callable, Iterable, List, Optional, Tuple, Union

from .constants import DEFAULT_THREADS, DEFAULT_TIMEOUT, JOIN_POLL_INTERVAL
from .errors import InvalidConfiguration
from .logger import get_logger
from .ports import PortItem, PortSet
from .probe import ProbeOutcome, probe_port
from .target import resolve_target

logger = get_logger(__name__)

IPAddress = Union[IPv4Address, IPv6Address]
Probe = Callable[[IPAddress, int, float], ProbeOutcome]


@dataclass(frozen=True)
class ScanCounters:
    """Point-in-time view of the scan counters"""
    scanned: int = 0
    open: int = 0
    closed: int = 0


ProgressCallback = Callable[[ScanCounters], None]


@dataclass(frozen=True)
class ScanJob:
    """Everything that defines one scan run"""
    target: IPAddress
    ports: PortSet
    threads: int = DEFAULT_THREADS
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        if not isinstance(self.target, (IPv4Address, IPv6Address)):
            try:
                object.__setattr__(self, 'target', ip_address(self.target))
            except ValueError:
                raise InvalidConfiguration(f"Scan target must be a resolved IP address, got {self.target!r}")
        if isinstance(self.threads, bool) or not isinstance(self.threads, int) or self.threads < 1:
            raise InvalidConfiguration(f"Number of threads must be at least 1, got {self.threads!r}")
        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise InvalidConfiguration(f"Timeout must be a positive number of seconds, got {self.timeout!r}")

    @property
    def total_ports(self) -> int:
        return len(self.ports)


@dataclass(frozen=True)
class WorkerAssignment:
    """Stripe of port set indices owned by one worker: index, index + stride, ..."""
    index: int
    stride: int

    def indices(self, total: int) -> range:
        return range(self.index, total, self.stride)

    @classmethod
    def for_pool(cls, worker_count: int) -> List['WorkerAssignment']:
        return [cls(index=i, stride=worker_count) for i in range(worker_count)]


@dataclass(frozen=True)
class ScanOutcome:
    """Final or partial result of a scan"""
    target: IPAddress
    total_ports: int
    open_ports: Tuple[int, ...]
    counters: ScanCounters
    cancelled: bool = False

    @property
    def scanned(self) -> int:
        return self.counters.scanned

    @property
    def open(self) -> int:
        return self.counters.open

    @property
    def closed(self) -> int:
        return self.counters.closed

    @property
    def complete(self) -> bool:
        return not self.cancelled and self.counters.scanned == self.total_ports


class SharedScanState:
    """
    State shared by every worker of one scan

    Counters and the result channel are updated together under one lock so
    any snapshot satisfies open + closed == scanned. The cancellation flag is
    a plain attribute so cancel() takes no lock and is safe to call from a
    signal handler, even one interrupting another cancel().
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._scanned = 0
        self._open = 0
        self._closed = 0
        self._results: 'queue.SimpleQueue[int]' = queue.SimpleQueue()
        self._cancelled = False

    def record_open(self, port: int) -> ScanCounters:
        with self._lock:
            self._results.put(port)
            self._open += 1
            self._scanned += 1
            return self._snapshot()

    def record_closed(self) -> ScanCounters:
        with self._lock:
            self._closed += 1
            self._scanned += 1
            return self._snapshot()

    def _snapshot(self) -> ScanCounters:
        return ScanCounters(scanned=self._scanned, open=self._open, closed=self._closed)

    def snapshot(self) -> ScanCounters:
        with self._lock:
            return self._snapshot()

    def drain_results(self) -> List[int]:
        """Take every open port published so far without waiting for more"""
        ports = []
        while True:
            try:
                ports.append(self._results.get_nowait())
            except queue.Empty:
                return ports

    def collect(self) -> Tuple[List[int], ScanCounters]:
        """Drain the channel and snapshot the counters as one consistent view"""
        with self._lock:
            return self.drain_results(), self._snapshot()

    def cancel(self) -> bool:
        """
        Request cancellation

        Returns:
            True for the call that set the flag, False if it was already set
        """
        if self._cancelled:
            return False
        self._cancelled = True
        return True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class WorkerStatus(Enum):
    RUNNING = 'running'
    CANCELLED = 'cancelled'
    EXHAUSTED = 'exhausted'
    FAILED = 'failed'


class Worker:
    """Probes every port in its stripe until the stripe ends or the scan is cancelled"""

    def __init__(self, job: ScanJob, assignment: WorkerAssignment, state: SharedScanState,
                 probe: Probe = probe_port, on_progress: Optional[ProgressCallback] = None):
        self.job = job
        self.assignment = assignment
        self.state = state
        self.probe = probe
        self.on_progress = on_progress
        self.status = WorkerStatus.RUNNING

    def run(self) -> WorkerStatus:
        try:
            self.status = self._scan_stripe()
        except Exception as e:
            logger.error(f"❌ Worker {self.assignment.index} stopped: {e}")
            self.status = WorkerStatus.FAILED
        return self.status

    def _scan_stripe(self) -> WorkerStatus:
        ports = self.job.ports
        total = len(ports)
        index = self.assignment.index

        while True:
            if self.state.cancelled:
                return WorkerStatus.CANCELLED
            if index >= total:
                return WorkerStatus.EXHAUSTED

            port = ports[index]
            logger.debug(f"Scanning port {port}")
            if self.probe(self.job.target, port, self.job.timeout).is_open:
                counters = self.state.record_open(port)
                logger.debug(f"Port {port} is open")
            else:
                counters = self.state.record_closed()
                logger.debug(f"Port {port} is closed or unreachable")

            if self.on_progress and not self.state.cancelled:
                self.on_progress(counters)

            index += self.assignment.stride


class ScanCoordinator:
    """
    Runs one scan job on a fixed pool of worker threads

    Usage:
        coordinator = ScanCoordinator(job)
        outcome = coordinator.run()

    cancel() may be called from any thread or from a signal handler; run()
    then stops waiting for the workers and returns the partial outcome.
    """

    def __init__(self, job: ScanJob, probe: Probe = probe_port,
                 on_progress: Optional[ProgressCallback] = None,
                 poll_interval: float = JOIN_POLL_INTERVAL):
        self.job = job
        self.probe = probe
        self.on_progress = on_progress
        self.poll_interval = poll_interval
        self.state = SharedScanState()
        self.workers: List[Worker] = []
        self._threads: List[threading.Thread] = []

    def cancel(self) -> bool:
        """Cancellation entry point; only the first call has an effect"""
        return self.state.cancel()

    @property
    def cancelled(self) -> bool:
        return self.state.cancelled

    def start(self) -> None:
        """Spawn one thread per worker assignment"""
        if self._threads:
            raise RuntimeError("Scan already started")

        logger.debug(f"Scanning {self.job.target} with {self.job.threads} threads")
        for assignment in WorkerAssignment.for_pool(self.job.threads):
            worker = Worker(self.job, assignment, self.state, self.probe, self.on_progress)
            # Daemon threads: a cancelled scan must not keep the process alive
            thread = threading.Thread(
                target=worker.run,
                name=f"portsniff-worker-{assignment.index}",
                daemon=True
            )
            self.workers.append(worker)
            self._threads.append(thread)
            thread.start()

    def wait(self) -> ScanOutcome:
        """Join the workers, or return as soon as cancellation is requested"""
        for thread in self._threads:
            while thread.is_alive():
                if self.state.cancelled:
                    return self._finish()
                thread.join(self.poll_interval)
        return self._finish()

    def run(self) -> ScanOutcome:
        self.start()
        return self.wait()

    def _finish(self) -> ScanOutcome:
        open_ports, counters = self.state.collect()
        outcome = ScanOutcome(
            target=self.job.target,
            total_ports=self.job.total_ports,
            open_ports=tuple(sorted(open_ports)),
            counters=counters,
            cancelled=self.state.cancelled
        )
        if outcome.cancelled:
            logger.debug(f"Scan cancelled after {counters.scanned}/{outcome.total_ports} ports")
        elif not outcome.complete:
            logger.warning(f"Scan stopped early after {counters.scanned}/{outcome.total_ports} ports")
        else:
            logger.debug("Scanning Complete")
        return outcome


def scan(target: str, ports: Optional[Iterable[PortItem]] = None,
         threads: int = DEFAULT_THREADS, timeout: float = DEFAULT_TIMEOUT,
         probe: Probe = probe_port) -> ScanOutcome:
    """
    Scan one host without any terminal output

    Args:
        target: IP address or host name
        ports: Ports and range expressions; None scans every port
        threads: Number of worker threads
        timeout: Seconds allowed for each connect attempt

    Returns:
        ScanOutcome with the sorted open ports and counters
    """
    port_set = PortSet.build(ports)
    job = ScanJob(resolve_target(target), port_set, threads, timeout)
    return ScanCoordinator(job, probe=probe).run()
