"""
Scan Reporting

Terminal presentation of a scan:
- Live progress bar fed by the worker threads
- Final or partial result listing
"""

import threading
from typing import Optional

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn

from .logger import get_logger
from .scanner import ScanCounters, ScanOutcome

logger = get_logger(__name__)


def make_console(color: bool = True) -> Console:
    return Console(no_color=not color, highlight=False)


def format_counters(counters: ScanCounters, total: int) -> str:
    return (
        f"\n [*] Scanned Ports: {counters.scanned}/{total}"
        f"\n [*] Open Ports:\t{counters.open}"
        f"\n [*] Closed Ports:  {counters.closed}"
    )


class ScanProgress:
    """
    Progress bar sink

    update() is called from worker threads after every probe. Rendering is
    serialized by a lock; once stopped, further updates are ignored.
    """

    def __init__(self, total: int, console: Optional[Console] = None):
        self.total = total
        self.console = console or make_console()
        self._lock = threading.Lock()
        self._completed = 0
        self._running = False
        self._progress = Progress(
            BarColumn(bar_width=50, style='white', complete_style='red', finished_style='red'),
            TaskProgressColumn(),
            TextColumn('{task.fields[msg]}', style='green'),
            console=self.console,
            transient=False
        )
        self._task = self._progress.add_task('scan', total=total, msg='')

    def start(self) -> None:
        with self._lock:
            self._progress.start()
            self._running = True

    def update(self, counters: ScanCounters) -> None:
        with self._lock:
            if not self._running:
                return
            # Snapshots from different workers may arrive out of order
            self._completed = max(self._completed, counters.scanned)
            self._progress.update(
                self._task,
                completed=self._completed,
                msg=format_counters(counters, self.total)
            )

    def finish(self, counters: ScanCounters) -> None:
        """Show the final counters and stop rendering"""
        with self._lock:
            if self._running:
                self._progress.update(
                    self._task,
                    completed=counters.scanned,
                    msg=format_counters(counters, self.total)
                )
        self.stop()

    def stop(self) -> None:
        with self._lock:
            if self._running:
                self._running = False
                self._progress.stop()


class Reporter:
    """Prints scan outcomes; rendering problems are logged, never raised"""

    def __init__(self, console: Optional[Console] = None, debug: bool = False):
        self.console = console or make_console()
        self.debug = debug

    def report(self, outcome: ScanOutcome) -> None:
        try:
            self._render(outcome)
        except Exception as e:
            logger.error(f"❌ Failed to display scan results: {e}")

    def _render(self, outcome: ScanOutcome) -> None:
        if outcome.cancelled:
            if self.debug:
                logger.debug("Received <Ctrl+C> scan halted.")
            else:
                self.console.print()
                self.console.print("Received <Ctrl+C> scan halted", style='bold underline red')
        elif not outcome.complete:
            if self.debug:
                logger.debug("Scan incomplete")
            else:
                self.console.print(" Scan Incomplete - Results ", style='bold underline yellow')
        else:
            if self.debug:
                logger.debug("Scanning Complete")
            else:
                self.console.print(" Scanning Complete - Results ", style='bold underline')

        self.display_results(outcome)

    def display_results(self, outcome: ScanOutcome) -> None:
        self.console.print()
        if not outcome.open_ports:
            self.console.print("None of the analysed ports were open", style='bold dim')
        else:
            for port in outcome.open_ports:
                self.console.print(f"  + Port {port} is open", style='bold blue')

        self.console.print(
            f"\nScanned {outcome.scanned}/{outcome.total_ports} ports on {outcome.target}: "
            f"{outcome.open} open, {outcome.closed} closed or unreachable",
            style='dim'
        )
