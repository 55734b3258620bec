"""
CLI Module

Command line interface for PortSniff providing:
- Argument parsing and validation before any network activity
- Target resolution
- Interrupt handling that reports partial results
- Progress and result display
"""

import json
import signal
import sys
from contextlib import contextmanager
from typing import Optional, Tuple

import click

from .env import env, get_config_summary, PORTSNIFF_VERSION
from .errors import InterruptHookError, InvalidConfiguration, InvalidPortSpec, UnresolvableTarget
from .logger import get_logger, setup_logging
from .ports import PortSet, split_port_specs
from .reporter import Reporter, ScanProgress, make_console
from .scanner import ScanCoordinator, ScanJob, ScanOutcome
from .target import resolve_target

logger = get_logger(__name__)


@contextmanager
def interrupt_handler(coordinator: ScanCoordinator, signum: int = signal.SIGINT):
    """
    Route an interrupt signal to the coordinator's cancellation entry point

    The handler only sets the cancellation flag; the scan loop notices it,
    returns the partial outcome and the caller reports it before exiting.
    """
    def _handle(received_signum, frame):
        coordinator.cancel()

    try:
        previous = signal.signal(signum, _handle)
    except (ValueError, OSError) as e:
        raise InterruptHookError(f"Error setting interrupt handler: {e}") from e

    try:
        yield
    finally:
        signal.signal(signum, previous)


def _show_config(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(json.dumps(get_config_summary(), indent=2))
    ctx.exit(0)


def build_port_set(port_specs: Tuple[str, ...]) -> PortSet:
    """Port set from repeated -p values; no values means every port"""
    try:
        return PortSet.build(split_port_specs(port_specs))
    except InvalidPortSpec as e:
        raise click.BadParameter(str(e), param_hint="'-p' / '--ports'")


def run_scan(job: ScanJob, show_progress: bool, color: bool, debug: bool) -> ScanOutcome:
    """Run a job with progress display and interrupt handling, then print the outcome"""
    console = make_console(color)
    progress = ScanProgress(job.total_ports, console) if show_progress else None
    coordinator = ScanCoordinator(job, on_progress=progress.update if progress else None)

    with interrupt_handler(coordinator):
        if progress:
            progress.start()
        try:
            outcome = coordinator.run()
        finally:
            if progress:
                if coordinator.cancelled:
                    progress.stop()
                else:
                    progress.finish(coordinator.state.snapshot())

        # Still inside the handler: a repeated interrupt cannot cut the report short
        Reporter(console, debug=debug).report(outcome)
    return outcome


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('target')
@click.option('-t', '--threads', type=int, default=None,
              help=f'Number of threads (default: {env.default_threads})')
@click.option('--timeout', type=float, default=None,
              help=f'Expected timeout in seconds for each TCP connect (default: {env.default_timeout})')
@click.option('-p', '--ports', 'port_specs', multiple=True, metavar='PORTS',
              help='Ports or ranges to scan, e.g. -p 22 -p 8000-8100 or -p 22,80,443. '
                   'If unspecified, all ports will be scanned.')
@click.option('--log-level', '--log_level', 'log_level', default='info', show_default=True,
              type=click.Choice(['info', 'debug'], case_sensitive=False),
              help='Console log level; debug logs every probe and hides the progress bar')
@click.option('--progress/--no-progress', default=None,
              help='Enable/disable the progress bar')
@click.option('--color/--no-color', default=None,
              help='Enable/disable colored output in terminal')
@click.option('--show-config', is_flag=True, is_eager=True, expose_value=False,
              callback=_show_config, help='Show effective configuration and exit')
@click.version_option(version=PORTSNIFF_VERSION, prog_name='portsniff')
def main(target: str, threads: Optional[int], timeout: Optional[float], port_specs: Tuple[str, ...],
         log_level: str, progress: Optional[bool], color: Optional[bool]):
    """Scan TARGET (IP address or domain name) for open TCP ports."""
    debug = log_level.lower() == 'debug'
    color = env.show_colors if color is None else color
    show_progress = (env.show_progress if progress is None else progress) and not debug
    setup_logging(console_level=log_level.upper(), use_colors=color)

    threads = env.default_threads if threads is None else threads
    timeout = env.default_timeout if timeout is None else timeout
    port_set = build_port_set(port_specs)

    try:
        address = resolve_target(target)
    except UnresolvableTarget as e:
        logger.debug(str(e))
        logger.error("❌ Invalid domain or ip provided, please provide a valid one")
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\n👋 Scan aborted by user")
        return

    try:
        job = ScanJob(address, port_set, threads, timeout)
    except InvalidConfiguration as e:
        raise click.UsageError(str(e))

    try:
        outcome = run_scan(job, show_progress=show_progress, color=color, debug=debug)
    except InterruptHookError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    if not outcome.cancelled and not outcome.complete:
        sys.exit(1)


if __name__ == '__main__':
    main()
