"""
Error Types

Errors raised before a scan starts. Individual probe failures are never
errors; they are recorded as closed/unreachable outcomes.
"""


class PortSniffError(Exception):
    """Base class for PortSniff errors"""
    pass


class InvalidPortSpec(PortSniffError):
    """Malformed port or port range text"""
    pass


class InvalidRange(InvalidPortSpec):
    """Port range with reversed or out-of-range bounds"""
    pass


class UnresolvableTarget(PortSniffError):
    """Target name could not be resolved to an address"""
    pass


class InvalidConfiguration(PortSniffError):
    """Scan job parameters that cannot be run"""
    pass


class InterruptHookError(PortSniffError):
    """The interrupt handler could not be installed"""
    pass
