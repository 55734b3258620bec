"""
Scanner constants
"""

MIN_PORT = 0
MAX_PORT = 65535

DEFAULT_THREADS = 100
DEFAULT_TIMEOUT = 1.0

# Separator between the two bounds of a port range, e.g. "1000-2000"
RANGE_SEPARATOR = '-'
# Separator between port items inside one -p value, e.g. "22,80-90"
LIST_SEPARATOR = ','

# How often the coordinator re-checks the cancellation flag while joining workers
JOIN_POLL_INTERVAL = 0.1
