import re
import time
from datetime import timedelta

from .errors import QueryTimeoutError

_UNIT_SECONDS = {
    'ns': 1e-9,
    'us': 1e-6,
    'µs': 1e-6,
    'μs': 1e-6,
    'ms': 1e-3,
    's': 1.0,
    'm': 60.0,
    'h': 3600.0,
}

_COMPONENT = re.compile(r'(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)')


def parse_duration(text: str) -> timedelta:
    """
    Parse a Go-style duration string such as ``10s``, ``1m30s`` or ``500ms``.

    A leading sign is accepted. A bare ``0`` is the only unitless value allowed.

    Raises:
        ValueError: If the string is not a valid duration.
    """
    s = text.strip()
    sign = 1.0
    if s[:1] in ('+', '-'):
        if s[0] == '-':
            sign = -1.0
        s = s[1:]
    if s == '0':
        return timedelta(0)
    if not s:
        raise ValueError(f"invalid duration {text!r}")

    total = 0.0
    pos = 0
    while pos < len(s):
        match = _COMPONENT.match(s, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    return timedelta(seconds=sign * total)


class Deadline:
    """A fixed point in time after which queries must not run."""

    def __init__(self, timeout: timedelta, clock=time.monotonic):
        self._clock = clock
        self._expires_at = clock() + timeout.total_seconds()

    def remaining(self) -> float:
        """Seconds left before expiry.

        Raises:
            QueryTimeoutError: If the deadline has already passed.
        """
        left = self._expires_at - self._clock()
        if left <= 0:
            raise QueryTimeoutError("context deadline exceeded")
        return left

