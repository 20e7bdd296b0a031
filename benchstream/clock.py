"""Monotonic clock used for every duration measured by benchstream.

Only differences between two readings are meaningful, the absolute value
has no relation to the time of day.
"""
import logging
import time

from benchstream.exc import ClockError

log = logging.getLogger(__name__)

CLOCK_NAME = 'perf_counter'


def now():
    """Returns the current monotonic clock reading in seconds"""
    return time.perf_counter()


def check(name=CLOCK_NAME):
    """Confirms the clock exists and cannot go backwards. Raises ClockError
    otherwise."""
    try:
        info = time.get_clock_info(name)
    except ValueError as e:
        raise ClockError(f'Clock "{name}" is not available: {e}') from None

    if not info.monotonic:
        raise ClockError(f'Clock "{name}" ({info.implementation}) is not '
                         f'monotonic')

    log.debug(f'Using clock {name}: {info.implementation}, '
              f'resolution={info.resolution}')
    return info
