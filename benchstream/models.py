import logging
import math

import benchstream
from benchstream.exc import ConfigurationError

log = logging.getLogger(__name__)

SUCCESS = 'success'
FAILURE_EXIT = 'failed'
FAILURE_SYSTEM = 'error'

VALID_STATUSES = (
    SUCCESS,
    FAILURE_EXIT,
    FAILURE_SYSTEM,
)

# Exit status of a child that could not exec the command, same convention
# as the shell uses for "command not found"
EXEC_FAILED_RC = 127


class RunOutcome:
    """Result of a single spawn-execute-wait cycle.

    :param duration: seconds between just before the process was created and
        just after it was reaped
    :param status: one of VALID_STATUSES
    :param returncode: exit code of the child, negative signal number if the
        child was killed by a signal, or None when it never ran
    :param error: description of an infrastructure error
    """
    __slots__ = ('duration', 'status', 'returncode', 'error')

    def __init__(self, duration, status, returncode=None, error=None):
        if status not in VALID_STATUSES:
            raise ValueError(f'Invalid run status: {status}')

        self.duration = max(0.0, float(duration))
        self.status = status
        self.returncode = returncode
        self.error = error

    def __repr__(self):
        return f'<RunOutcome({self.status}): {self.duration:.6f}s ' \
               f'rc={self.returncode}>'

    @classmethod
    def from_returncode(cls, duration, returncode):
        if returncode == 0:
            return cls(duration, SUCCESS, returncode)
        else:
            return cls(duration, FAILURE_EXIT, returncode)

    @property
    def ok(self):
        return self.status == SUCCESS

    @property
    def failed(self):
        return self.status != SUCCESS


class Statistics:
    """Running min/max/sum over measured runs. min and max are taken from the
    first run added rather than starting from an arbitrary sentinel."""
    def __init__(self):
        self.min = None
        self.max = None
        self.sum = 0.0
        self.runs = 0
        self.fails = 0
        self.system_fails = 0

    def __repr__(self):
        return f'<Statistics: runs={self.runs} fails={self.fails} ' \
               f'avg={self.avg:.6f}>'

    def add(self, outcome):
        secs = outcome.duration

        if self.runs == 0:
            self.min = self.max = secs
        else:
            if secs < self.min:
                self.min = secs
            if secs > self.max:
                self.max = secs

        self.sum += secs
        self.runs += 1

        if outcome.failed:
            self.fails += 1
            if outcome.status == FAILURE_SYSTEM:
                self.system_fails += 1

    @property
    def avg(self):
        if self.runs:
            # sum / runs can round to just outside [min, max]
            return min(max(self.sum / self.runs, self.min), self.max)
        else:
            return 0.0

    def to_dict(self):
        return {
            'min': self.min if self.runs else 0.0,
            'avg': self.avg,
            'max': self.max if self.runs else 0.0,
            'sum': self.sum,
            'runs': self.runs,
            'fails': self.fails,
            'system_fails': self.system_fails,
        }


class BenchmarkConfig:
    """Validated warmup count and measurement window length. Values left as
    None are loaded from benchstream.settings."""
    __slots__ = ('_warmups', '_duration')

    def __init__(self, warmups=None, duration=None):
        if warmups is None:
            warmups = benchstream.settings['warmups'].get()
        if duration is None:
            duration = benchstream.settings['duration'].get()

        self._warmups = self.validate_warmups(warmups)
        self._duration = self.validate_duration(duration)

    def __repr__(self):
        return f'<BenchmarkConfig: warmups={self.warmups} ' \
               f'duration={self.duration}>'

    @property
    def warmups(self):
        return self._warmups

    @property
    def duration(self):
        return self._duration

    @staticmethod
    def validate_warmups(value):
        if isinstance(value, bool):
            raise ConfigurationError(f'Invalid warmup count: {value}')

        try:
            warmups = int(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f'Invalid warmup count: {value}') from None

        if warmups != value and not isinstance(value, str):
            raise ConfigurationError(f'Invalid warmup count: {value}')

        if warmups < 0:
            raise ConfigurationError(f'Invalid warmup count: {value}')

        return warmups

    @staticmethod
    def validate_duration(value):
        if isinstance(value, bool):
            raise ConfigurationError(f'Invalid duration (seconds): {value}')

        try:
            duration = float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f'Invalid duration (seconds): {value}') from None

        if not math.isfinite(duration) or duration <= 0.0:
            raise ConfigurationError(f'Invalid duration (seconds): {value}')

        return duration
