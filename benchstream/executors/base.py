import logging

import benchstream
from benchstream import models, utils
from benchstream.exc import ConfigurationError

log = logging.getLogger('benchstream.executors')


class BaseExecutor(object):
    """To subclass an executor, override the "spawn" method. It must start
    exactly one process for the command, block until that process has been
    reaped, and return its exit code (negative signal number if it was
    killed by a signal).

    execute() wraps spawn with the timing and outcome classification, so
    that any executor can be handed to a Benchmark."""
    def __init__(self, quiet=False, clock=None):
        self.quiet = quiet
        self.clock = clock or benchstream.clock.now

    def __repr__(self):
        return f'<{type(self).__name__}: quiet={self.quiet}>'

    def execute(self, command):
        """Run the command once and return a RunOutcome. Errors creating or
        reaping the process are reported as FAILURE_SYSTEM outcomes instead
        of being raised."""
        command = utils.coerce_tuple(command)

        if not command:
            raise ConfigurationError('Missing command')

        t0 = self.clock()
        try:
            returncode = self.spawn(command)
        except OSError as e:
            t1 = self.clock()
            log.warning(f'Unable to run "{command[0]}": {e}')
            return models.RunOutcome(
                t1 - t0,
                models.FAILURE_SYSTEM,
                error=str(e)
            )
        t1 = self.clock()

        outcome = models.RunOutcome.from_returncode(t1 - t0, returncode)
        log.debug(f'{outcome}')
        return outcome

    def spawn(self, command):
        raise NotImplementedError
