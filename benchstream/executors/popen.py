import logging
import subprocess
import sys

from benchstream.executors.base import BaseExecutor
from benchstream.models import EXEC_FAILED_RC

log = logging.getLogger('benchstream.popen')


class PopenExecutor(BaseExecutor):
    """The PopenExecutor launches the command with subprocess.Popen and no
    shell. Popen reports a failed exec as an exception in the parent, this
    executor turns that back into the same EXEC_FAILED_RC exit code that a
    forked child would have produced, so both executors can be swapped
    without changing the statistics."""
    def spawn(self, command):
        out = subprocess.DEVNULL if self.quiet else None

        try:
            p = subprocess.Popen(command, stdout=out, stderr=out)
        except OSError as e:
            # Popen names the executable only when exec failed in the child
            if e.filename != command[0]:
                raise

            if not self.quiet:
                print(f'execvp: {command[0]}: {e.strerror}', file=sys.stderr)
            return EXEC_FAILED_RC

        with p:
            return self.wait(p)

    def wait(self, p):
        while 1:
            try:
                return p.wait()
            except InterruptedError:
                log.debug(f'wait({p.pid}) interrupted, retrying')
