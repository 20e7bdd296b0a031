import logging
import os

from benchstream.executors.base import BaseExecutor
from benchstream.models import EXEC_FAILED_RC

log = logging.getLogger('benchstream.fork')


class ForkExecutor(BaseExecutor):
    """The ForkExecutor forks the current process and replaces the child with
    the command using execvp, so the executable is searched for on PATH and
    the arguments are passed through without a shell.

    If the exec fails, the child writes the reason to stderr and exits with
    EXEC_FAILED_RC immediately. It never returns into the caller's code.
    """
    def spawn(self, command):
        pid = os.fork()

        if pid == 0:
            self._exec_child(command)

        return self.wait(pid)

    def _exec_child(self, command):
        try:
            if self.quiet:
                devnull = os.open(os.devnull, os.O_WRONLY)
                os.dup2(devnull, 1)
                os.dup2(devnull, 2)
                os.close(devnull)

            os.execvp(command[0], command)
        except OSError as e:
            msg = f'execvp: {command[0]}: {e.strerror}\n'
            os.write(2, msg.encode(errors='replace'))
        finally:
            os._exit(EXEC_FAILED_RC)

    def wait(self, pid):
        """Wait for the child to be reaped. A wait interrupted by a signal is
        retried, other errors are raised."""
        while 1:
            try:
                _, status = os.waitpid(pid, 0)
            except InterruptedError:
                log.debug(f'waitpid({pid}) interrupted, retrying')
                continue
            break

        return os.waitstatus_to_exitcode(status)
