import logging
from datetime import timedelta

import benchstream
from benchstream import utils
from benchstream.exc import ConfigurationError
from benchstream.models import BenchmarkConfig, Statistics
from benchstream.report import Report

log = logging.getLogger(__name__)


class Benchmark:
    """Runs a command repeatedly and collects timing statistics.

    The benchmark has three phases that always happen in order:

    1) warmup: the command is run ``warmups`` times and the results are
       thrown away.
    2) timed: the measurement window starts after the warmups. Before each
       run the elapsed time is checked, and no new run is started once
       ``duration`` seconds have passed. A run that has started is never
       interrupted, so the window can overrun by at most one run.
    3) report: the statistics are frozen into a Report.

    Runs that fail are counted, they never stop the benchmark.

    :param command: executable followed by its arguments
    :param warmups: number of untimed runs [settings: warmups]
    :param duration: length of the timed window in seconds [settings: duration]
    :param executor: object with an execute(command) method returning
        a RunOutcome [settings: executor]
    :param clock: callable returning monotonic seconds, the executor should
        use the same clock
    """
    def __init__(self, command, warmups=None, duration=None, executor=None,
                 clock=None):
        self.command = utils.coerce_tuple(command)

        if not self.command:
            raise ConfigurationError('Missing command')

        self.config = BenchmarkConfig(warmups=warmups, duration=duration)

        if executor is None:
            executor_cls, executor_params = benchstream.lookup_executor()
            executor = executor_cls(**executor_params)

        self.executor = executor
        self.clock = clock or benchstream.clock.now
        self.stats = None
        self.window_start = None

    def __repr__(self):
        return f'<Benchmark: {" ".join(self.command)} {self.config}>'

    @property
    def warmups(self):
        return self.config.warmups

    @property
    def duration(self):
        return self.config.duration

    def warmup(self):
        """Run the command `warmups` times, outcomes are discarded"""
        if self.warmups:
            log.info(f'Warming up with {self.warmups} runs...')

        for i in range(self.warmups):
            self.executor.execute(self.command)

    def measure(self):
        """Run the command until the time budget is used up, returns the
        Statistics for the timed runs"""
        log.info(f'Measuring for {self.duration}s: {" ".join(self.command)}')
        stats = Statistics()
        self.stats = stats
        self.window_start = self.clock()

        while 1:
            elapsed = self.clock() - self.window_start
            if elapsed >= self.duration:
                break

            outcome = self.executor.execute(self.command)
            stats.add(outcome)

            if outcome.failed:
                log.debug(f'Run {stats.runs} failed: {outcome}')

        return stats

    def start(self):
        """Called to run the benchmark, returns a Report"""
        self.warmup()
        stats = self.measure()
        total = self.clock() - self.window_start

        log.info(f'Completed {stats.runs} runs in '
                 f'{timedelta(seconds=total)}')

        if stats.system_fails:
            log.warning(f'{stats.system_fails} runs could not be started or '
                        f'reaped by the executor')

        if stats.fails:
            log.warning(f'{stats.fails} of {stats.runs} runs failed')

        return Report(
            stats=stats,
            total=total,
            warmups=self.warmups,
            duration=self.duration,
            command=self.command,
        )
