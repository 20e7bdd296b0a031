"""Measure the run time of a command

The command is run repeatedly for a fixed amount of time and the min, avg,
and max run times are reported. Separate the command from the benchstream
options with "--":

  benchstream run -w 2 -d 4 -- sleep 1

Warmup runs happen before the timer starts and are not included in the
results. The exit status is non-zero if any measured run failed.
"""
import logging
import os
import benchstream
from benchstream.exc import ConfigurationError
from benchstream.report import FORMATS

log = logging.getLogger('benchstream.cli')


def add_arguments(parser):
    parser.add_argument(
        'command',
        nargs='*',
        help='command to measure, followed by its arguments'
    )

    parser.add_argument(
        '-w', '--warmups',
        type=int,
        default=None,
        metavar='N',
        help='number of untimed runs before measuring '
             f'[{benchstream.settings["warmups"].get()}]'
    )

    parser.add_argument(
        '-d', '--duration',
        type=float,
        default=None,
        metavar='SEC',
        help='measure for this many seconds '
             f'[{benchstream.settings["duration"].get()}]'
    )

    execution = parser.add_argument_group('execution options')

    execution.add_argument(
        '-e', '--executor',
        choices=benchstream.settings['executors'].flatten(),
        default=benchstream.settings['executor'].get(str),
        help='how the command is spawned [%(default)s]'
    )

    execution.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='discard the stdout/stderr of the command'
    )

    output = parser.add_argument_group('report options')

    output.add_argument(
        '-f', '--format',
        choices=FORMATS,
        default=benchstream.settings['report']['format'].get(str),
        help='report format [%(default)s]'
    )

    output.add_argument(
        '-t', '--template',
        default=benchstream.settings['report']['template'].get(),
        metavar='PATH',
        help='render the text report with a jinja2 template file'
    )

    output.add_argument(
        '-p', '--precision',
        type=int,
        default=None,
        metavar='N',
        help='decimal places shown for text report times '
             f'[{benchstream.settings["report"]["precision"].get()}]'
    )


def get_executor(args):
    executor_cls, params = benchstream.lookup_executor(args.executor)

    if args.quiet:
        params['quiet'] = True

    log.debug(f'Executor: {executor_cls.__name__} {params}')
    return executor_cls(**params)


def main(args):
    log.debug(f'{__name__} {args}')

    if not args.command:
        raise ConfigurationError('the following arguments are required: '
                                 'command')

    if args.template and not os.path.isfile(args.template):
        raise ConfigurationError(f'Template not found: {args.template}')

    if args.precision is not None and args.precision < 0:
        raise ConfigurationError(f'Invalid precision: {args.precision}')

    benchmark = benchstream.Benchmark(
        args.command,
        warmups=args.warmups,
        duration=args.duration,
        executor=get_executor(args),
    )

    benchstream.clock.check()
    report = benchmark.start()

    print(report.render(
        format=args.format,
        template=args.template,
        precision=args.precision
    ))

    if not report.ok:
        log.critical(f'{report.fails} of {report.runs} measured runs failed.')
        raise SystemExit(1)
