"""Configure Benchstream application settings.

User settings are layered over the packaged defaults. They are read from
config.yaml in the benchstream config directory, or in $BENCHSTREAMDIR
when that is set.
"""
import json
import logging
import os
import benchstream

log = logging.getLogger('benchstream.cli')
USER_SETTINGS = """# Benchstream user settings
warmups: {warmups}
duration: {duration}
executor: {executor}
"""


def add_arguments(parser):
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='print every setting, merged from all sources, as yaml'
    )

    create = parser.add_argument_group('Create a user settings file')

    create.add_argument(
        '-c', '--create',
        action='store_true',
        help='write a user settings file with the values below'
    )

    create.add_argument('-w', '--warmups', type=int, default=0,
                        help='default warmup runs [0]')

    create.add_argument('-d', '--duration', type=float, default=5.0,
                        help='default timed window in seconds [5.0]')

    create.add_argument('-e', '--executor', default='fork',
                        help='default executor [fork]')

    create.add_argument(
        '-f', '--force',
        action='store_true',
        help='overwrite an existing user settings file'
    )


def show(path, verbose=False):
    if verbose:
        merged = json.loads(json.dumps(benchstream.settings.flatten()))
        print(benchstream.utils.dumps_yaml(merged))
        return

    print(__doc__)
    if os.path.exists(path):
        print(f'User application settings will be loaded from: {path}')
    else:
        print('No user settings file found. Use "benchstream settings -c" '
              'to initialize a settings file.')


def create(path, warmups, duration, executor, force=False):
    # Refuse to write values the run command would reject
    config = benchstream.BenchmarkConfig(warmups=warmups, duration=duration)
    benchstream.lookup_executor(executor)

    if os.path.exists(path) and not force:
        err = f'There is already a user settings file here:\n{path}\nUse ' \
              '-f/--force to ignore this error and create a new one.'
        raise FileExistsError(err)

    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w') as fp:
        fp.write(USER_SETTINGS.format(
            warmups=config.warmups,
            duration=config.duration,
            executor=executor
        ))
    log.info(f'Created settings file at: {path}')


def main(args):
    log.debug(f'{__name__} {args}')
    path = benchstream.settings.user_config_path()

    if args.create:
        create(path, args.warmups, args.duration, args.executor, args.force)
    else:
        show(path, verbose=args.verbose)
