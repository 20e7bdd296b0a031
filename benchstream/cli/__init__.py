"""Benchstream CLI

Measure how long a command takes by running it repeatedly.

  benchstream run -w 2 -d 4 -- sleep 1
"""
import argparse
import importlib
import logging
import sys
from collections import OrderedDict
import benchstream
import benchstream.cli.subcommands
from benchstream.exc import ClockError, ConfigurationError

log = logging.getLogger('benchstream')

# This describes the commands that should be available via this cli. Each
# command should be listed with name as the key and the module import path as
# the value. The command order will be preserved in the help text.
_subcommands = OrderedDict(
    run='benchstream.cli.subcommands.run',
    settings='benchstream.cli.subcommands.settings',
)


def arg_parser():
    shared = argparse.ArgumentParser(add_help=False, allow_abbrev=False)

    common = shared.add_argument_group('common options')

    # Subcommand parsers must not reset a value given before the
    # subcommand name
    common.add_argument(
        '-l', '--logging',
        default=argparse.SUPPRESS,
        choices=benchstream.settings['logging_profiles'].flatten(),
        help='set the logging profile [interactive]'
    )

    parser = argparse.ArgumentParser(
        prog='benchstream',
        allow_abbrev=False,
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        parents=[shared,],
        epilog='Use \'benchstream <subcommand> -h/--help\' for help '
               'with specific commands.',
    )

    parser.add_argument(
        '-v', '--version',
        action='version',
        version=benchstream.__version__
    )

    parser.set_defaults(func=None, logging=None)

    # Dynamically import subcommand modules and add subparser to the
    # main parser for each subcommand. This fills in subparser help text from
    # the docstring of the module, and calls the main function with the
    # parsed Namespace.
    subparser = parser.add_subparsers(
        dest='subcommand',
        help=benchstream.cli.subcommands.__doc__
    )

    for cmd, path in _subcommands.items():
        m = importlib.import_module(path)
        p = subparser.add_parser(
            cmd,
            help=m.__doc__.splitlines()[0],
            allow_abbrev=False,
            description=m.__doc__,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            parents=[shared,]
        )
        p.set_defaults(func=m.main, subparser=p)
        m.add_arguments(p)

    return parser


def main(args=None):
    parser = arg_parser()
    args = parser.parse_args(args)

    benchstream.start_logging(args.logging)
    setting_src = '\n'.join((str(s) for s in benchstream.settings.sources))
    log.debug(f'Version: {benchstream.__version__}')
    log.debug(f'Command args: {sys.argv}')
    log.debug(f'Settings files:\n{setting_src}')

    if args.func:
        try:
            args.func(args)
        except ConfigurationError as e:
            args.subparser.error(str(e))
        except ClockError as e:
            log.critical(f'Timing is not possible on this system: {e}')
            raise SystemExit(1) from e
    else:
        parser.error('the following arguments are required: subcommand')


def bench(args=None):
    """Entry point for the "bench" shortcut, same as "benchstream run" """
    if args is None:
        args = sys.argv[1:]
    return main(['run', *args])
