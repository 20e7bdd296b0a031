# This package contains all of the argument parsers and main functions
# for Benchstream commands. When adding to this package, please follow the
# template below to give the subcommands some consistent behaviors. They
# are dynamically imported in the benchstream.cli module and will need
# to be added to the _subcommands dict there to be found.
#
#
# """Short help text for subcommand
# Any additional lines are only shown for the command help
# """
# import logging
#
# log = logging.getLogger('benchstream.cli')
#
# def add_arguments(parser):
#     # Add any command arguments to the parser here
#
# def main(args):
#     log.debug(f'{__name__} {args}')
#     # Here is the main function for this command, it receives the argparse
#     # Namespace object as the only argument. Raise
#     # benchstream.exc.ConfigurationError for bad arguments, it will be
#     # reported as a usage error.
"""Available subcommands"""
