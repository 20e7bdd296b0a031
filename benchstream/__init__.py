import logging
import logging.config
import sys
import confuse
import ulid

__author__ = 'Ryan Richholt'
__email__ = 'rrichholt@tgen.org'
__version__ = '0.3.0'


# Load settings and configure logging
settings = confuse.LazyConfig('benchstream', __name__)
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


# Package module imports
from benchstream import clock, exc, executors, models, report, templates, utils
from benchstream.bench import Benchmark
from benchstream.models import BenchmarkConfig, RunOutcome, Statistics
from benchstream.report import Report


def lookup_executor(name=None):
    """Looks up the executor by name or gets the default from the settings.
    This will return the class and also a dictionary of default parameters
    for instantiating the class that can be customized via config file."""
    name = name or settings['executor'].get(str)

    try:
        params = settings['executors'][name].get(dict).copy()
    except confuse.NotFoundError:
        choices = ', '.join(settings['executors'].keys())
        err = f'Unknown executor "{name}", choices are: {choices}'
        raise exc.ConfigurationError(err) from None

    cls = params.pop('()')
    executor = utils.dynamic_import(cls)
    return executor, params


def guid(formatter=None):
    """Generate a new unique ID"""
    id = ulid.new().str
    if formatter:
        return formatter.format(id=id)
    else:
        return id


def start_logging(profile=None):
    """Logging is only set up with a NullHandler by default. This function sets
    up logging with the chosen settings profile. """
    if profile is None:
        if sys.stderr and sys.stderr.isatty():
            profile = 'interactive'
        else:
            profile = 'basic'

    profile = str(profile).lower()
    config = settings['logging_profiles'][profile].get(dict)
    logging.config.dictConfig(config)
    log.debug(f'Logging started: {profile}')
