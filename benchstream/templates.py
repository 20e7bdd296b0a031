"""Initiate a Jinja2 environment for rendering benchmark reports. The
packaged report layout is a string template, user layouts can be loaded from
files with load_template()."""
import logging
import os

from jinja2 import Environment, FileSystemLoader, StrictUndefined

log = logging.getLogger(__name__)


def seconds(value, precision=6):
    """Allow "{{ value|seconds }}" to be used in templates. Formats a number
    of seconds with a fixed number of decimals."""
    return f'{float(value):.{int(precision)}f}'


def join_command(value):
    """Allow "{{ command|join_command }}" to be used in templates"""
    return ' '.join(str(v) for v in value)


def environment(*searchpath, trim_blocks=True, lstrip_blocks=True):
    """Starts a Jinja2 Environment that raises on undefined variables. A
    FileSystemLoader is added when a search path is given. This adds the
    report filters to the standard template processor."""
    if searchpath:
        loader = FileSystemLoader(searchpath=searchpath)
    else:
        loader = None

    env = Environment(
        trim_blocks=trim_blocks,
        lstrip_blocks=lstrip_blocks,
        undefined=StrictUndefined,
        loader=loader,
    )

    env.filters['seconds'] = seconds
    env.filters['join_command'] = join_command
    return env


def load_template(path, *searchpath, **kwargs):
    """Helper function to quickly load a template from a file. Remaining args
    and kwargs are passed to benchstream.templates.environment() """
    template_dir = os.path.dirname(os.path.abspath(path))
    template_name = os.path.basename(path)
    log.debug(f'Loading template: {path}')
    env = environment(template_dir, *searchpath, **kwargs)
    return env.get_template(template_name)


def from_string(data, **kwargs):
    """Helper function to quickly load a template from a string. kwargs are
    passed to benchstream.templates.environment() """
    env = environment(**kwargs)
    return env.from_string(data)
