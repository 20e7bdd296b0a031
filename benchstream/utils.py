"""Shared utilities"""
import builtins
import importlib
import io
import json
import logging
import os
import sys
from datetime import datetime, timezone
from getpass import getuser
from socket import gethostname

import yaml

import benchstream

log = logging.getLogger(__name__)


class Fingerprint:
    """Generate a snapshot of the system info."""
    def __init__(self):
        self.datetime = datetime.now(timezone.utc).isoformat()
        self.user = getuser()
        self.version = str(benchstream.__version__)
        self.args = ' '.join(sys.argv)
        self.hostname = gethostname()
        self.pwd = os.getcwd()
        self.id = benchstream.guid()

    def to_dict(self):
        return dict(vars(self))


def coerce_tuple(obj):
    """Coerce an object to a tuple.
    Since strings are sequences, iterating over an object that can be a string
    or a sequence can be difficult. This solves the problem by ensuring scalars
    are converted to sequences. """
    if obj is None:
        return tuple()
    elif isinstance(obj, str):
        return (obj, )
    else:
        return tuple(obj)


def dynamic_import(path):
    """Imports classes or functions from a dotted path given in settings"""
    m, _, f = path.rpartition('.')

    try:
        if m:
            mod = importlib.import_module(m)
            return getattr(mod, f)
        else:
            return getattr(builtins, f)
    except (AttributeError, ImportError) as e:
        err = f'Failed to import "{path}": Error: {e}'
        raise benchstream.exc.ConfigurationError(err) from None


def dumps_json(obj, *args, sort_keys=True, **kwargs):
    """Attempt to dump `obj` to a JSON string"""
    return json.dumps(obj, sort_keys=sort_keys, *args, **kwargs)


def dump_yaml(obj, stream):
    """Attempt to dump `obj` to a YAML file"""
    return yaml.safe_dump(obj, stream=stream, default_flow_style=False)


def dumps_yaml(obj):
    """Attempt to dump `obj` to a YAML string"""
    stream = io.StringIO()
    dump_yaml(obj, stream)
    return stream.getvalue()
