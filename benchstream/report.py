import logging

import benchstream
from benchstream import templates, utils
from benchstream.exc import ConfigurationError

log = logging.getLogger(__name__)

FORMATS = ('text', 'json', 'yaml')

REPORT_TEXT = """\
Min: {{ min|seconds(precision) }} seconds  Warmups: {{ warmups }}
Avg: {{ avg|seconds(precision) }} seconds  Runs: {{ runs }}
Max: {{ max|seconds(precision) }} seconds  Fails: {{ fails }}
Total: {{ total|seconds(precision) }} seconds
"""


class Report:
    """Final, read-only results of a benchmark.

    :param stats: Statistics collected in the timed phase
    :param total: seconds actually spent in the timed phase
    :param warmups: number of warmup runs executed
    :param duration: the time budget that was requested
    :param command: the command that was measured
    """
    def __init__(self, stats, total, warmups=0, duration=None, command=None):
        self.stats = stats
        self.total = total
        self.warmups = warmups
        self.duration = duration
        self.command = utils.coerce_tuple(command)
        self._fingerprint = None

    def __repr__(self):
        return f'<Report: runs={self.runs} fails={self.fails} ' \
               f'total={self.total:.6f}>'

    @property
    def fingerprint(self):
        if self._fingerprint is None:
            self._fingerprint = utils.Fingerprint()
        return self._fingerprint

    @property
    def min(self):
        return self.stats.min if self.stats.runs else 0.0

    @property
    def max(self):
        return self.stats.max if self.stats.runs else 0.0

    @property
    def avg(self):
        return self.stats.avg

    @property
    def runs(self):
        return self.stats.runs

    @property
    def fails(self):
        return self.stats.fails

    @property
    def system_fails(self):
        return self.stats.system_fails

    @property
    def ok(self):
        """True when none of the measured runs failed"""
        return self.fails == 0

    def context(self, precision=None):
        """Variables available when rendering report templates"""
        if precision is None:
            precision = benchstream.settings['report']['precision'].get(int)

        return {
            'min': self.min,
            'avg': self.avg,
            'max': self.max,
            'total': self.total,
            'runs': self.runs,
            'fails': self.fails,
            'system_fails': self.system_fails,
            'warmups': self.warmups,
            'duration': self.duration,
            'command': list(self.command),
            'ok': self.ok,
            'precision': precision,
        }

    def to_dict(self):
        data = {
            'id': self.fingerprint.id,
            'command': list(self.command),
            'duration': self.duration,
            'warmups': self.warmups,
            'total': self.total,
        }
        data.update(self.stats.to_dict())
        data['fingerprint'] = self.fingerprint.to_dict()
        return data

    def to_json(self):
        return utils.dumps_json(self.to_dict(), indent=2)

    def to_yaml(self):
        return utils.dumps_yaml(self.to_dict())

    def to_text(self, template=None, precision=None):
        """Render the report with a jinja template, the default layout shows
        min/avg/max/total with the run, fail, and warmup counts. `template`
        can be a path to a template file or a jinja2.Template"""
        if template is None:
            template = templates.from_string(REPORT_TEXT)
        elif isinstance(template, str):
            template = templates.load_template(template)

        return template.render(**self.context(precision=precision))

    def render(self, format=None, template=None, precision=None):
        format = format or benchstream.settings['report']['format'].get(str)

        if format == 'text':
            return self.to_text(template=template, precision=precision)
        elif format == 'json':
            return self.to_json()
        elif format == 'yaml':
            return self.to_yaml()
        else:
            err = f'Unknown report format "{format}", choices are: ' \
                  f'{", ".join(FORMATS)}'
            raise ConfigurationError(err)
