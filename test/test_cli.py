import json
import os
import sys
import tempfile
import time
from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from unittest import TestCase, mock
import yaml
import benchstream
from benchstream.cli import bench as cli_bench
from benchstream.cli import main as cli_main

benchstream.settings.clear()
benchstream.settings.read(user=False)

MISSING_COMMAND = 'benchstream-test-command-that-does-not-exist'


def python(code):
    return [sys.executable, '-c', code]


class TestCliRun(TestCase):
    """Tests that run real commands through "benchstream run" """
    def run_cli(self, *args):
        """Runs the cli and returns the parsed json report"""
        out = StringIO()
        with redirect_stdout(out):
            cli_main(['run', '-l', 'silent', '-q', '-f', 'json', *args])
        return json.loads(out.getvalue())

    def run_cli_failing(self, *args):
        out = StringIO()
        with redirect_stdout(out):
            with self.assertRaises(SystemExit) as cm:
                cli_main(['run', '-l', 'silent', '-q', '-f', 'json', *args])
        return cm.exception.code, json.loads(out.getvalue())

    def test_success(self):
        """a command that always exits 0 has no failures"""
        report = self.run_cli('-d', '0.5', '--', 'true')
        self.assertGreater(report['runs'], 0)
        self.assertEqual(report['fails'], 0)
        self.assertEqual(report['warmups'], 0)
        self.assertTrue(report['min'] <= report['avg'] <= report['max'])
        self.assertGreaterEqual(report['total'], 0.5)

    def test_repeatable(self):
        """running the same benchmark twice gives the same result status"""
        for i in range(2):
            report = self.run_cli('-d', '0.2', '--', 'true')
            self.assertEqual(report['fails'], 0)

    def test_nonzero_exit(self):
        """every run of a failing command is counted as failed"""
        code, report = self.run_cli_failing(
            '-d', '0.5', '--', *python('import sys; sys.exit(2)'))
        self.assertEqual(code, 1)
        self.assertGreater(report['runs'], 0)
        self.assertEqual(report['fails'], report['runs'])
        self.assertEqual(report['system_fails'], 0)

    def test_command_not_found(self):
        """exec failures in the child are ordinary failed runs"""
        code, report = self.run_cli_failing('-d', '0.3', '--', MISSING_COMMAND)
        self.assertEqual(code, 1)
        self.assertGreater(report['runs'], 0)
        self.assertEqual(report['fails'], report['runs'])

    def test_command_not_found_popen(self):
        code, report = self.run_cli_failing(
            '-e', 'popen', '-d', '0.3', '--', MISSING_COMMAND)
        self.assertEqual(code, 1)
        self.assertEqual(report['fails'], report['runs'])

    def test_warmups_happen_before_window(self):
        """warmups take real time but are not part of the timed window"""
        start = time.perf_counter()
        report = self.run_cli(
            '-w', '3', '-d', '0.3', '--',
            *python('import time; time.sleep(0.1)')
        )
        elapsed = time.perf_counter() - start
        self.assertEqual(report['warmups'], 3)
        self.assertGreaterEqual(elapsed, report['total'] + 0.3)
        self.assertGreaterEqual(report['min'], 0.1)

    def test_popen_executor(self):
        report = self.run_cli('-e', 'popen', '-d', '0.2', '--', 'true')
        self.assertEqual(report['fails'], 0)

    def test_yaml_format(self):
        out = StringIO()
        with redirect_stdout(out):
            cli_main(['run', '-l', 'silent', '-f', 'yaml', '-d', '0.2', '--',
                      'true'])
        report = yaml.safe_load(out.getvalue())
        self.assertEqual(report['command'], ['true'])

    def test_text_format(self):
        out = StringIO()
        with redirect_stdout(out):
            cli_main(['run', '-l', 'silent', '-d', '0.2', '--', 'true'])
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 4)
        self.assertTrue(lines[0].startswith('Min: '))
        self.assertTrue(lines[0].endswith('Warmups: 0'))
        self.assertTrue(lines[2].endswith('Fails: 0'))
        self.assertTrue(lines[3].startswith('Total: '))

    def test_bench_shortcut(self):
        out = StringIO()
        with redirect_stdout(out):
            cli_bench(['-l', 'silent', '-d', '0.2', '-p', '3', '--', 'true'])
        self.assertRegex(out.getvalue(), r'^Min: \d+\.\d{3} seconds')


class TestCliErrors(TestCase):
    """Bad arguments are usage errors and nothing is spawned"""
    def assertUsageError(self, *args):
        err = StringIO()
        with mock.patch('benchstream.executors.ForkExecutor.spawn') as spawn:
            with redirect_stderr(err):
                with self.assertRaises(SystemExit) as cm:
                    cli_main(['run', '-l', 'silent', *args])
        self.assertEqual(cm.exception.code, 2)
        spawn.assert_not_called()
        return err.getvalue()

    def test_zero_duration(self):
        msg = self.assertUsageError('-d', '0', '--', 'true')
        self.assertIn('Invalid duration', msg)

    def test_negative_duration(self):
        self.assertUsageError('-d', '-1', '--', 'true')

    def test_negative_warmups(self):
        msg = self.assertUsageError('-w', '-1', '--', 'true')
        self.assertIn('Invalid warmup count', msg)

    def test_non_numeric_options(self):
        self.assertUsageError('-d', 'soon', '--', 'true')
        self.assertUsageError('-w', 'many', '--', 'true')

    def test_missing_command(self):
        self.assertUsageError('-d', '1')

    def test_unknown_executor(self):
        self.assertUsageError('-e', 'nope', '--', 'true')

    def test_missing_template(self):
        self.assertUsageError('-t', '/no/such/template.txt', '--', 'true')

    def test_missing_subcommand(self):
        with redirect_stderr(StringIO()):
            with self.assertRaises(SystemExit) as cm:
                cli_main(['-l', 'silent'])
        self.assertEqual(cm.exception.code, 2)


class TestCliSettings(TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.env = mock.patch.dict(
            os.environ,
            {'BENCHSTREAMDIR': self.temp_dir.name}
        )
        self.env.start()

    def tearDown(self):
        self.env.stop()
        self.temp_dir.cleanup()

    def test_show(self):
        out = StringIO()
        with redirect_stdout(out):
            cli_main(['settings', '-l', 'silent'])
        self.assertIn('No user settings file found', out.getvalue())

    def test_verbose(self):
        out = StringIO()
        with redirect_stdout(out):
            cli_main(['settings', '-l', 'silent', '-v'])
        settings = yaml.safe_load(out.getvalue())
        self.assertEqual(settings['duration'], 5.0)
        self.assertEqual(settings['warmups'], 0)

    def test_create(self):
        cli_main(['settings', '-l', 'silent', '-c', '-w', '2', '-d', '1.5'])
        path = os.path.join(self.temp_dir.name, 'config.yaml')
        with open(path) as fp:
            created = yaml.safe_load(fp)
        self.assertEqual(created['warmups'], 2)
        self.assertEqual(created['duration'], 1.5)
        self.assertEqual(created['executor'], 'fork')

        with self.assertRaises(FileExistsError):
            cli_main(['settings', '-l', 'silent', '-c'])

        cli_main(['settings', '-l', 'silent', '-c', '-f', '-w', '1'])
        with open(path) as fp:
            self.assertEqual(yaml.safe_load(fp)['warmups'], 1)

    def test_create_invalid(self):
        with redirect_stderr(StringIO()):
            with self.assertRaises(SystemExit) as cm:
                cli_main(['settings', '-l', 'silent', '-c', '-d', '0'])
        self.assertEqual(cm.exception.code, 2)
