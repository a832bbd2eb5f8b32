# @mindmaze_header@

import os
import unittest
from shutil import rmtree
from tempfile import mkdtemp
from unittest import mock

from bundledeps.config import DEFAULT_KNOWN_PROBLEMS, fill_host_defaults, \
    load_config
from bundledeps.errors import BundleDepsError


HOST_SETTINGS = '''\
dist-version: Tumbleweed
arch: x86_64
support64: true
'''


class TestConfig(unittest.TestCase):
    tmpdir = None

    @classmethod
    def setUpClass(cls):
        cls.tmpdir = mkdtemp(prefix='bundledeps-test')

    @classmethod
    def tearDownClass(cls):
        rmtree(cls.tmpdir, ignore_errors=True)

    def _write_config(self, content: str) -> str:
        filename = os.path.join(self.tmpdir, 'bundledeps.yaml')
        with open(filename, 'wt') as outfile:
            outfile.write(content)
        return filename

    def test_defaults(self):
        config = load_config(self._write_config(HOST_SETTINGS))
        self.assertEqual(config['concurrency'], 5)
        self.assertEqual(config['requires-token'], 'Requires:')
        self.assertTrue(config['include-guesses'])
        self.assertIsNone(config['package-name'])
        self.assertEqual(config['known-problematic-libraries'],
                         DEFAULT_KNOWN_PROBLEMS)
        self.assertEqual(config['dist-version'], 'Tumbleweed')

    def test_load(self):
        filename = self._write_config(HOST_SETTINGS + '''\
package-name: wps-office
concurrency: 8
known-problematic-libraries:
  libfoo.so.1: broken on purpose
''')
        config = load_config(filename)
        self.assertEqual(config['package-name'], 'wps-office')
        self.assertEqual(config['concurrency'], 8)
        self.assertEqual(config['known-problematic-libraries'],
                         {'libfoo.so.1': 'broken on purpose'})

    def test_env_config(self):
        filename = self._write_config(HOST_SETTINGS + 'concurrency: 2\n')
        with mock.patch.dict(os.environ, {'BUNDLEDEPS_CONFIG': filename}):
            config = load_config()
        self.assertEqual(config['concurrency'], 2)

    def test_invalid(self):
        """
        test that invalid configuration files are rejected
        """
        invalid_contents = [
            HOST_SETTINGS + 'unknown-key: 1\n',
            HOST_SETTINGS + 'concurrency: 0\n',
            HOST_SETTINGS + 'concurrency: many\n',
            HOST_SETTINGS + 'known-problematic-libraries: [libfoo.so.1]\n',
            '- a list\n- not a mapping\n',
            'key: [unclosed\n',
        ]
        for content in invalid_contents:
            with self.assertRaises(BundleDepsError, msg=content):
                load_config(self._write_config(content))

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config(os.path.join(self.tmpdir, 'nothing.yaml'))

    def test_fill_host_defaults(self):
        config = fill_host_defaults({'support64': False,
                                     'arch': None,
                                     'dist-version': 'Leap 15.5',
                                     'known-problematic-libraries': None})
        self.assertEqual(config['arch'], 'i586')
        self.assertEqual(config['dist-version'], 'Leap 15.5')
        self.assertEqual(config['known-problematic-libraries'], {})
