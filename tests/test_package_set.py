# @mindmaze_header@

import io
import os
import unittest
from shutil import rmtree
from tempfile import mkdtemp
from unittest import mock

from bundledeps.package_set import PackageSet, ResolvedDependency, Source


RESULTS = [
    ResolvedDependency('libfoo.so.2', 'libfoo2', Source.LOCAL),
    ResolvedDependency('libfoo-extra.so.2', 'libfoo2', Source.LOCAL),
    ResolvedDependency('libbar.so.1', 'libbar1', Source.REMOTE),
    ResolvedDependency('libwps.so', None, Source.SELF),
    ResolvedDependency('libQtXml.so.4', None, Source.UNRESOLVED, 'libQtXml4'),
]


def _filled_set() -> PackageSet:
    package_set = PackageSet()
    for resolved in RESULTS:
        package_set.add(resolved)
    return package_set


@mock.patch('bundledeps.package_set.iprint')
class TestPackageSet(unittest.TestCase):
    tmpdir = None

    @classmethod
    def setUpClass(cls):
        cls.tmpdir = mkdtemp(prefix='bundledeps-test')

    @classmethod
    def tearDownClass(cls):
        rmtree(cls.tmpdir, ignore_errors=True)

    def _read_requires(self, package_set, **kwargs) -> str:
        filename = os.path.join(self.tmpdir, 'depends.txt')
        package_set.write_requires(filename, **kwargs)
        with open(filename, 'rt') as infile:
            return infile.read()

    def test_add_once(self, iprint):
        package_set = _filled_set()
        self.assertFalse(package_set.add(
            ResolvedDependency('libfoo.so.2', 'libfoo-other', Source.REMOTE)))
        self.assertEqual(len(package_set), 5)

    def test_counts(self, iprint):
        package_set = _filled_set()
        self.assertEqual(package_set.count(Source.LOCAL), 2)
        self.assertEqual(package_set.count(Source.SELF), 1)
        self.assertEqual(package_set.resolved_count, 3)
        self.assertEqual(package_set.unresolved_count, 1)
        self.assertEqual([r.library for r in package_set.unresolved()],
                         ['libQtXml.so.4'])

    def test_packages(self, iprint):
        """
        test that the package list is sorted and has no duplicates
        """
        package_set = _filled_set()
        self.assertEqual(package_set.packages(),
                         ['libQtXml4', 'libbar1', 'libfoo2'])
        self.assertEqual(package_set.packages(include_guesses=False),
                         ['libbar1', 'libfoo2'])
        self.assertEqual(package_set.guesses(),
                         {'libQtXml4': ['libQtXml.so.4']})

    def test_empty(self, iprint):
        package_set = PackageSet()
        self.assertEqual(package_set.packages(), [])
        self.assertEqual(self._read_requires(package_set), '')

    def test_write_requires(self, iprint):
        content = self._read_requires(_filled_set())
        self.assertEqual(content,
                         '# guessed from libQtXml.so.4, verify manually\n'
                         'Requires: libQtXml4\n'
                         'Requires: libbar1\n'
                         'Requires: libfoo2\n')

    def test_write_requires_options(self, iprint):
        content = self._read_requires(_filled_set(), token='Depends:',
                                      include_guesses=False)
        self.assertEqual(content, 'Depends: libbar1\nDepends: libfoo2\n')

    def test_guess_matching_found_package(self, iprint):
        """
        test that a guess equal to a found package is not flagged
        """
        package_set = PackageSet()
        package_set.add(ResolvedDependency('libbar.so.1', 'libbar1',
                                           Source.LOCAL))
        package_set.add(ResolvedDependency('/opt/libbar.so.1', None,
                                           Source.UNRESOLVED, 'libbar1'))
        self.assertEqual(self._read_requires(package_set),
                         'Requires: libbar1\n')

    def test_write_stdout(self, iprint):
        with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            _filled_set().write_requires('-', include_guesses=False)
        self.assertEqual(stdout.getvalue(),
                         'Requires: libbar1\nRequires: libfoo2\n')

    @mock.patch('bundledeps.package_set.wprint')
    def test_report(self, wprint, iprint):
        _filled_set().report()
        iprint.assert_called_once()
        self.assertIn('5 libraries', iprint.call_args[0][0])
        wprint.assert_called_once()
        self.assertIn('libQtXml.so.4', wprint.call_args[0][0])
