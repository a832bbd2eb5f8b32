# @mindmaze_header@

import unittest

from bundledeps.errors import DownloadError
from bundledeps.rpmfind import RpmFind, parse_table_rows, \
    pkgname_from_pkgfile, select_package

from fakes import FakeHttpClient


SEARCH_RESULT = '''\
<html><head><title>RPM resource libfoo.so.2()(64bit)</title></head>
<body>
<table><tr><td>rpmfind</td><td>search</td></tr></table>
<h1>RPM resource libfoo.so.2()(64bit)</h1>
<table border=5 cellpadding=5 cellspacing=5>
<tbody>
<tr><th>Package</th><th>Summary</th><th>Distribution</th><th>Download</th></tr>
<tr bgcolor='#b0ffb0'>
<td><a href='/linux/RPM/opensuse/15.5/x86_64/libfoo2-2.1-lp155.1.1.x86_64.html'>libfoo2-2.1-lp155.1.1.x86_64.html</a></td>
<td>Foo library &amp; tools</td>
<td>OpenSuSE Leap 15.5 for x86_64</td>
<td><a href='/x86_64/libfoo2-2.1-lp155.1.1.x86_64.rpm'>libfoo2-2.1-lp155.1.1.x86_64.rpm</a></td>
</tr>
<tr bgcolor='#b0ffb0'>
<td><a href='/linux/RPM/opensuse/tumbleweed/x86_64/libfoo2-2.3-1.2.x86_64.html'>libfoo2-2.3-1.2.x86_64.html</a></td>
<td>Foo library</td>
<td>OpenSuSE Tumbleweed for x86_64</td>
<td><a href='/x86_64/libfoo2-2.3-1.2.x86_64.rpm'>libfoo2-2.3-1.2.x86_64.rpm</a></td>
</tr>
<tr bgcolor='#b0ffb0'>
<td><a href='/x.html'>libfoo2-compat-2.3-1.2.x86_64.html</a></td>
<td>Foo library (compat)</td>
<td>OpenSuSE Tumbleweed for x86_64</td>
<td><a href='/x.rpm'>libfoo2-compat-2.3-1.2.x86_64.rpm</a></td>
</tr>
</tbody>
</table>
</body></html>
'''


class TestRpmFindParsing(unittest.TestCase):

    def test_parse_rows(self):
        rows = parse_table_rows(SEARCH_RESULT)
        self.assertEqual(rows[0], ['rpmfind', 'search'])
        self.assertEqual(rows[1], ['Package', 'Summary', 'Distribution',
                                   'Download'])
        self.assertEqual(rows[2][1], 'Foo library & tools')
        self.assertEqual(len(rows), 5)

    def test_pkgname_from_pkgfile(self):
        cases = [
            ('libfoo2-2.1-lp155.1.1.x86_64.html', 'libfoo2'),
            ('libqt4-x11-4.8.7-8.1.x86_64.rpm', 'libqt4-x11'),
            ('libstdc++6-13.2.1+git8285-1.1.x86_64.rpm', 'libstdc++6'),
            ('no-version-here', None),
        ]
        for pkgfile, expected in cases:
            self.assertEqual(pkgname_from_pkgfile(pkgfile), expected)

    def test_select_package(self):
        """
        test that the first row of the host distribution version is chosen
        """
        rows = parse_table_rows(SEARCH_RESULT)
        self.assertEqual(select_package(rows, 'Tumbleweed'), 'libfoo2')
        self.assertEqual(select_package(rows, 'Leap 15.5'), 'libfoo2')
        self.assertIsNone(select_package(rows, 'Leap 15.6'))
        self.assertIsNone(select_package([], 'Tumbleweed'))

    def test_select_package_unknown_version(self):
        rows = parse_table_rows(SEARCH_RESULT)
        self.assertIsNone(select_package(rows, ''))
        self.assertIsNone(select_package(rows, None))


class TestRpmFindQuery(unittest.TestCase):

    def test_query_fields(self):
        index = RpmFind(FakeHttpClient(), 'Tumbleweed', True, 'x86_64')
        self.assertEqual(index.query_fields('libfoo.so.2'),
                         {'query': 'libfoo.so.2()(64bit)',
                          'submit': 'Search ...',
                          'system': 'opensuse',
                          'arch': 'x86_64'})

        index = RpmFind(FakeHttpClient(), 'Tumbleweed', False, 'i586')
        fields = index.query_fields('libfoo.so.2')
        self.assertEqual(fields['query'], 'libfoo.so.2')
        self.assertEqual(fields['arch'], 'i586')

    def test_find_sharedlib_pkg(self):
        client = FakeHttpClient(SEARCH_RESULT)
        index = RpmFind(client, 'Tumbleweed', True, 'x86_64')
        self.assertEqual(index.find_sharedlib_pkg('libfoo.so.2'), 'libfoo2')
        self.assertEqual(len(client.requests), 1)

    def test_network_failure(self):
        index = RpmFind(FakeHttpClient(None), 'Tumbleweed', True, 'x86_64')
        with self.assertRaises(DownloadError):
            index.find_sharedlib_pkg('libfoo.so.2')
