# @mindmaze_header@
"""
Query of the rpmfind.net package index

The search page of rpmfind answers with an html document whose result table
has one row per package file:

    <tr><td><a href="...">libfoo2-2.1-1.1.x86_64.html</a></td>
        <td>Foo library</td>
        <td>openSUSE Tumbleweed for x86_64</td>
        <td><a href="...">libfoo2-2.1-1.1.x86_64.rpm</a></td></tr>
"""

import re
from html.parser import HTMLParser
from typing import Dict, List, Optional

from .common import dprint
from .runner import HttpClient
from .syspkg_manager_base import RemotePkgIndex


RPMFIND_SEARCH_URL = 'https://rpmfind.net/linux/rpm2html/search.php'

_PKGFILE_COLUMN = 0
_DIST_COLUMN = 2

# <name>-<version>... where version begins with a digit
_PKGNAME_REGEX = re.compile(r'^(.*?)-\d+\.')


class _TableParser(HTMLParser):
    """
    Collect the text of the cells of every table row of an html document
    """
    # pylint: disable=abstract-method

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.rows: List[List[str]] = []
        self._row: Optional[List[str]] = None
        self._cell: Optional[List[str]] = None

    def handle_starttag(self, tag, attrs):
        if tag == 'tr':
            self._end_row()
            self._row = []
        elif tag in ('td', 'th'):
            self._end_cell()
            if self._row is None:
                self._row = []
            self._cell = []

    def handle_endtag(self, tag):
        if tag in ('td', 'th'):
            self._end_cell()
        elif tag in ('tr', 'table'):
            self._end_row()

    def handle_data(self, data):
        if self._cell is not None:
            self._cell.append(data)

    def _end_cell(self):
        if self._cell is not None and self._row is not None:
            self._row.append(''.join(self._cell).strip())
        self._cell = None

    def _end_row(self):
        self._end_cell()
        if self._row:
            self.rows.append(self._row)
        self._row = None

    def close(self):
        super().close()
        self._end_row()


def parse_table_rows(html: str) -> List[List[str]]:
    """
    Get the text of the cells of all table rows found in html
    """
    parser = _TableParser()
    parser.feed(html)
    parser.close()
    return parser.rows


def pkgname_from_pkgfile(pkgfile: str) -> Optional[str]:
    """
    Strip version, release and architecture from a package file name:
    libfoo2-2.1-1.1.x86_64.rpm => libfoo2
    """
    match = _PKGNAME_REGEX.match(pkgfile)
    return match.group(1) if match else None


def select_package(rows: List[List[str]], dist_version: str) -> Optional[str]:
    """
    Find the first result row built for dist_version and return its package
    name. No package is selected if dist_version is unknown.
    """
    if not dist_version:
        return None

    for row in rows:
        if len(row) <= _DIST_COLUMN:
            continue

        if dist_version not in row[_DIST_COLUMN]:
            continue

        pkgname = pkgname_from_pkgfile(row[_PKGFILE_COLUMN])
        if pkgname:
            return pkgname

    return None


class RpmFind(RemotePkgIndex):
    """
    rpmfind.net search of the packages of an openSUSE distribution
    """

    def __init__(self, client: HttpClient, dist_version: str,
                 support64: bool, arch: str, url: str = RPMFIND_SEARCH_URL):
        self.client = client
        self.dist_version = dist_version
        self.support64 = support64
        self.arch = arch
        self.url = url

    def query_fields(self, library: str) -> Dict[str, str]:
        """
        parameters of the search request of library
        """
        query = library + '()(64bit)' if self.support64 else library
        return {
            'query': query,
            'submit': 'Search ...',
            'system': 'opensuse',
            'arch': self.arch,
        }

    def find_sharedlib_pkg(self, library: str) -> Optional[str]:
        html = self.client.get(self.url, self.query_fields(library))
        pkgname = select_package(parse_table_rows(html), self.dist_version)
        dprint(f'rpmfind: {library} -> {pkgname}')
        return pkgname
