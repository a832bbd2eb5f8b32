# @mindmaze_header@
"""
helper module querying the dpkg package database
"""

import re
from typing import List

from .syspkg_manager_base import SysPkgManager, SysPkg


# <pkg>[:<arch>][, <pkg>[:<arch>]...]: <path>
_DPKG_SEARCH_REGEX = re.compile(r'(?P<pkgs>[^/]+):\s+(?P<path>/.*)')
_COMPAT32_ARCHS = ('i386', 'armhf', 'armel')


def parse_dpkg_search(output: str, library: str) -> List[SysPkg]:
    """
    Parse output of dpkg --search, keeping only the packages shipping a file
    named exactly library:

        libfoo2:amd64: /usr/lib/x86_64-linux-gnu/libfoo.so.2
        libfoo2:i386: /usr/lib/i386-linux-gnu/libfoo.so.2
    """
    pkgs = []
    for line in output.splitlines():
        if line.startswith('diversion '):
            continue

        match = _DPKG_SEARCH_REGEX.fullmatch(line.strip())
        if not match or not match.group('path').endswith('/' + library):
            continue

        for pkg in match.group('pkgs').split(','):
            name, _, arch = pkg.strip().partition(':')
            sysdep = SysPkg(name, arch in _COMPAT32_ARCHS)
            if sysdep not in pkgs:
                pkgs.append(sysdep)

    return pkgs


class Dpkg(SysPkgManager):
    """
    Class to interact with Debian package database
    """

    def find_sharedlib_pkgs(self, library: str) -> List[SysPkg]:
        # dpkg --search accept a glob-like pattern
        output = self.runner.run(['dpkg', '--search', '*/' + library])
        return parse_dpkg_search(output, library)
