# @mindmaze_header@
"""
helper module querying the zypper package database
"""

from typing import List

from .syspkg_manager_base import SysPkgManager, SysPkg


ZYPPER = '/usr/bin/zypper'
COMPAT32_SUFFIX = '-32bit'


def parse_zypper_search(output: str) -> List[SysPkg]:
    """
    Parse the table printed by zypper search:

        S  | Name          | Summary                  | Type
        ---+---------------+--------------------------+--------
        i+ | libfoo2       | Foo library              | package
        i  | libfoo2-32bit | Foo library (32-bit)     | package
           | libfoo-devel  | Development files of Foo | package

    Only the installed packages (status starting with 'i') are returned.
    """
    pkgs = []
    for line in output.splitlines():
        if not line.startswith('i'):
            continue

        columns = line.split('|')
        if len(columns) < 2:
            continue

        name = columns[1].strip()
        if name:
            pkgs.append(SysPkg(name, name.endswith(COMPAT32_SUFFIX)))

    return pkgs


class Zypper(SysPkgManager):
    """
    Class to interact with openSUSE package database
    """

    def find_sharedlib_pkgs(self, library: str) -> List[SysPkg]:
        # with a wildcard, zypper matches the whole file path: libfoo.so.2
        # does not match libfoo.so.20
        output = self.runner.run([ZYPPER, '--no-refresh', 'se', '-f', '-i',
                                  '*/' + library])
        return parse_zypper_search(output)
