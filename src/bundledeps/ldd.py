# @mindmaze_header@
"""
helper module parsing the dependency report of the dynamic linker

ldd prints one line per shared library loaded by a binary:
    linux-vdso.so.1 (0x00007ffd5a9f2000)
    libfoo.so.2 => /lib64/libfoo.so.2 (0x00007f2b1c000000)
    libbar.so.1 => not found
    /lib64/ld-linux-x86-64.so.2 (0x00007f2b1c400000)

Only the lines with '=>' name a library looked up through the search path.
"""

import re
from typing import List, NamedTuple, Optional

from .common import dprint
from .errors import ScanError, ShellException
from .runner import CommandRunner


NOT_FOUND = 'not found'

# name is everything between the leading whitespace and '=>', path is
# everything after '=>' up to the load address in parenthesis if any
_LDD_LINE_REGEX = re.compile(r'\s*(?P<name>.*?)\s*=>\s*(?P<path>[^(]*?)\s*'
                             r'(?:\(.*)?$')


class LddEntry(NamedTuple):
    """
    shared library reported by ldd
    """
    name: str
    path: str

    def is_found(self) -> bool:
        """returns whether the dynamic linker could locate the library"""
        return self.path != NOT_FOUND


def parse_ldd_line(line: str) -> Optional[LddEntry]:
    """
    Parse one line of ldd output

    Returns:
        the entry described by the line, None if the line is a header, a
        library loaded by absolute path, or any other notice
    """
    if '=>' not in line:
        return None

    match = _LDD_LINE_REGEX.match(line)
    if not match or not match.group('name'):
        return None

    return LddEntry(match.group('name'), match.group('path'))


def parse_ldd_output(output: str) -> List[LddEntry]:
    """
    Parse full ldd report, skipping lines that do not describe a library
    """
    entries = []
    for line in output.splitlines():
        entry = parse_ldd_line(line)
        if entry:
            entries.append(entry)

    return entries


def ldd(binary: str, runner: CommandRunner) -> List[LddEntry]:
    """
    Get the direct shared library dependencies of binary

    Raises:
        ScanError: ldd could not report on binary
    """
    try:
        output = runner.run(['ldd', binary])
    except ShellException as err:
        raise ScanError(f'failed to list dependencies of {binary}: {err}') \
            from err

    entries = parse_ldd_output(output)
    dprint(f'{binary}: {len(entries)} libraries')
    return entries
