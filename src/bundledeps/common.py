# @mindmaze_header@
"""
A set of helpers used throughout the bundledeps project
"""

import logging
import os
import platform
import sys

from subprocess import PIPE, run
from typing import Dict, List, Tuple, Union

from .errors import ShellException

CONFIG = {'debug': False, 'verbose': True}
LOGGER = logging.getLogger('bundledeps')

# list of stored level-msg pairs of logged lines issued before the
# filename-based handler becomes available. Once it becomes available this
# list will populate the newly created log.
TMP_LOG_STRLIST = []
_HAS_LOG_FILE = False


def set_log_file(filename: str):
    """
    Init logger to print to *filename*.
    Lines logged before the call are written first.
    """
    global _HAS_LOG_FILE  # pylint: disable=global-statement

    log_handler = logging.FileHandler(filename, mode='w')

    formatter = logging.Formatter("%(asctime)s: %(levelname)s: "
                                  "%(threadName)s: %(message)s",
                                  "%Y-%m-%d %H:%M:%S")
    log_handler.setFormatter(formatter)

    LOGGER.addHandler(log_handler)
    LOGGER.setLevel(logging.DEBUG)
    _HAS_LOG_FILE = True

    for level, line in TMP_LOG_STRLIST:
        LOGGER.log(level, line)
    TMP_LOG_STRLIST.clear()


def _log_or_store(level, *args, **kwargs):
    """
    Log a message if the file-based logger has been created, otherwise keep
    the message along with the level in TMP_LOG_STRLIST for temporary
    storage until it becomes available
    """
    line = ' '.join(str(a) for a in args)
    if not _HAS_LOG_FILE:
        TMP_LOG_STRLIST.append((level, line))
    else:
        LOGGER.log(level, line)


def eprint(*args, **kwargs):
    """
    error print: print to stderr
    """
    _log_or_store(logging.ERROR, *args, **kwargs)
    print(*args, file=sys.stderr, **kwargs)


def wprint(*args, **kwargs):
    """
    warning print: print to stderr
    """
    _log_or_store(logging.WARNING, *args, **kwargs)
    print(*args, file=sys.stderr, **kwargs)


def iprint(*args, **kwargs):
    """
    info print: print only if verbose flag is set
    """
    _log_or_store(logging.INFO, *args, **kwargs)
    if CONFIG['verbose'] or CONFIG['debug']:
        print(*args, file=sys.stderr, **kwargs)


def dprint(*args, **kwargs):
    """
    debug print: standard print and log
    """
    _log_or_store(logging.DEBUG, *args, **kwargs)
    if CONFIG['debug']:
        print(*args, file=sys.stderr, **kwargs)


def shell(cmd: Union[str, List[str]], log: bool = True,
          log_stderr: bool = True, env: Dict[str, str] = None) -> str:
    """
    Wrapper for subprocess.run

    Args:
        cmd: Can be either a string or a list of strings
             shell() will pass the command through the shell if and only if
             the cmd argument is a string
        log: log command string on debug output if True
        log_stderr: capture stderr and display with eprint() if True
        env: full environment with which the process must be executed. If None,
            the environment is inherited from the current process
    Raises:
        ValueError: if type of cmd is invalid
        ShellException: if the command run failed

    Returns:
        the output of the command decoded to utf-8
    """
    if isinstance(cmd, list):
        run_shell = False
        logmsg = ' '.join(cmd)
    elif isinstance(cmd, str):
        run_shell = True
        logmsg = cmd
    else:
        raise ValueError('Invalid shell argument type: ' + str(type(cmd)))

    if log:
        dprint('[shell] {0}'.format(logmsg))

    try:
        ret = run(cmd, stdout=PIPE, stderr=PIPE, shell=run_shell,
                  check=False, env=env)
    except (FileNotFoundError, PermissionError) as error:
        raise ShellException('failed to exec command: ' + logmsg) from error

    # Reproduce stderr of command with eprint() if requested
    if log_stderr:
        for line in ret.stderr.decode('utf-8', 'replace').splitlines():
            eprint(line)

    if ret.returncode == 0:
        return ret.stdout.decode('utf-8', 'replace')

    errmsg = 'Command "{:.50s}{:s}" failed with error {:d}' \
             .format(logmsg, '...' if len(logmsg) > 50 else '',
                     ret.returncode)
    raise ShellException(errmsg)


def read_os_release(filename: str = '/etc/os-release') -> Dict[str, str]:
    """
    Parse os-release file into a dictionary. Values are unquoted.
    Return an empty dictionary if the file does not exist.
    """
    fields = {}
    try:
        with open(filename, 'rt') as stream:
            for line in stream:
                line = line.strip()
                if not line or line.startswith('#') or '=' not in line:
                    continue
                key, value = line.split('=', 1)
                fields[key] = value.strip().strip('"\'')
    except FileNotFoundError:
        pass

    return fields


_DIST_DERIVATIVES = {
    'debian': {'debian', 'ubuntu', 'linuxmint', 'raspbian'},
    'opensuse': {'opensuse', 'opensuse-leap', 'opensuse-tumbleweed',
                 'opensuse-slowroll', 'sles', 'sled'},
}


def get_host_dist(os_release: Dict[str, str] = None) -> str:
    """
    return host distribution family ('opensuse', 'debian', ...)
    """
    if os_release is None:
        os_release = read_os_release()

    dist = os_release.get('ID', 'unknown')

    # Remap distributation derivative
    for orig_dist, derivatives in _DIST_DERIVATIVES.items():
        if dist in derivatives:
            return orig_dist

    return dist


def get_host_dist_version(os_release: Dict[str, str] = None) -> str:
    """
    return the host distribution version as written by the package index,
    like "Tumbleweed" or "Leap 15.5"
    """
    if os_release is None:
        os_release = read_os_release()

    pretty = os_release.get('PRETTY_NAME', '')
    if not pretty:
        pretty = (os_release.get('NAME', '') + ' '
                  + os_release.get('VERSION', '')).strip()

    return pretty[len('openSUSE '):] if pretty.startswith('openSUSE ') \
        else pretty


def is_64bit_host() -> bool:
    """
    return True if the running interpreter is a 64-bit one
    """
    return platform.architecture()[0] == '64bit'


def get_host_arch(support64: bool) -> str:
    """
    return the architecture name used by rpm repositories
    """
    if not support64:
        return 'i586'

    arch = platform.machine().lower()
    if arch in ('amd64', 'x86_64', ''):
        arch = 'x86_64'

    return arch


def parse_soname(soname: str) -> Tuple[str, str]:
    """
    helper to parse soname
    www.debian.org/doc/debian-policy/ch-sharedlibs.html

    Raises:
        ValueError: soname is not a shared library name
    """
    # try format: <name>.so.<major-version>
    try:
        name, major = soname.split('.so.', 1)
        return (name, major)
    except ValueError:
        pass

    if soname.endswith('.so'):
        return (soname[:-len('.so')], '')

    raise ValueError('failed to parse SONAME: ' + soname)


def guess_pkgname(soname: str) -> str:
    """
    Guess the name of the package shipping a shared library following the
    rpm shared library packaging policy.

    example:
        libfoo.so.2 => libfoo2
        libfoo2.so.1 => libfoo2-1
        libfoo.so.1.2 => libfoo1_2
        libfoo.so => libfoo
    """
    basename = os.path.basename(soname)
    try:
        name, version = parse_soname(basename)
    except ValueError:
        return basename

    version = version.replace('.', '_')

    # Allow to distinguish libfoo1.so.0 from libfoo.so.10
    if name and name[-1].isdigit() and version:
        name += '-'

    return name + version
