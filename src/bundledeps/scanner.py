# @mindmaze_header@
"""
Gather the shared libraries a bundle needs from the host system
"""

import os
from typing import Dict, Iterable, Optional, Set

from .common import dprint, iprint, wprint
from .errors import ScanError
from .file_utils import find_binaries
from .ldd import LddEntry, ldd
from .library_set import LibrarySet
from .runner import CommandRunner


def is_inside_root(path: str, install_root: str) -> bool:
    """
    returns whether path designates a file of the install root. Both the
    path as reported and its real path are checked.
    """
    if not install_root:
        return False

    root = install_root.rstrip('/') or '/'
    if root in path:
        return True

    return os.path.realpath(root) in os.path.realpath(path)


def is_bundled_binary(library: str, bundle_names: Iterable[str]) -> bool:
    """
    returns whether library is one of the binaries shipped in the bundle,
    ie if its basename is part of the name of a bundle binary.

    Args:
        library: name or path of the library
        bundle_names: basenames of the binaries found in the bundle
    """
    name = os.path.basename(library)
    return any(name in binary for binary in bundle_names)


def external_dependency(entry: LddEntry, install_root: str,
                        bundle_names: Set[str]) -> Optional[str]:
    """
    Filter a library reported by ldd

    Return:
        the library name if it must be provided by the host system, None if
        the bundle provides it
    """
    if entry.is_found() and is_inside_root(entry.path, install_root):
        return None

    if is_bundled_binary(entry.name, bundle_names):
        return None

    return entry.name


def scan_bundle(bundle_dir: str, install_root: str, runner: CommandRunner,
                known_problems: Optional[Dict[str, str]] = None
                ) -> LibrarySet:
    """
    Find the external shared libraries used by the native binaries of a
    bundle.

    Args:
        bundle_dir: folder containing the binaries to scan
        install_root: location where the bundle has been unpacked. Libraries
            resolved inside it are provided by the bundle.
        runner: executor of the ldd command
        known_problems: mapping of library name to a note to warn about if
            a binary depends on it

    Return:
        the set of libraries to be provided by the host system

    Raises:
        ScanError: a file could not be read, ldd failed on a binary or
            install_root is the filesystem root
    """
    if install_root and os.path.abspath(install_root) == '/':
        raise ScanError('install root cannot be /: every library would be '
                        'considered as provided by the bundle')

    known_problems = known_problems if known_problems else {}

    iprint(f'Finding all binaries from {bundle_dir}')
    binaries = find_binaries(bundle_dir)
    iprint(f'{len(binaries)} binaries found')
    bundle_names = {os.path.basename(b) for b in binaries}

    libraries = LibrarySet()
    for binary in binaries:
        for entry in ldd(binary, runner):
            library = external_dependency(entry, install_root, bundle_names)
            if not library or not libraries.add(library):
                continue

            dprint(f'{library} required by {binary}')
            note = known_problems.get(LibrarySet.key(library))
            if note:
                relpath = os.path.relpath(binary, install_root or bundle_dir)
                wprint(f'{library} required by {relpath}: {note}')

    return libraries
