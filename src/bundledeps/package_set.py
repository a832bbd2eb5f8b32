# @mindmaze_header@
"""
Aggregation of the result of library resolution
"""

import sys
from enum import Enum
from threading import Lock
from typing import Dict, List, NamedTuple, Optional, Set

from .common import iprint, wprint


class Source(Enum):
    """
    how the package of a library has been determined
    """
    LOCAL = 'local'
    REMOTE = 'remote'
    UNRESOLVED = 'unresolved'
    SELF = 'self'  # only the bundle's own package provides the library


class ResolvedDependency(NamedTuple):
    """
    Result of the package resolution of one library
    """
    library: str
    package: Optional[str]
    source: Source
    guess: Optional[str] = None

    def requirement(self) -> Optional[str]:
        """
        package name to require for this library: the resolved package, the
        guessed one if unresolved, None if provided by the bundle.
        """
        if self.source == Source.UNRESOLVED:
            return self.guess
        return self.package


class PackageSet:
    """
    Thread-safe collection of the resolved dependencies of a bundle.

    Resolution tasks add their result concurrently; the content must only
    be read once all tasks are complete.
    """

    def __init__(self):
        self._lock = Lock()
        self._results: Dict[str, ResolvedDependency] = {}

    def add(self, resolved: ResolvedDependency) -> bool:
        """
        Record the resolution of a library.

        Return:
            False if the library has already been recorded
        """
        with self._lock:
            if resolved.library in self._results:
                return False
            self._results[resolved.library] = resolved
            return True

    def results(self) -> List[ResolvedDependency]:
        """resolution results sorted by library name"""
        with self._lock:
            return sorted(self._results.values(), key=lambda r: r.library)

    def packages(self, include_guesses: bool = True) -> List[str]:
        """
        Sorted list of the distinct packages required
        """
        pkgs = set()
        for resolved in self.results():
            if resolved.source == Source.UNRESOLVED and not include_guesses:
                continue
            pkgname = resolved.requirement()
            if pkgname:
                pkgs.add(pkgname)

        return sorted(pkgs)

    def guesses(self) -> Dict[str, List[str]]:
        """
        mapping of guessed package names to the libraries they come from
        """
        guessed = {}
        for resolved in self.unresolved():
            guessed.setdefault(resolved.guess, []).append(resolved.library)
        return guessed

    def unresolved(self) -> List[ResolvedDependency]:
        """results of libraries with no package found"""
        return [r for r in self.results() if r.source == Source.UNRESOLVED]

    def count(self, source: Source) -> int:
        """number of libraries resolved by source"""
        return len([r for r in self.results() if r.source == source])

    @property
    def resolved_count(self) -> int:
        """number of libraries whose package has been found"""
        return self.count(Source.LOCAL) + self.count(Source.REMOTE)

    @property
    def unresolved_count(self) -> int:
        """number of libraries whose package has only been guessed"""
        return self.count(Source.UNRESOLVED)

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def report(self):
        """
        Print summary of the resolution and enumerate unresolved libraries
        """
        iprint('{} libraries: {} resolved locally, {} from the remote index, '
               '{} provided by the bundle, {} unresolved'
               .format(len(self), self.count(Source.LOCAL),
                       self.count(Source.REMOTE), self.count(Source.SELF),
                       self.unresolved_count))

        for resolved in self.unresolved():
            wprint(f'unresolved: {resolved.library} (guessed package: '
                   f'{resolved.guess}, verify manually)')

    def write_requires(self, filename: str, token: str = 'Requires:',
                       include_guesses: bool = True):
        """
        Write the requirement list, one package per line prefixed by token.
        Guessed packages are preceded by a comment line naming the
        libraries they have been guessed from. filename '-' means standard
        output.
        """
        guessed = self.guesses() if include_guesses else {}
        found = self._found_packages()
        lines = []
        for pkgname in self.packages(include_guesses):
            if pkgname in guessed and pkgname not in found:
                libs = ', '.join(guessed[pkgname])
                lines.append(f'# guessed from {libs}, verify manually')
            lines.append(f'{token} {pkgname}')

        content = ''.join(line + '\n' for line in lines)
        if filename == '-':
            sys.stdout.write(content)
            return

        with open(filename, 'wt') as outfile:
            outfile.write(content)
        iprint(f'wrote {filename}')

    def _found_packages(self) -> Set[str]:
        return {r.package for r in self.results()
                if r.source in (Source.LOCAL, Source.REMOTE)}
