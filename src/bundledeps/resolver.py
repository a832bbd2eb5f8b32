# @mindmaze_header@
"""
Resolution of shared library names into host distribution package names

Each library goes through the following steps:
  * local lookup: search the installed packages providing the library
  * remote lookup (if local lookup failed): search the remote package index
  * if both failed, the package name is guessed from the soname
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple

from .common import dprint, guess_pkgname, wprint
from .errors import DownloadError, ShellException
from .package_set import PackageSet, ResolvedDependency, Source
from .syspkg_manager_base import SysPkg, SysPkgManager


DEFAULT_CONCURRENCY = 5


def select_sysdep(candidates: List[SysPkg], own_pkgname: Optional[str],
                  support64: bool) -> Tuple[Optional[SysPkg], bool]:
    """
    Choose the package to depend on among the installed providers of a
    library. The bundle's own package is never chosen. On 64-bit host, the
    32-bit compatibility variants are only chosen if nothing else is
    available.

    Return:
        couple of chosen package (None if no suitable one) and a flag
        telling whether the bundle's package is the only provider
    """
    others = [c for c in candidates if c.name != own_pkgname]
    self_only = bool(candidates) and not others

    if not others:
        return (None, self_only)

    if support64:
        for candidate in others:
            if not candidate.compat32:
                return (candidate, False)

    return (others[0], False)


class PackageResolver:
    """
    Resolve libraries into packages with a bounded number of concurrent
    lookups.
    """

    def __init__(self, syspkg_mgr: SysPkgManager,
                 own_pkgname: Optional[str] = None,
                 support64: bool = True,
                 concurrency: int = DEFAULT_CONCURRENCY):
        if concurrency < 1:
            raise ValueError(f'invalid concurrency: {concurrency}')

        self.syspkg_mgr = syspkg_mgr
        self.own_pkgname = own_pkgname
        self.support64 = support64
        self.concurrency = concurrency

    def _local_lookup(self, library: str) -> Optional[ResolvedDependency]:
        try:
            candidates = self.syspkg_mgr.find_sharedlib_pkgs(library)
        except ShellException as err:
            dprint(f'{library} not found in installed packages: {err}')
            return None

        sysdep, self_only = select_sysdep(candidates, self.own_pkgname,
                                          self.support64)
        if self_only:
            return ResolvedDependency(library, None, Source.SELF)

        if not sysdep:
            return None

        return ResolvedDependency(library, sysdep.get_sysdep(), Source.LOCAL)

    def _remote_lookup(self, library: str) -> Optional[ResolvedDependency]:
        remote = self.syspkg_mgr.remote_index
        if not remote:
            return None

        try:
            pkgname = remote.find_sharedlib_pkg(library)
        except DownloadError as err:
            wprint(f'remote lookup of {library} failed: {err}')
            return None

        if not pkgname:
            return None

        return ResolvedDependency(library, pkgname, Source.REMOTE)

    def resolve(self, library: str) -> ResolvedDependency:
        """
        Find the package providing library. This never fails: if no
        package can be found, the result is unresolved and carries a
        guessed package name.
        """
        resolved = self._local_lookup(library)
        if not resolved:
            resolved = self._remote_lookup(library)

        if resolved:
            dprint(f'{library} -> {resolved.package} ({resolved.source.value})')
            return resolved

        guess = guess_pkgname(library)
        wprint(f'{library} probably resolves to {guess}, but it could not be '
               'found in installed packages nor in the package index. '
               'Do your own research!')
        return ResolvedDependency(library, None, Source.UNRESOLVED, guess)

    def resolve_all(self, libraries: Iterable[str],
                    package_set: Optional[PackageSet] = None) -> PackageSet:
        """
        Resolve every library, running at most self.concurrency lookups at
        the same time. Returns once all of them are done.

        Args:
            libraries: names of the libraries to resolve. Duplicates are
                resolved once.
            package_set: collection where results are added. A new one is
                created if None.
        """
        if package_set is None:
            package_set = PackageSet()

        def _task(library: str):
            package_set.add(self.resolve(library))

        pending = list(dict.fromkeys(libraries))
        with ThreadPoolExecutor(max_workers=self.concurrency,
                                thread_name_prefix='resolver') as executor:
            futures = [executor.submit(_task, lib) for lib in pending]

        # propagate unexpected failure of any task
        for future in futures:
            future.result()

        return package_set
