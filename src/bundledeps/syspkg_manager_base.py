# @mindmaze_header@
"""
Base class abstracting system package manager
"""

from typing import List, Optional

from .runner import CommandRunner


class SysPkg:
    """
    representation of a package installed on the host providing a file
    """
    def __init__(self, name: str, compat32: bool = False):
        self.name = name
        self.compat32 = compat32  # 32-bit compatibility variant

    def get_sysdep(self) -> str:
        """
        get system dependency string corresponding to depends on the package
        """
        return self.name

    def __eq__(self, other):
        return (isinstance(other, SysPkg) and self.name == other.name
                and self.compat32 == other.compat32)

    def __repr__(self):
        return 'SysPkg({!r}{})'.format(self.name,
                                       ', compat32' if self.compat32 else '')


class RemotePkgIndex:
    """
    Base class of a remote catalog mapping library files to packages
    """

    def find_sharedlib_pkg(self, library: str) -> Optional[str]:
        """
        Search the package of the host distribution shipping library.

        Return: the package name, None if the index does not know any

        Raises:
            DownloadError: the index could not be queried
        """
        raise NotImplementedError


class SysPkgManager:
    """
    Base class of interaction with system package manager
    """

    def __init__(self, runner: CommandRunner,
                 remote_index: Optional[RemotePkgIndex] = None):
        self.runner = runner
        self.remote_index = remote_index

    def find_sharedlib_pkgs(self, library: str) -> List[SysPkg]:
        """
        Search the installed packages providing a file named library.

        Args:
            library: file name of the shared library

        Return: list of installed packages providing the library, in the
            order reported by the package manager.

        Raises:
            ShellException: the query failed, which is the case when no
                package matches
        """
        raise NotImplementedError
