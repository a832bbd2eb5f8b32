# @mindmaze_header@
"""
Helpers to interact with system package manager
"""

from typing import Any, Dict

from .common import get_host_dist
from .errors import BundleDepsError
from .rpmfind import RpmFind
from .runner import CommandRunner, HttpClient
from .syspkg_manager_base import SysPkg, SysPkgManager
from .syspkg_manager_dpkg import Dpkg
from .syspkg_manager_zypper import Zypper


__all__ = ['SysPkg', 'SysPkgManager', 'create_syspkg_mgr']


def create_syspkg_mgr(config: Dict[str, Any], runner: CommandRunner,
                      client: HttpClient,
                      host_dist: str = None) -> SysPkgManager:
    """
    Create the right system package manager class for the host

    Args:
        config: loaded configuration (see config.load_config())
        runner: executor of the package manager commands
        client: http client used by the remote package index if any
        host_dist: distribution family, detected from the host if None

    Raises:
        BundleDepsError: the host distribution is not supported
    """
    if host_dist is None:
        host_dist = get_host_dist()

    if host_dist == 'opensuse':
        remote = RpmFind(client,
                         dist_version=config['dist-version'],
                         support64=config['support64'],
                         arch=config['arch'],
                         url=config['remote-index-url'])
        return Zypper(runner, remote)

    if host_dist == 'debian':
        return Dpkg(runner)

    raise BundleDepsError('Unknown distribution: ' + host_dist)
