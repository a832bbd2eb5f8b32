# @mindmaze_header@
"""
Access to the external collaborators: local commands and http servers.

Every component querying a tool or a remote service does it through one of
the classes of this module, so that tests can substitute fakes.
"""

from typing import Dict, List, Optional

import urllib3

from .common import dprint, shell
from .errors import DownloadError


class CommandRunner:
    """
    Base class of local command execution
    """

    def run(self, cmd: List[str]) -> str:
        """
        Execute command and return its standard output.

        Raises:
            ShellException: the command could not be executed or returned a
                failure code
        """
        raise NotImplementedError


class LocalCommandRunner(CommandRunner):
    """
    Run commands on the host with subprocess
    """

    def __init__(self, log_stderr: bool = False):
        self.log_stderr = log_stderr

    def run(self, cmd: List[str]) -> str:
        return shell(cmd, log_stderr=self.log_stderr)


class HttpClient:
    """
    Base class of http access
    """

    def get(self, url: str, fields: Optional[Dict[str, str]] = None) -> str:
        """
        Perform a GET request on url and return the decoded body.

        Args:
            url: location of the resource
            fields: query parameters, encoded in the url

        Raises:
            DownloadError: the server could not be reached or did not
                answer with success
        """
        raise NotImplementedError


class Urllib3Client(HttpClient):
    """
    HttpClient implementation backed by a urllib3 pool manager. A single
    instance can be shared between threads: maxsize must be at least the
    number of threads using it so that connections are reused.
    """

    def __init__(self, timeout: float = 30.0, retries: int = 0,
                 maxsize: int = 1):
        self._pool = urllib3.PoolManager(
            maxsize=maxsize,
            timeout=urllib3.Timeout(total=timeout),
            retries=urllib3.Retry(connect=retries, read=retries, redirect=3),
        )

    def get(self, url: str, fields: Optional[Dict[str, str]] = None) -> str:
        dprint(f'[http] GET {url} {fields if fields else ""}')
        try:
            response = self._pool.request('GET', url, fields=fields)
        except urllib3.exceptions.HTTPError as err:
            raise DownloadError(str(err), url) from err

        if response.status != 200:
            raise DownloadError(response.reason or str(response.status), url)

        return response.data.decode('utf-8', 'replace')
