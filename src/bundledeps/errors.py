# @mindmaze_header@
"""
Definition of custom errors
"""


class BundleDepsError(Exception):
    """Basic exception for errors raised by bundledeps."""
    def __init__(self, msg=None):
        if msg is None:
            msg = 'bundledeps failed'
        super().__init__(msg)


class ShellException(BundleDepsError):
    """Custom exception for shell command error."""


class DownloadError(BundleDepsError):
    """Exception for download failure."""

    def __init__(self, reason: str, url: str):
        super().__init__(f'Failed to download {url}: {reason}')
        self.url = url
        self.reason = reason


class ScanError(BundleDepsError):
    """Error making the scan of a bundle untrustworthy."""
