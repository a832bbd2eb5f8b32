# @mindmaze_header@
"""
List the shared libraries a bundle needs from the host system.
"""

from argparse import ArgumentParser

from .config import load_config
from .runner import LocalCommandRunner
from .scanner import scan_bundle
from .bundledeps_requires import get_install_root


def add_parser_args(parser: ArgumentParser):
    """Enrich supplied argument parser with list-libs related arguments"""
    parser.add_argument('bundle_dir', type=str,
                        help='folder of the unpacked binaries to scan')
    parser.add_argument('-r', '--install-root', dest='install_root',
                        type=str,
                        help='root folder of the unpacked bundle. Defaults '
                             'to bundle_dir')


def main(options) -> int:
    """
    main function
    """
    config = load_config(options.config)
    libraries = scan_bundle(options.bundle_dir,
                            get_install_root(options, config),
                            LocalCommandRunner(),
                            config['known-problematic-libraries'])

    for library in sorted(libraries):
        print(library)

    return 0
