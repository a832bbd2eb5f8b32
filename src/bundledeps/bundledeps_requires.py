# @mindmaze_header@
"""
Generate the requirement list of a bundle of native binaries.

Scan the binaries found in the bundle folder, collect the shared libraries
they need from the host, resolve them into package names and write them as
"Requires:" lines suitable for an rpm specfile.
"""

import os
from argparse import ArgumentParser

from .common import iprint
from .config import load_config
from .package_set import PackageSet
from .resolver import PackageResolver
from .runner import LocalCommandRunner, Urllib3Client
from .scanner import scan_bundle
from .syspkg_manager import create_syspkg_mgr


def add_parser_args(parser: ArgumentParser):
    """Enrich supplied argument parser with requires related arguments"""
    parser.add_argument('bundle_dir', type=str,
                        help='folder of the unpacked binaries to scan')
    parser.add_argument('-r', '--install-root', dest='install_root',
                        type=str,
                        help='root folder of the unpacked bundle. Libraries '
                             'found inside are provided by the bundle. '
                             'Defaults to bundle_dir')
    parser.add_argument('-o', '--output', dest='output', type=str,
                        default='depends.txt',
                        help='file where to write the requirements '
                             '("-" for standard output)')
    parser.add_argument('-j', '--jobs', dest='jobs', type=int,
                        help='maximum number of concurrent package lookups')
    parser.add_argument('-n', '--package-name', dest='package_name',
                        type=str,
                        help='name of the package of the bundle, never '
                             'required')


def get_install_root(options, config) -> str:
    """install root from command line, configuration or bundle folder"""
    root = options.install_root or config['install-root'] \
        or options.bundle_dir
    return os.path.abspath(root)


def main(options) -> int:
    """
    main function
    """
    config = load_config(options.config)
    if options.jobs:
        config['concurrency'] = options.jobs
    if options.package_name:
        config['package-name'] = options.package_name

    runner = LocalCommandRunner()
    libraries = scan_bundle(options.bundle_dir,
                            get_install_root(options, config),
                            runner,
                            config['known-problematic-libraries'])

    client = Urllib3Client(timeout=config['remote-timeout'],
                           maxsize=config['concurrency'])
    resolver = PackageResolver(create_syspkg_mgr(config, runner, client),
                               own_pkgname=config['package-name'],
                               support64=config['support64'],
                               concurrency=config['concurrency'])

    iprint('Resolving {} libraries to package names...'
           .format(len(libraries)))
    package_set = resolver.resolve_all(libraries, PackageSet())
    package_set.report()
    package_set.write_requires(options.output,
                               token=config['requires-token'],
                               include_guesses=config['include-guesses'])
    return 0
