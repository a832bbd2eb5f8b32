# @mindmaze_header@
"""
Load the configuration of bundledeps

The configuration is a yaml file looked up in order:
  * path given on command line
  * $BUNDLEDEPS_CONFIG
  * $XDG_CONFIG_HOME/bundledeps/bundledeps.yaml
  * ./bundledeps.yaml
  * /etc/bundledeps/bundledeps.yaml

Example:
    package-name: wps-office
    concurrency: 5
    requires-token: 'Requires:'
    known-problematic-libraries:
      libQtXml.so.4: may not be found on openSUSE Tumbleweed since Qt4 was
                     deprecated
"""

import os
from typing import Any, Dict, List, Optional

import yaml

from .common import dprint, get_host_arch, get_host_dist_version, \
    is_64bit_host
from .errors import BundleDepsError
from .rpmfind import RPMFIND_SEARCH_URL
from .resolver import DEFAULT_CONCURRENCY


PACKAGE_VERSION = '1.0.0'

_HOME = os.environ.get('HOME', os.path.expanduser('~'))
XDG_CONFIG_HOME = os.environ.get('XDG_CONFIG_HOME',
                                 os.path.join(_HOME, '.config'))

DEFAULT_KNOWN_PROBLEMS = {
    'libQtXml.so.4': 'may not be found on recent distributions since Qt4 '
                     'was deprecated',
}

DEFAULTS = {
    'package-name': None,
    'install-root': None,
    'concurrency': DEFAULT_CONCURRENCY,
    'requires-token': 'Requires:',
    'dist-version': None,
    'arch': None,
    'support64': None,
    'remote-index-url': RPMFIND_SEARCH_URL,
    'remote-timeout': 30.0,
    'include-guesses': True,
    'known-problematic-libraries': DEFAULT_KNOWN_PROBLEMS,
}


def config_search_paths() -> List[str]:
    """
    list of the configuration files to try, by order of preference
    """
    paths = []
    env_path = os.environ.get('BUNDLEDEPS_CONFIG')
    if env_path:
        paths.append(env_path)

    paths += [os.path.join(XDG_CONFIG_HOME, 'bundledeps', 'bundledeps.yaml'),
              'bundledeps.yaml',
              '/etc/bundledeps/bundledeps.yaml']
    return paths


def _validate(config: Dict[str, Any], filename: str):
    unknown = set(config) - set(DEFAULTS)
    if unknown:
        raise BundleDepsError('Unknown configuration keys in {}: {}'
                              .format(filename, ', '.join(sorted(unknown))))

    concurrency = config.get('concurrency', DEFAULT_CONCURRENCY)
    if isinstance(concurrency, bool) or not isinstance(concurrency, int) \
       or concurrency < 1:
        raise BundleDepsError(f'concurrency must be a positive integer, '
                              f'got {concurrency!r} in {filename}')

    problems = config.get('known-problematic-libraries', {})
    if problems is not None and not isinstance(problems, dict):
        raise BundleDepsError('known-problematic-libraries must be a mapping'
                              f' in {filename}')


def _load_file(filename: str) -> Dict[str, Any]:
    try:
        with open(filename, 'rt') as stream:
            content = yaml.safe_load(stream)
    except yaml.YAMLError as err:
        raise BundleDepsError(f'Invalid configuration {filename}: {err}') \
            from err

    if content is None:
        return {}

    if not isinstance(content, dict):
        raise BundleDepsError(f'Invalid configuration {filename}: '
                              'a mapping is expected')

    _validate(content, filename)
    return content


def fill_host_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Set the host dependent settings that have not been configured
    """
    if config['support64'] is None:
        config['support64'] = is_64bit_host()

    if not config['arch']:
        config['arch'] = get_host_arch(config['support64'])

    if not config['dist-version']:
        config['dist-version'] = get_host_dist_version()

    if config['known-problematic-libraries'] is None:
        config['known-problematic-libraries'] = {}

    return config


def load_config(filename: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration, completed with default values.

    Args:
        filename: configuration file to load. If None, the first existing
            file among config_search_paths() is used, if any.

    Raises:
        BundleDepsError: the configuration file is invalid
        FileNotFoundError: filename has been specified but does not exist
    """
    config = dict(DEFAULTS)

    if filename is None:
        for path in config_search_paths():
            if os.path.isfile(path):
                filename = path
                break

    if filename is not None:
        dprint(f'loading configuration from {filename}')
        config.update(_load_file(filename))

    return fill_host_defaults(config)
