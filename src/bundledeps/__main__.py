# @mindmaze_header@
"""
bundledeps finds the host packages required by a bundle of foreign native
binaries.
"""

import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter

from argcomplete import autocomplete

from . import bundledeps_list_libs
from . import bundledeps_requires
from . import common
from .config import PACKAGE_VERSION


# all subcommand MUST expose a main function, the subcommand main entry point
ALL_CMDS = {
    'list-libs': bundledeps_list_libs,
    'requires': bundledeps_requires,
}


def cmdline_parser() -> ArgumentParser:
    """Create cmdline parser of bundledeps and subcmds"""
    parser = ArgumentParser(prog='bundledeps', description=__doc__,
                            formatter_class=RawDescriptionHelpFormatter)
    parser.add_argument("-v", "--version", help="show version and exit",
                        action="version", version=PACKAGE_VERSION)
    parser.add_argument("-q", "--quiet", help="silence output",
                        action="store_true", default=False)
    parser.add_argument("-d", "--debug", help="toggle debug mode",
                        action="store_true", default=False)
    parser.add_argument("-c", "--config", help="configuration file",
                        action="store", dest='config', default=None)
    parser.add_argument("--log-file", help="file where to write the log",
                        action="store", dest='log_file', default=None)

    subparsers = parser.add_subparsers(dest='command', required=True)
    for subcmd, mod in ALL_CMDS.items():
        mod.add_parser_args(subparsers.add_parser(subcmd, help=mod.__doc__))

    return parser


def launch_subcommand(args) -> int:
    """
    wrapper for calling the sub-commands.
    The wrapper also masks Exceptions, hiding the backtrace when debug mode is
    disabled.
    """
    mod = ALL_CMDS[args.command]
    if common.CONFIG['debug']:
        return mod.main(args)

    try:
        ret = mod.main(args)
    except KeyboardInterrupt:
        ret = 130
    except Exception as inst:  # pylint: disable=broad-except
        common.eprint('Error: {}'.format(inst))
        ret = 1

    return ret


def main(argv=None) -> int:
    """
    main entry point for all bundledeps commands, and only a stub
    redirecting to the various subcommands
    """
    parser = cmdline_parser()
    autocomplete(parser)
    args = parser.parse_args(argv)

    common.CONFIG['verbose'] = not args.quiet
    common.CONFIG['debug'] = args.debug
    if args.log_file:
        common.set_log_file(args.log_file)

    return launch_subcommand(args)


if __name__ == "__main__":
    sys.exit(main())
