import argparse
import asyncio
import json
import logging
import os
import sys

from .errors import DevEnvError
from .loader import DevEnvContext
from .locator import find_config_file
from .utils import parse_log_level, setup_logging
from .version import __version__


def format_environment(env, config_path, fmt="text"):
    """Render a loaded environment for the terminal."""
    if fmt == "json":
        data = env.as_dict()
        data["config_path"] = config_path
        return json.dumps(data, indent=2, sort_keys=True, default=str)

    lines = [f"Project: {env.project_prefix}", f"Config:  {config_path}"]
    lines.append("Services:")
    for name in env.services:
        lines.append(f"  {name:<16} {env.urls.get(name, '-')}")
    if env.apps:
        lines.append("Apps:")
        for name in env.apps:
            lines.append(f"  {name:<16} {env.urls.get(name, '-')}")
    return "\n".join(lines)


def build_parser():
    parser = argparse.ArgumentParser(prog="devenv", description="devenv: Locate and inspect a project's dev environment config")
    parser.add_argument('--log-level', help="Set the logging level", default="WARNING")
    parser.add_argument('--log-file', help="Set the log output file", default=None)
    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest="command")

    # Locate Command
    parser_locate = subparsers.add_parser("locate", help="Print the path of the nearest dev config file")
    parser_locate.add_argument("-C", "--directory", help="Directory to start searching from (default: current directory)", default=None)

    # Show Command
    parser_show = subparsers.add_parser("show", help="Load the dev config and print the resolved environment")
    parser_show.add_argument("-C", "--directory", help="Directory to start searching from (default: current directory)", default=None)
    parser_show.add_argument("-f", "--format", choices=["text", "json"], default="text", help="Output format (default: text)")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(log_level=parse_log_level(args.log_level), log_file=args.log_file)

    if args.command == "locate":
        config_path = find_config_file(args.directory or os.getcwd())
        if config_path is None:
            logging.error("No dev config file found")
            return 1
        print(config_path)
    elif args.command == "show":
        context = DevEnvContext()
        try:
            env = asyncio.run(context.load(cwd=args.directory))
        except DevEnvError as e:
            logging.error(str(e))
            return 1
        print(format_environment(env, context.config_path, args.format))
    else:
        parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
