#!/usr/bin/env python3
"""
Pritunl CLI - command line client for the Pritunl client daemon

Lists, connects and disconnects the profiles imported into the Pritunl
client without using its GUI.

Usage:
    pritunl-cli -l                  (list profiles and connection state)
    pritunl-cli -l -o tsv           (list as tab-separated values)
    pritunl-cli -c <profile>        (connect by profile ID or name)
    pritunl-cli -d <profile|all>    (disconnect one profile or all)
    pritunl-cli -s                  (show daemon status)
    pritunl-cli -v                  (show version)
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional

from . import __version__
from .core.config import Settings
from .core.connections import has_active_connection, parse_connections, reconcile
from .core.credentials import resolve_credentials
from .core.profiles import Profile, find_profiles, load_profiles
from .daemon.client import DaemonClient
from .errors import KeychainLocked, PritunlError, UsageError
from .presenter import GREEN, NC, OUTPUT_FORMATS, RED, check_format, render

YELLOW = "\x1b[33m"

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pritunl-cli",
        description="Pritunl command line client",
    )
    parser.add_argument("-l", "--list", action="store_true", help="List connections")
    parser.add_argument("-c", "--connect", metavar="PROFILE", help="Connect to profile ID or Name")
    parser.add_argument("-d", "--disconnect", metavar="PROFILE", help='Disconnect profile or "all"')
    parser.add_argument("-o", "--output", default="table", metavar="FORMAT",
                        help=f"Output format for -l: {' or '.join(OUTPUT_FORMATS)} (default: table)")
    parser.add_argument("-u", "--user", default="", help="Username for -c")
    parser.add_argument("-p", "--password", default="", help="Password, PIN or PIN+OTP for -c")
    parser.add_argument("-s", "--status", action="store_true", help="Show daemon status")
    parser.add_argument("-v", "--version", action="store_true", help="Show version")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def list_connections(client: DaemonClient, profiles: Dict[str, Profile], output_format: str) -> int:
    """Print every profile with its live connection state."""
    if not profiles:
        print("No profiles found in Pritunl")
        return 1

    connections = parse_connections(client.get_connections())
    rows = reconcile(profiles, connections)
    print(render(rows, has_active_connection(rows), output_format))
    return 0


def _match(profiles: Dict[str, Profile], target: str) -> List[Profile]:
    matches = find_profiles(profiles, target)
    if not matches:
        raise PritunlError(f"No profile matching '{target}'")
    return matches


def connect(client: DaemonClient, profiles: Dict[str, Profile], target: str,
            username: str = "", password: str = "") -> int:
    """Connect every profile whose ID or name is target."""
    for profile in _match(profiles, target):
        creds = resolve_credentials(profile, username, password)
        client.connect_profile(profile.key, creds.username, creds.password, creds.data)
        print(f"{GREEN}Connecting {profile.name}{NC}")
    return 0


def disconnect(client: DaemonClient, profiles: Dict[str, Profile], target: str) -> int:
    """Disconnect every profile whose ID or name is target, or all of them."""
    if target == "all":
        client.stop_connections()
        print(f"{GREEN}All connections stopped{NC}")
        return 0

    for profile in _match(profiles, target):
        client.disconnect_profile(profile.key)
        print(f"{GREEN}Disconnected {profile.name}{NC}")
    return 0


def show_status(client: DaemonClient) -> int:
    """Print the daemon's status and whether it answers pings."""
    print(f"Daemon status: {client.status() or 'unknown'}")
    if client.ping():
        print(f"{GREEN}Daemon is responding{NC}")
    else:
        print(f"{YELLOW}Daemon did not answer ping{NC}")
    return 0


def run(args: argparse.Namespace, settings: Optional[Settings] = None) -> int:
    """Dispatch the action selected on the command line."""
    check_format(args.output)
    if not (args.list or args.connect or args.disconnect or args.status or args.version):
        raise UsageError("No action given")

    if args.version and not (args.list or args.connect or args.disconnect or args.status):
        print(__version__)
        return 0

    settings = settings or Settings.from_env()
    client = DaemonClient.from_settings(settings)
    log.debug(f"Using profiles in {settings.profile_dir}")

    if args.list:
        return list_connections(client, load_profiles(settings.profile_dir), args.output)
    if args.connect:
        return connect(client, load_profiles(settings.profile_dir), args.connect,
                       args.user, args.password)
    if args.disconnect:
        profiles = {} if args.disconnect == "all" else load_profiles(settings.profile_dir)
        return disconnect(client, profiles, args.disconnect)
    return show_status(client)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        parser.print_help()
        return 1

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        return run(args)
    except KeychainLocked as e:
        print(f"{RED}Error: {e}{NC}", file=sys.stderr)
        print(e.hint, file=sys.stderr)
        return 1
    except UsageError as e:
        print(f"{RED}Error: {e}{NC}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    except PritunlError as e:
        log.debug("Command failed", exc_info=True)
        print(f"{RED}Error: {e}{NC}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
