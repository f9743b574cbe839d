"""
Command-line interface for deluge-rpc.

Provides terminal access to the Deluge Web API:
- Listing torrents and showing their status
- Adding torrents from magnet links, URLs or local .torrent files
- Removing torrents, optionally with their data

Usage:
    deluge-rpc list
    deluge-rpc status <torrent_id>
    deluge-rpc add <magnet/url/file>
    deluge-rpc remove <torrent_id> --data
"""

import argparse
import json
import sys

from .config import Config
from .deluge_client import DelugeClient
from .exceptions import DelugeError
from .logger import configure_console
from .torrent_file import TorrentFileError


def format_bytes(size):
    """Format bytes as human-readable string."""
    if size is None:
        return "N/A"
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024:
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} PB"


def build_parser():
    parser = argparse.ArgumentParser(
        description="Deluge Web JSON-RPC client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list
  %(prog)s status 2b4c0e4f...
  %(prog)s add magnet:?xt=...
  %(prog)s add ./debian.iso.torrent
  %(prog)s remove 2b4c0e4f... --data
"""
    )
    parser.add_argument("--url", default=Config.DELUGE_URL, help="Deluge Web JSON endpoint")
    parser.add_argument("--password", default=Config.DELUGE_PASSWORD, help="Deluge Web password")
    parser.add_argument("--timeout", type=float, default=Config.DELUGE_TIMEOUT, help="Request timeout in seconds")
    parser.add_argument("--json", action="store_true", help="Print raw JSON results")
    parser.add_argument("-v", "--verbose", action="store_true", default=Config.VERBOSE, help="Log requests to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("list", help="List all torrents")

    status_parser = subparsers.add_parser("status", help="Show torrent status")
    status_parser.add_argument("torrent_id", nargs="?", help="Torrent id (default: all torrents)")

    add_parser = subparsers.add_parser("add", help="Add a torrent")
    add_parser.add_argument("uri", help="Magnet URI, HTTP URL, or .torrent file path")
    add_parser.add_argument("--paused", action="store_true", help="Add the torrent paused")
    add_parser.add_argument("--download-location", help="Directory to download into")

    rm_parser = subparsers.add_parser("remove", help="Remove a torrent")
    rm_parser.add_argument("torrent_id", help="Torrent id")
    rm_parser.add_argument("--data", action="store_true", help="Also delete downloaded data")

    return parser


def add_options(args):
    options = {}
    if args.paused:
        options["add_paused"] = True
    if args.download_location:
        options["download_location"] = args.download_location
    return options


def add(client, args):
    options = add_options(args)
    if args.uri.startswith("magnet:"):
        return client.add_torrent_magnet(args.uri, options)
    elif args.uri.startswith(("http://", "https://")):
        return client.add_torrent_url(args.uri, options)
    else:
        return client.add_torrent_path(args.uri, options)


def print_torrents(torrents):
    if not torrents:
        print("No torrents found.")
        return

    print(f"{'ID':<42} {'STATE':<12} {'PROGRESS':<10} {'SIZE':<12} {'NAME'}")
    print("-" * 100)
    for torrent_id, t in torrents.items():
        state = str(t.get('state', 'N/A'))[:12]
        progress = f"{t.get('progress', 0):.1f}%"
        size = format_bytes(t.get('total_size'))
        name = str(t.get('name', 'Unknown'))[:40]
        print(f"{torrent_id:<42} {state:<12} {progress:<10} {size:<12} {name}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_console(args.verbose)

    try:
        with DelugeClient(args.url, args.password, timeout=args.timeout) as client:
            if args.command == "list":
                torrents = client.get_torrents_status()
                if args.json:
                    print(json.dumps(torrents, indent=2))
                else:
                    print_torrents(torrents)

            elif args.command == "status":
                if args.torrent_id:
                    res = client.get_torrent_status(args.torrent_id)
                else:
                    res = client.get_torrents_status()
                print(json.dumps(res, indent=2))

            elif args.command == "add":
                torrent_id = add(client, args)
                print(json.dumps(torrent_id) if args.json else f"Added torrent {torrent_id}")

            elif args.command == "remove":
                removed = client.remove_torrent(args.torrent_id, args.data)
                if args.json:
                    print(json.dumps(removed))
                else:
                    print("Torrent removed" if removed else "Torrent not removed")
                if not removed:
                    return 1

    except (DelugeError, TorrentFileError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
