"""
cfscan - Resolve hosts and flag provider address ranges

Usage:
    cfscan <input_file>                       Resolve every line of input_file
    cfscan <input_file> -w 200                Use 200 worker threads
    cfscan <input_file> -r ranges.txt         Use a different ranges file
    cfscan --update-ranges                    Download the provider ranges
    cfscan <input_file> --update-ranges       Update ranges, then resolve

Each input line is an IP address, a URL or a bare hostname. Output is one
line per input, in completion order:

    <input> : [<ipv4,...>] [<ipv6,...>] [cloudflare]
"""

import argparse
import sys
from pathlib import Path

from .core.config import ConfigManager
from .ranges.fetcher import update_ranges_file
from .resolution.runner import run_resolution


# ASCII Banner (ASCII-safe for Windows compatibility)
BANNER = r"""
       __
  ___ / _|___  ___ __ _ _ __
 / __| |_/ __|/ __/ _` | '_ \
| (__|  _\__ \ (_| (_| | | | |
 \___|_| |___/\___\__,_|_| |_|
   Resolve & flag provider IPs
"""


def print_banner():
    try:
        print(BANNER, file=sys.stderr)
    except UnicodeEncodeError:
        print("\n=== cfscan ===\n", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cfscan',
        description='Resolve IPs, URLs and hostnames and flag provider address ranges',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s targets.txt
  %(prog)s targets.txt -w 200 -r ip.conf
  %(prog)s --update-ranges
        """
    )

    parser.add_argument('input', nargs='?', help='File with one IP, URL or hostname per line')
    parser.add_argument('-c', '--config', default=None,
                        help='Path to config.json (default: ./config.json if present)')
    parser.add_argument('-r', '--ranges', default=None, help='Provider ranges file (default: ip.conf)')
    parser.add_argument('-w', '--workers', type=int, default=None, help='Number of worker threads')
    parser.add_argument('--queue-size', type=int, default=None, help='Work and result queue capacity')
    parser.add_argument('--label', default=None, help='Tag appended to in-range results (default: cloudflare)')
    parser.add_argument('--update-ranges', action='store_true',
                        help='Download the provider ranges into the ranges file first')
    parser.add_argument('-q', '--quiet', action='store_true', help='Only print results')

    return parser


def load_config(args) -> ConfigManager:
    """Config file values, overridden by command line flags"""
    config = ConfigManager.discover(args.config)

    if args.ranges:
        config.set('ranges', 'file', value=args.ranges)
    if args.workers is not None:
        config.set('workers', value=args.workers)
    if args.queue_size is not None:
        config.set('queue_size', value=args.queue_size)
    if args.label:
        config.set('ranges', 'label', value=args.label)

    return config


def cmd_update_ranges(config: ConfigManager, quiet: bool = False):
    """Download provider ranges into the ranges file"""
    ranges_file = Path(config.get('ranges', 'file'))
    result = update_ranges_file(config.get('ranges', default={}), ranges_file)

    if result['success']:
        if not quiet:
            print(f"[OK] Saved {result['count']} ranges to {result['output_file']}", file=sys.stderr)
    else:
        print(f"[FAIL] {result.get('error', 'Unknown error')}")
        sys.exit(1)


def cmd_resolve(config: ConfigManager, input_file: str, quiet: bool = False):
    """Resolve every input line"""
    result = run_resolution(input_file, config, quiet=quiet)

    if not result['success']:
        print(f"[FAIL] {result.get('error', 'Unknown error')}")
        sys.exit(1)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.quiet:
        print_banner()

    if args.input is None and not args.update_ranges:
        print("Usage: cfscan <input_file>")
        sys.exit(1)

    try:
        config = load_config(args)

        if args.update_ranges:
            cmd_update_ranges(config, quiet=args.quiet)

        if args.input is not None:
            cmd_resolve(config, args.input, quiet=args.quiet)
    except KeyboardInterrupt:
        print("\n\n[!] Interrupted", file=sys.stderr)
        sys.exit(1)
    except BrokenPipeError:
        # Output closed early, e.g. piped into head
        sys.stderr.close()
        sys.exit(1)
    except (FileNotFoundError, ValueError) as e:
        print(f"[FAIL] {e}")
        sys.exit(1)
    except Exception as e:
        print(f"\n[FAIL] {str(e)}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
