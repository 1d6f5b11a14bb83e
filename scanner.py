#!/usr/bin/env python3
"""
Bucket Checker - Command-Line Entry Point
==========================================

Reads bucket identifiers (one per line) from a file or stdin, probes each one
for anonymous read and write access, and prints a status line per bucket
followed by a summary of the buckets with open permissions.

Usage:
    python scanner.py -i buckets.txt
    cat buckets.txt | python scanner.py
    python scanner.py -i buckets.txt -c probe_config.yaml --workers 20
"""

import sys
import signal
import logging
import argparse
from pathlib import Path

import yaml

from bucketchecker.discovery.classifier import classify_lines
from bucketchecker.reporting.console_report import ResultAggregator
from bucketchecker.scanners.probe_runner import BucketProber
from bucketchecker.utils.config import get_probe_config
from bucketchecker.utils.http_client import ProbeHTTPClient
from bucketchecker.utils.input_loader import read_identifiers


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _signal_handler(signum, frame):
    print("\n[!] Force exit...", file=sys.stderr)
    sys.exit(1)


def safe_print(text, file=None):
    """Print text, falling back to ASCII if Unicode fails"""
    try:
        print(text, file=file)
    except UnicodeEncodeError:
        print(text.encode('ascii', 'ignore').decode('ascii'), file=file)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Bucket Checker - Anonymous Cloud Storage Permission Prober',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python scanner.py -i buckets.txt
  cat buckets.txt | python scanner.py
  python scanner.py -i buckets.txt --do-region ams3 --linode-region eu-central-1

Recognised identifiers:
  <bucket>.s3.amazonaws.com, s3.amazonaws.com/<bucket>
  <bucket>[.<region>].digitaloceanspaces.com
  <bucket>[.<region>].linodeobjects.com
  <container>.blob.core.windows.net
  <bucket>.storage.googleapis.com, storage.googleapis.com/<bucket>
  anything else is probed as a plain hostname
        '''
    )

    parser.add_argument(
        '-i', '--input',
        help='Input file containing bucket names (one per line). Reads stdin if omitted.'
    )
    parser.add_argument('-c', '--config', help='Path to a YAML probe configuration file')
    parser.add_argument('--workers', type=int, help='Number of concurrent probe workers')
    parser.add_argument('--timeout', type=float, help='Per-request read timeout in seconds')
    parser.add_argument('--do-region', help='Default DigitalOcean Spaces region (e.g. nyc3)')
    parser.add_argument('--linode-region', help='Default Linode Object Storage region (e.g. us-east-1)')
    parser.add_argument('--no-color', action='store_true', help='Disable ANSI colors')
    parser.add_argument('--no-banner', action='store_true', help='Do not print the banner')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging on stderr')
    return parser


def setup_logging(verbose: bool = False):
    """Configure logging (stderr only, stdout carries results)"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    # urllib3 connection chatter drowns out probe results at DEBUG
    logging.getLogger('urllib3').setLevel(logging.WARNING)


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = get_probe_config(
            Path(args.config) if args.config else None,
            max_workers=args.workers,
            request_timeout=args.timeout,
            digitalocean_region=args.do_region,
            linode_region=args.linode_region,
            color=False if args.no_color else None,
            banner=False if args.no_banner else None,
        )
    except (OSError, ValueError, yaml.YAMLError) as e:
        safe_print(f"[!] Invalid configuration: {e}", file=sys.stderr)
        return 1

    aggregator = ResultAggregator(color=config.color)
    if config.banner:
        aggregator.print_banner()

    input_file = Path(args.input) if args.input else None
    try:
        lines = read_identifiers(input_file)
    except OSError as e:
        safe_print(f"[!] Error opening file {args.input}: {e}", file=sys.stderr)
        return 1

    targets = classify_lines(lines)
    logging.getLogger('scanner').info(f"Loaded {len(targets)} targets")

    try:
        with ProbeHTTPClient(config) as client:
            prober = BucketProber(config, client)
            prober.run(targets, on_result=aggregator.record)
    except KeyboardInterrupt:
        # Second Ctrl+C while workers drain forces the exit
        signal.signal(signal.SIGINT, _signal_handler)
        safe_print("\n[!] Scan interrupted by user", file=sys.stderr)
        aggregator.print_summary()
        return 130

    aggregator.print_summary()
    return 0


if __name__ == '__main__':
    sys.exit(main())
