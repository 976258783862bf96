#!/usr/bin/env python3
"""
IPAM DNS Sync - Command Line Interface

Main entry point for the IPAM DNS Sync CLI.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict

from ..core.exceptions import ConfigurationError, DNSSyncError
from ..core.sync_manager import SyncManager
from ..parsers.webhook import WebhookParser
from ..utils.config import DEFAULT_CONFIG_PATH, load_config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="IPAM DNS Sync - Reflect IPAM address changes into DNS records"
    )

    parser.add_argument(
        "--config",
        "-c",
        default=DEFAULT_CONFIG_PATH,
        help=f"Configuration file path (default: {DEFAULT_CONFIG_PATH})",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("serve", help="Listen for IPAM webhooks")

    plan_parser = subparsers.add_parser(
        "plan", help="Show the DNS changes a webhook payload would cause"
    )
    plan_parser.add_argument("payload", help="JSON file containing a webhook payload")
    plan_parser.add_argument(
        "--output-file",
        "-o",
        help="File to save the dry run summary to",
    )

    apply_parser = subparsers.add_parser(
        "apply", help="Apply the DNS changes for a webhook payload"
    )
    apply_parser.add_argument("payload", help="JSON file containing a webhook payload")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    payload_path = getattr(args, "payload", None)
    if payload_path and not Path(payload_path).exists():
        print(f"Error: Payload file '{payload_path}' not found")
        sys.exit(1)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    config_logger(config.logging, verbose=args.verbose)

    try:
        if args.command == "serve":
            from ..server.webhook_server import run_server

            run_server(config)
            sys.exit(0)

        manager = SyncManager(config)
        event = WebhookParser(Path(payload_path).read_bytes()).parse()

        if args.command == "plan":
            plan = manager.process_event(event, dry_run=True)
            manager.display_plan(plan, event)
            if args.output_file:
                manager.save_plan_output(plan, args.output_file)
                print(f"Dry run output saved to: {args.output_file}")
            sys.exit(0)

        plan = manager.process_event(event)
        print(f"Applied {len(plan)} DNS changes")
        sys.exit(0)

    except DNSSyncError as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


def config_logger(logging_config: Dict, verbose: bool = False):
    """Configure logging."""
    log_level = "DEBUG" if verbose else str(logging_config.get("level", "INFO")).upper()
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handlers = [logging.StreamHandler(sys.stdout)]
    log_file = logging_config.get("file")
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=log_level, format=log_format, handlers=handlers)


if __name__ == "__main__":
    main()
