#!/usr/bin/env python3
"""
Command-line decoder.

Usage:
    python -m module7_consensus <video_file> [--config FILE] [--parallel]
                                            [--keep-workspace] [--verbose]

Exit status:
    0  decoding completed (whether or not a message was found)
    1  input file missing or decoding failed
    2  invalid arguments
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from module1_common.config import load_config
from module1_common.errors import ConfigurationError
from module1_common.results import Channel
from .orchestrator import DecodeOrchestrator
from .reconciliation import Verdict
from .report import DecodeReport

RULE = "=" * 60

_LAYER_LABELS = {
    Channel.VISUAL: "Visual Layer:  ",
    Channel.AUDIO: "Audio Layer:   ",
    Channel.METADATA: "Metadata Layer:",
}

_VERDICT_LINES = {
    Verdict.VERIFIED: "[+] All layers match! Message verified.",
    Verdict.PARTIAL: "[i] Some layers don't match - this is often a false detection and can be ignored.",
}


def setup_logging(verbose: bool = False):
    """Configure logging for the command-line decoder."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def format_report(report: DecodeReport) -> str:
    """
    Render a human-readable results block.

    Args:
        report: Orchestrator output

    Returns:
        Multi-line summary
    """
    lines = ["", RULE, "[i] DECODING RESULTS", RULE]

    if report.found_message:
        lines.append("")
        lines.append("[+] Successfully decoded secret message from:")
        for channel in report.channels_with_data():
            lines.append(f"   [i] {_LAYER_LABELS[channel]} {report.message(channel)}")

        verdict_line = _VERDICT_LINES.get(report.verdict)
        if verdict_line:
            lines.append("")
            lines.append(verdict_line)
    else:
        lines.append("")
        lines.append("[-] No hidden message found in any layer")

    record = report.metadata_record
    if record.title or record.description:
        lines.append("")
        if record.title:
            lines.append(f"   [i] Container title:       {record.title}")
        if record.description:
            lines.append(f"   [i] Container description: {record.description}")

    lines.append(RULE)
    return "\n".join(lines)


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog='stegvid-decode',
        description='Recover a hidden message from the frames, audio and metadata of a video',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Basic usage
  stegvid-decode output_encoded1.mp4

  # Custom protocol constants, channels decoded concurrently
  stegvid-decode output_encoded1.mp4 --config decoder.yaml --parallel
        """
    )

    parser.add_argument(
        'video',
        type=str,
        help='Video file to decode'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='YAML configuration merged over the packaged defaults'
    )

    parser.add_argument(
        '--parallel',
        action='store_true',
        help='Decode the three channels concurrently'
    )

    parser.add_argument(
        '--keep-workspace',
        action='store_true',
        help='Keep extracted frames on disk after decoding'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command-line decoder."""
    args = parse_arguments(argv)
    setup_logging(verbose=args.verbose)

    if not os.path.isfile(args.video):
        print(f"\n[!] Error: File \"{args.video}\" not found!\n", file=sys.stderr)
        return 1

    overrides = {}
    if args.parallel:
        overrides['orchestration'] = {'parallel': True}
    if args.keep_workspace:
        overrides['media'] = {'keep_workspace': True}

    try:
        config = load_config(args.config, overrides=overrides)
    except ConfigurationError as e:
        print(f"\n[!] Invalid configuration: {e}\n", file=sys.stderr)
        return 1

    logging.info("Starting dual-layer decoding...")

    try:
        report = DecodeOrchestrator(config).decode(args.video)
    except KeyboardInterrupt:
        print("\n[!] Decoding interrupted\n", file=sys.stderr)
        return 1
    except Exception as e:
        logging.error(f"Error during decoding: {e}", exc_info=True)
        return 1

    print(format_report(report))
    print("\n[+] Decoding complete!\n")
    return 0


if __name__ == '__main__':
    sys.exit(main())
