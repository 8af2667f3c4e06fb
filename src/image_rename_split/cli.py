#!/usr/bin/env python3
"""
Main CLI entry point for image rename split.
"""
import argparse
import logging
import sys
from pathlib import Path

from image_rename_split.utils.log_utils import configure_logging, get_logger
from image_rename_split.utils.utils import expand_inputs

logger = get_logger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Split JPEG photos into numbered left/right halves tagged with 300 dpi."
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        help="JPEG files in export order, or directories whose JPEG files are taken in name order."
    )
    parser.add_argument(
        "-o", "--output",
        help="Destination folder; halves are written to <output>/SPL. Prompted for when omitted."
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical", "none"],
        default="none",
        help="Set logging level (default: none; 'none' disables logging)"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.log_level.lower() != "none":
        configure_logging(getattr(logging, args.log_level.upper()))

    paths = expand_inputs(args.inputs)
    logger.debug("Input order: %s", [p.name for p in paths])
    destination = Path(args.output).expanduser() if args.output else None

    from image_rename_split.ui.rich_ui import RichSplitUI
    return RichSplitUI.run(paths, destination)


if __name__ == "__main__":
    sys.exit(main())
