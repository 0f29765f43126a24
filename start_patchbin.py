#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
patchbin - Startup Script

Command line front end: parses the flags, builds a PatchRequest and hands it
to the patch engine. Examples:

    # write 0x0201 at offset 0x100
    patchbin -i build.bin -o build_2.1.bin -a 0x100 -B 0x0201

    # write "TREVOR" right after the text USERNAME:
    patchbin -i build.bin -o build_named.bin -t USERNAME: -T TREVOR

    # overwrite the marker itself
    patchbin -i build.bin -o build_named.bin -t USERNAME: -T "TREVOR   " -z

    # write text after the binary marker 55AA55AA55
    patchbin -i build.bin -o build_.bin -b 0x55AA55AA55 -T "TREVOR    "
"""

import argparse
import logging
import sys
from typing import List, Optional

from patchbin.app.api import describe_result, exit_code_for, run_patch
from patchbin.config.io import load_config
from patchbin.exceptions import BaseError, InvalidRequest
from patchbin.logging_config import setup_logging
from patchbin.patching.encoder import ByteEncoder, HexPolicy
from patchbin.patching.models import PatchRequest
from patchbin.patching.preview import render_region
from patchbin.utils.result import Err, Ok
from patchbin.version import load_version

logger = logging.getLogger("patchbin.cli")

PREVIEW_CONTEXT = 4


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parses command line arguments."""
    parser = argparse.ArgumentParser(
        prog="patchbin",
        description="Binary patch utility - overwrite bytes in a copy of a binary file",
    )
    parser.add_argument("-i", dest="input", metavar="INPUT", help="input file")
    parser.add_argument("-o", dest="output", metavar="OUTPUT", help="output file")

    search = parser.add_argument_group("search (only one of -a, -t, -b)")
    search.add_argument("-a", dest="address", metavar="HEX",
                        help="address to start patch in HEX 0x0 to 0xFFFFFFFF")
    search.add_argument("-t", dest="text_marker", metavar="TEXT",
                        help="text pattern to find after which to patch, max 48 characters")
    search.add_argument("-b", dest="binary_marker", metavar="HEX",
                        help="binary (hex ASCII) pattern to find after which to patch, max 8 bytes")
    search.add_argument("-z", dest="at_start", action="store_true",
                        help="patch at the start of a found pattern instead of after it")

    value = parser.add_argument_group("patch value (only one of -B, -T)")
    value.add_argument("-B", dest="binary_value", metavar="HEX",
                       help="patch value in binary (hex ASCII), maximum 8 bytes eg: -B0x1234")
    value.add_argument("-T", dest="text_value", metavar="TEXT",
                       help="patch value in text, eg -TVERSION1.0, max 48 characters")

    parser.add_argument("--config", metavar="PATH", help="JSON or YAML config file")
    parser.add_argument("--show", action="store_true", help="Print the patched region before and after")
    parser.add_argument("--log-file", metavar="PATH", help="Also write log messages to this file")
    parser.add_argument("--json-logs", action="store_true", help="Emit log messages as JSON")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    parser.add_argument("--version", action="store_true", help="Show version information")

    return parser.parse_args(argv)


def build_request(args: argparse.Namespace, encoder: ByteEncoder) -> PatchRequest:
    """Check the flag combination and build the request the engine consumes."""
    if not args.input:
        raise InvalidRequest("Please specify the input filename with -i", field_name="input_path")
    if not args.output:
        raise InvalidRequest("Please specify the output filename with -o", field_name="output_path")

    patch_count = sum(v is not None for v in (args.binary_value, args.text_value))
    if patch_count == 0:
        raise InvalidRequest("Please specify one patch pattern with -B or -T", field_name="replacement")
    if patch_count > 1:
        raise InvalidRequest("Too many patch pattern specifiers, choose only one of -B or -T",
                             field_name="replacement")

    search_count = sum(v is not None for v in (args.address, args.text_marker, args.binary_marker))
    if search_count == 0:
        raise InvalidRequest("Please specify one search pattern with -a, -t or -b", field_name="search")
    if search_count > 1:
        raise InvalidRequest("Too many search pattern specifiers, choose only one of -a, -t or -b",
                             field_name="search")

    fixed_address = encoder.parse_int(args.address) if args.address is not None else None

    return PatchRequest(
        input_path=args.input,
        output_path=args.output,
        fixed_address=fixed_address,
        text_marker=args.text_marker,
        binary_marker=args.binary_marker,
        binary_value=args.binary_value,
        text_value=args.text_value,
        anchor_at_match_start=args.at_start,
    )


def show_region(report) -> None:
    length = len(report.payload)
    print("before:")
    for row in render_region(report.input_path, report.offset, length, PREVIEW_CONTEXT):
        print(f"    {row}")
    print("after:")
    for row in render_region(report.output_path, report.offset, length, PREVIEW_CONTEXT):
        print(f"    {row}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main function of the command line tool."""
    args = parse_arguments(argv)

    if args.version:
        print(f"Binary patch utility v{load_version()}")
        return 0

    try:
        config = load_config(args.config)
    except BaseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return exit_code_for(Err(e))

    setup_logging(
        log_level="DEBUG" if args.debug else config.logging.level,
        log_file=args.log_file or config.logging.log_file,
        structured_json=True if args.json_logs else config.logging.structured_json,
        max_log_size=config.logging.max_log_size,
        backup_count=config.logging.backup_count,
    )
    logger.debug("Debug mode enabled" if args.debug else "Configuration loaded")

    try:
        request = build_request(args, ByteEncoder(HexPolicy(config.encoding.hex_policy)))
    except BaseError as e:
        logger.error("%s", e, extra={"error": e.to_dict()})
        print(f"Error: {e}", file=sys.stderr)
        return exit_code_for(Err(e))

    result = run_patch(request, config)

    if isinstance(result, Ok):
        print(describe_result(result))
        if args.show:
            try:
                show_region(result.value)
            except BaseError as e:
                logger.warning("Cannot show patched region: %s", e)
    else:
        print(f"Error: {describe_result(result)}", file=sys.stderr)

    return exit_code_for(result)


if __name__ == "__main__":
    raise SystemExit(main())
