"""
CLI module for response_values.

Runs one extraction cycle against a saved response body and prints the
resolved values.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from .config import load_config
from .http import Request, Response
from .provider import ResponseValueProvider

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )


def read_payload(response_path: str) -> str:
    """Read a response body from a file, or from stdin when the path is '-'."""
    if response_path == '-':
        return sys.stdin.read()
    with open(response_path, 'r', encoding='utf-8') as f:
        return f.read()


def run_extract(
    config_path: str,
    response_path: str,
    keys: Optional[List[str]] = None,
    verbose: bool = False
) -> int:
    """
    Extract values from a saved response and print them as JSON.

    Args:
        config_path: Path to configuration file
        response_path: Path to the response body, '-' for stdin
        keys: Keys to look up, defaults to every configured response variable
        verbose: Enable verbose logging

    Returns:
        Process exit code
    """
    setup_logging(verbose)

    try:
        config = load_config(config_path)
        payload = read_payload(response_path)
    except (OSError, ValueError, ValidationError) as e:
        logger.error(f"Extraction failed: {e}")
        return 1

    provider = ResponseValueProvider()
    provider.apply_config(config)
    provider.extract_values(Request(url=response_path), Response(payload=payload))

    resolved = {key: provider.lookup_value(key) for key in (keys or config.response_variable_names)}
    print(json.dumps(resolved, indent=2, ensure_ascii=False))
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Resolve payload template values from a JSON HTTP response",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  response-values extract config.json response.json
  response-values extract config.json response.json --key name --key HOME
  curl -s https://example.com/api | response-values extract config.json -
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Extract command
    extract_parser = subparsers.add_parser('extract', help='Extract values from a response')
    extract_parser.add_argument('config_file', help='Path to JSON configuration file')
    extract_parser.add_argument('response_file', help='Path to the response body, - for stdin')
    extract_parser.add_argument('--key', '-k', action='append', dest='keys',
                                help='Key to look up, may be repeated')
    extract_parser.add_argument('--verbose', '-v', action='store_true',
                                help='Enable verbose logging')

    args = parser.parse_args(argv)

    if args.command == 'extract':
        sys.exit(run_extract(
            config_path=args.config_file,
            response_path=args.response_file,
            keys=args.keys,
            verbose=args.verbose
        ))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == '__main__':
    main()
