"""
Receipt Points CLI

This script provides a command-line interface for scoring receipts offline.
It reads a receipt JSON file in the same shape the HTTP API accepts, computes
the loyalty points it earns, and prints the result or an error message.
"""

import argparse
import logging
import sys
from pathlib import Path

from receipt_processor.operations import InvalidReceiptPayload, parse_receipt
from receipt_processor.points import compute_points, points_breakdown


def main(argv=None):
    """
    Main function to parse arguments, score the receipt, and display results.

    This function:
    1. Parses the `receipt_path` argument and the `--explain` flag.
    2. Validates that the provided receipt file exists.
    3. Decodes the file into a receipt.
    4. Prints the total points, preceded by each rule's contribution when
       `--explain` is given.
    5. Exits with status 0 on success or 1 on error.
    """
    parser = argparse.ArgumentParser(
        prog="Receipt Points",
        description="A tool to compute the loyalty points a receipt earns",
    )
    parser.add_argument("receipt_path", help="Path to the receipt JSON file")
    parser.add_argument(
        "--explain", action="store_true", help="Show the points of every rule"
    )
    args = parser.parse_args(argv)
    receipt_filepath = Path(args.receipt_path)

    # Configure logging
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
    )

    # Check if the file exists
    if not receipt_filepath.exists():
        logging.error(f"Error: Receipt file not found at '{receipt_filepath}'")
        sys.exit(1)

    try:
        receipt = parse_receipt(receipt_filepath.read_bytes())
    except InvalidReceiptPayload as ex:
        logging.error(f"Error: '{receipt_filepath}' is not a valid receipt: {ex}")
        sys.exit(1)

    if args.explain:
        for rule, points in points_breakdown(receipt).items():
            print(f"{rule:<24}{points:>6}")
    print(compute_points(receipt))
    sys.exit(0)


if __name__ == "__main__":
    main()
