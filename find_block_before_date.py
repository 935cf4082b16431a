"""
Find the latest block strictly before a given date/time.

Usage:
    python find_block_before_date.py <RPC_URL> <DATE>

Examples:
    python find_block_before_date.py http://localhost:8545 "2024-12-31T23:59:59Z"
    python find_block_before_date.py http://localhost:8545 1704067199
    python find_block_before_date.py http://localhost:8545 1704067199000
"""
import sys
import os
import json
import logging
import argparse

from chaintools.blocks import iso_timestamp
from chaintools.errors import ChainToolsError
from chaintools.locator import find_block_before_date
from chaintools.rpc import RpcClient, DEFAULT_TIMEOUT
from chaintools.timeparse import parse_target

NOT_FOUND = "No block exists strictly before the given date."

logger = logging.getLogger(__name__)


def build_parser():
    ap = argparse.ArgumentParser(
        description="Binary-search the chain for the latest block strictly before a date.",
        epilog="DATE can be ISO (e.g. 2024-12-31T23:59:59Z), unix seconds, or unix milliseconds.")
    ap.add_argument('rpc_url', help='JSON-RPC endpoint of the node')
    ap.add_argument('date', help='target date/time')
    ap.add_argument('--timeout', type=float,
                    default=os.environ.get('RPC_TIMEOUT', str(DEFAULT_TIMEOUT)),
                    help='seconds to wait for each RPC call (env RPC_TIMEOUT)')
    ap.add_argument('-v', '--verbose', action='store_true', help='log every RPC probe')
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        target = parse_target(args.date)
        logger.info("target is %d", target)
        result = find_block_before_date(RpcClient(args.rpc_url, timeout=args.timeout), target)
        if result is None:
            print(NOT_FOUND)
            return 0
        record = {
            "blockNumber": result.height,
            "blockHash": result.block_hash,
            "blockTimestamp": result.timestamp,
            "blockTimestampISO": iso_timestamp(result.timestamp),
        }
    except ChainToolsError as err:
        print("Error: %s" % err, file=sys.stderr)
        return 1

    print(json.dumps(record, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
