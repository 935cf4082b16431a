"""
Binary search for the latest block strictly before a target time.

The search only needs two callables, so it runs the same against a live
node, a database of blocks or a list in a test:

    latest_height()  -> int
    block_at(height) -> ChainPoint

Block timestamps are assumed non-decreasing in height. Every call is a
round trip, so the search costs O(log latest_height) of them. Failures
from either callable are not caught here.
"""
import logging

logger = logging.getLogger(__name__)


def locate(latest_height, block_at, target):
    """
    Find the highest block whose timestamp is strictly less than `target`.

    Params:
    -------
    latest_height <callable> returns the chain head height
    block_at <callable> returns the ChainPoint at a height
    target <int> epoch seconds

    Returns:
    --------
    <ChainPoint or None>
    """
    head = latest_height()
    latest = block_at(head)
    logger.debug("head is block %d at %d, target %d", head, latest.timestamp, target)

    # nothing is before the epoch; block 0 is never consulted for this
    if target <= 0:
        return None
    if target > latest.timestamp:
        return latest

    lower_bound = 0
    upper_bound = head
    candidate = None

    while lower_bound <= upper_bound:
        mid = (lower_bound + upper_bound) // 2
        point = block_at(mid)
        logger.debug("probe %d: ts=%d range=[%d, %d]", mid, point.timestamp, lower_bound, upper_bound)

        if point.timestamp < target:
            candidate = point
            lower_bound = mid + 1
        else:
            upper_bound = mid - 1

    return candidate


def find_block_before_date(client, target):
    """Run `locate` against an RpcClient."""
    return locate(client.latest_height, client.block_at, target)
