"""
Chain positions as seen by the block search, and the strict decode from
raw `eth_getBlockByNumber` payloads into them.
"""
from collections import namedtuple
from datetime import datetime, timedelta, timezone

from chaintools.errors import OracleError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

ChainPoint = namedtuple("ChainPoint", ["height", "timestamp", "block_hash"])


def hex_to_int(value, field="value"):
    """
    Decode a 0x-prefixed quantity from the node.

    Params:
    -------
    value <str>
    field <str> name used in the error message

    Returns:
    --------
    <int>
    """
    if not isinstance(value, str) or not value[:2].lower() == "0x" or len(value) < 3:
        raise OracleError("Malformed hex quantity for %s: %r" % (field, value))
    try:
        return int(value, 16)
    except ValueError:
        raise OracleError("Malformed hex quantity for %s: %r" % (field, value))


def chain_point_from_rpc(raw):
    """
    Turn a block object returned by the node into a ChainPoint.

    Only `number`, `timestamp` and `hash` are read; everything else in the
    payload is ignored.

    Params:
    -------
    raw <dict>

    Returns:
    --------
    <ChainPoint>
    """
    if not isinstance(raw, dict):
        raise OracleError("Expected a block object, got %r" % (raw,))
    for key in ("number", "timestamp", "hash"):
        if key not in raw or raw[key] is None:
            raise OracleError("Block object is missing '%s': %r" % (key, raw))

    block_hash = raw["hash"]
    if not isinstance(block_hash, str):
        raise OracleError("Block hash is not a string: %r" % (block_hash,))

    return ChainPoint(
        height=hex_to_int(raw["number"], "number"),
        timestamp=hex_to_int(raw["timestamp"], "timestamp"),
        block_hash=block_hash,
    )


def iso_timestamp(seconds):
    """Render epoch seconds as UTC ISO 8601 with millisecond precision."""
    try:
        moment = EPOCH + timedelta(seconds=seconds)
    except OverflowError:
        raise OracleError("Block timestamp %d is outside the representable date range" % seconds)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + "%03dZ" % (moment.microsecond // 1000)
