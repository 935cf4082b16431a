import json
import logging

import requests

from chaintools.blocks import chain_point_from_rpc, hex_to_int
from chaintools.errors import BlockNotFound, OracleError

BLOCK_NUMBER = 'eth_blockNumber'
GET_BLOCK = 'eth_getBlockByNumber'
URL = "{}:{}".format("http://localhost", 8545)
DEFAULT_TIMEOUT = 30

logger = logging.getLogger(__name__)


class RpcClient:
    """JSON-RPC client for an ethereum node. Each instance numbers its own requests."""

    def __init__(self, url=URL, session=None, timeout=DEFAULT_TIMEOUT):
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout
        self._next_id = 1

    def request(self, method, params=None):
        """Make an RPC request and return its `result` member."""
        payload = {
            "method": method,
            "params": params or [],
            "jsonrpc": "2.0",
            "id": self._next_id
        }
        self._next_id += 1
        logger.debug("rpc #%d %s %s", payload["id"], method, payload["params"])

        try:
            res = self.session.post(
                  self.url,
                  data=json.dumps(payload),
                  headers={"content-type": "application/json"},
                  timeout=self.timeout)
        except requests.RequestException as err:
            raise OracleError("RPC request to %s failed: %s" % (self.url, err))

        if not res.ok:
            raise OracleError("RPC HTTP %d: %s" % (res.status_code, res.text[:200]))

        try:
            body = res.json()
        except ValueError:
            raise OracleError("RPC response is not JSON: %s" % res.text[:200])

        if not isinstance(body, dict):
            raise OracleError("Unexpected RPC response: %r" % (body,))
        if body.get('error') is not None:
            raise OracleError("RPC error: %s" % json.dumps(body['error']))
        if 'result' not in body:
            raise OracleError("RPC response has no result: %r" % (body,))

        return body['result']

    def latest_height(self):
        """Get the latest block number."""
        return hex_to_int(self.request(BLOCK_NUMBER), "eth_blockNumber")

    def block_at(self, height):
        """Get the header fields of the block at `height` (no transactions)."""
        block = self.request(GET_BLOCK, [hex(height), False])
        if block is None:
            raise BlockNotFound("Block %s not found" % hex(height))
        point = chain_point_from_rpc(block)
        if point.height != height:
            raise OracleError("Asked for block %d, node returned %d" % (height, point.height))
        return point
