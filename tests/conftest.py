import pytest

from chaintools.blocks import ChainPoint
from chaintools.errors import BlockNotFound, OracleError


class FakeChain:
    """In-memory oracle over a list of timestamps; records every probe."""

    def __init__(self, timestamps, fail_on_call=None):
        self.timestamps = list(timestamps)
        self.fail_on_call = fail_on_call
        self.probes = []

    def latest_height(self):
        return len(self.timestamps) - 1

    def block_at(self, height):
        self.probes.append(height)
        if self.fail_on_call is not None and len(self.probes) == self.fail_on_call:
            raise OracleError("connection reset")
        if not 0 <= height < len(self.timestamps):
            raise BlockNotFound("Block %s not found" % hex(height))
        return ChainPoint(height, self.timestamps[height], "0x%064x" % height)


class FakeResponse:
    def __init__(self, body=None, status_code=200, text=None):
        self._body = body
        self.status_code = status_code
        self.text = text if text is not None else repr(body)

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class FakeSession:
    """Stands in for requests.Session; replies are popped in order."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def duplicate_chain():
    return FakeChain([100, 200, 200, 300, 400, 500])
