class ChainToolsError(Exception):
    """Base class for everything the block tools raise on purpose."""


class InvalidInput(ChainToolsError, ValueError):
    """A date expression could not be turned into epoch seconds."""


class OracleError(ChainToolsError):
    """Fetching chain data failed (network, HTTP status, RPC error, bad payload)."""


class BlockNotFound(OracleError):
    """The node answered null for a block height."""
