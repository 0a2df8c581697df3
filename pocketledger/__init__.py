"""Personal ledger keeping account balances consistent with movements."""

__version__ = "0.1.0"
