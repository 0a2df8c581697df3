"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_store import LedgerReaderPort, LedgerStorePort, LedgerWriterPort

__all__ = [
    "DatabaseEnginePort",
    "LedgerReaderPort",
    "LedgerStorePort",
    "LedgerWriterPort",
]
