# Ledger module - composite keys, substrate and entity store
from .keys import build_key, parse_key, scan
from .store import EntityStore
from .stub import InMemoryLedger, LedgerStub, Transaction

__all__ = ["build_key", "parse_key", "scan", "EntityStore", "InMemoryLedger", "LedgerStub", "Transaction"]
