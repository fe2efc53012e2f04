"""
Ledger Substrate

The workflow consumes only point reads, point writes and range scans.
`InMemoryLedger` provides those with invocation atomicity: each invocation
reads one snapshot and its writes commit together or not at all.
"""
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Protocol, Tuple
from uuid import uuid4

from claimledger.core.errors import ReadError, WriteError

logger = logging.getLogger(__name__)


class LedgerStub(Protocol):
    """What a handler may ask of the ledger during one invocation."""

    def get_state(self, key: str) -> Optional[bytes]:
        ...

    def put_state(self, key: str, value: bytes) -> None:
        ...

    def get_state_by_range(self, start: str, end: str) -> Iterator[Tuple[str, bytes]]:
        ...


@dataclass
class KeyModification:
    """One committed version of a key."""
    tx_id: str
    timestamp: datetime
    value: bytes


class Transaction:
    """
    A single invocation's view of the ledger.

    Reads see the snapshot taken when the transaction began, not the
    transaction's own pending writes.
    """

    def __init__(self, snapshot: Dict[str, bytes]):
        self.tx_id = uuid4().hex
        self.timestamp = datetime.now()
        self._snapshot = snapshot
        self._writes: Dict[str, bytes] = {}

    @property
    def writes(self) -> Dict[str, bytes]:
        return dict(self._writes)

    def get_state(self, key: str) -> Optional[bytes]:
        if not key:
            raise ReadError("Key must not be empty")
        return self._snapshot.get(key)

    def put_state(self, key: str, value: bytes) -> None:
        if not key:
            raise WriteError("Key must not be empty")
        if not isinstance(value, (bytes, bytearray)):
            raise WriteError(f"Value for key {key!r} must be bytes")
        self._writes[key] = bytes(value)

    def get_state_by_range(self, start: str, end: str) -> Iterator[Tuple[str, bytes]]:
        for key in sorted(self._snapshot):
            if start <= key < end:
                yield key, self._snapshot[key]


class InMemoryLedger:
    """
    World state held in memory, with per-key history.

    Invocations are serialised; `transaction()` holds the ledger lock for
    the whole read-modify-write sequence.
    """

    transaction_class = Transaction

    def __init__(self):
        self._state: Dict[str, bytes] = {}
        self._history: Dict[str, List[KeyModification]] = {}
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[Transaction]:
        """Yield a transaction; commit its writes only if the block completes."""
        with self._lock:
            tx = self.transaction_class(dict(self._state))
            yield tx
            self._commit(tx)

    def _commit(self, tx: Transaction) -> None:
        for key, value in tx.writes.items():
            self._state[key] = value
            self._history.setdefault(key, []).append(
                KeyModification(tx_id=tx.tx_id, timestamp=tx.timestamp, value=value)
            )
        if tx.writes:
            logger.debug(f"Committed {len(tx.writes)} write(s) in transaction {tx.tx_id}")

    def get_state(self, key: str) -> Optional[bytes]:
        """Read the committed value of a key outside any invocation."""
        with self._lock:
            return self._state.get(key)

    def get_history_for_key(self, key: str) -> List[KeyModification]:
        with self._lock:
            return list(self._history.get(key, []))

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._state)
