"""In-memory transaction store shared by every connection worker."""

import threading
from typing import Dict, List

from .codec import Transaction


class TransactionNotFound(LookupError):
    def __init__(self, transaction_id: str):
        super().__init__(f"Transaction not found: {transaction_id!r}")
        self.transaction_id = transaction_id


class TransactionStore:
    """Append-only sequence of transactions guarded by a single lock.

    Identifiers are not unique. ``find_by_id`` returns the first record
    inserted under an id; later records with the same id are kept but only
    reachable through ``all()``.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: List[Transaction] = []
        # id -> position of the first record with that id
        self._first_index: Dict[str, int] = {}

    def insert(self, tx: Transaction) -> None:
        stored = tx.model_copy(deep=True)
        with self._lock:
            self._first_index.setdefault(stored.transaction_id, len(self._records))
            self._records.append(stored)

    def find_by_id(self, transaction_id: str) -> Transaction:
        with self._lock:
            pos = self._first_index.get(transaction_id)
            if pos is None:
                raise TransactionNotFound(transaction_id)
            tx = self._records[pos]
        return tx.model_copy(deep=True)

    def all(self) -> List[Transaction]:
        with self._lock:
            snapshot = list(self._records)
        return [tx.model_copy(deep=True) for tx in snapshot]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
