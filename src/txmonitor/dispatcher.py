"""Route parsed requests to the store and build responses."""

import json
import logging

from . import codec
from .protocol import Request, Response
from .store import TransactionNotFound, TransactionStore

logger = logging.getLogger(__name__)

TRANSACTIONS_PATH = "/transactions"
TRANSACTION_PREFIX = TRANSACTIONS_PATH + "/"

INVALID_TRANSACTION = b"Invalid Transaction"
TRANSACTION_NOT_FOUND = b"Transaction Not Found"
NOT_FOUND = b"Not Found"

ENDPOINTS = [
    {
        "method": "POST",
        "path": TRANSACTIONS_PATH,
        "description": "Submit a transaction",
    },
    {
        "method": "GET",
        "path": TRANSACTIONS_PATH + "/{id}",
        "description": "Retrieve a transaction by id",
    },
]


def transaction_id_from_path(path: str) -> str:
    """``/transactions/T1/anything`` -> ``T1``."""
    return path[len(TRANSACTION_PREFIX):].split("/", 1)[0]


def _json_response(payload: dict) -> Response:
    return Response(200, json.dumps(payload).encode("utf-8"), content_type="application/json")


class Dispatcher:
    def __init__(self, store: TransactionStore, service_name: str = "monitoring-service"):
        self.store = store
        self.service_name = service_name

    def dispatch(self, request: Request) -> Response:
        method, path = request.method, request.path
        if method == "GET" and path == "/":
            return self._handle_index()
        if method == "POST" and path == TRANSACTIONS_PATH:
            return self._handle_create(request)
        if method == "GET" and path.startswith(TRANSACTION_PREFIX):
            return self._handle_read(transaction_id_from_path(path))
        if method == "GET" and path == "/health":
            return self._handle_health()
        logger.debug("No route for %s %s", method, path)
        return Response(404, NOT_FOUND)

    def _handle_index(self) -> Response:
        return _json_response({
            "service": self.service_name,
            "status": "running",
            "endpoints": ENDPOINTS,
        })

    def _handle_health(self) -> Response:
        return _json_response({
            "status": "healthy",
            "service": self.service_name,
            "transactions": len(self.store),
        })

    def _handle_create(self, request: Request) -> Response:
        try:
            tx = codec.decode(request.body)
        except codec.DecodeError as exc:
            logger.info("Rejected transaction body: %s", exc)
            return Response(500, INVALID_TRANSACTION)
        self.store.insert(tx)
        logger.info("Stored transaction %s for user %d", tx.transaction_id, tx.user_id)
        return Response(200, codec.encode(tx))

    def _handle_read(self, transaction_id: str) -> Response:
        try:
            tx = self.store.find_by_id(transaction_id)
        except TransactionNotFound:
            return Response(404, TRANSACTION_NOT_FOUND)
        return Response(200, codec.encode(tx))
