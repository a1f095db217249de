"""In-memory transaction monitoring service over a plain-text request protocol."""

from .client import TransactionClient
from .codec import DecodeError, Transaction, decode, encode
from .config import Settings
from .dispatcher import Dispatcher
from .protocol import ProtocolError, Request, RequestTooLarge, Response, parse_request
from .server import TransactionServer, main
from .store import TransactionNotFound, TransactionStore

__all__ = [
    "DecodeError",
    "Dispatcher",
    "ProtocolError",
    "Request",
    "RequestTooLarge",
    "Response",
    "Settings",
    "Transaction",
    "TransactionClient",
    "TransactionNotFound",
    "TransactionServer",
    "TransactionStore",
    "decode",
    "encode",
    "main",
    "parse_request",
]
