"""Blocking client for the monitoring service: one connection per request."""

import json
import socket
from typing import Any, Dict, Optional, Union

from .codec import Transaction
from .config import DEFAULT_PORT
from .protocol import Response, parse_response, read_all


class TransactionClient:
    def __init__(self, host: str = "127.0.0.1", port: int = DEFAULT_PORT, timeout: Optional[float] = 5.0):
        self.host = host
        self.port = port
        self.timeout = timeout

    def send_raw(self, data: bytes) -> Response:
        """Send raw request bytes and parse whatever the server writes back."""
        with socket.create_connection((self.host, self.port), timeout=self.timeout) as sock:
            sock.sendall(data)
            sock.shutdown(socket.SHUT_WR)
            return parse_response(read_all(sock))

    def request(self, method: str, path: str, body: bytes = b"") -> Response:
        head = f"{method} {path} HTTP/1.1\r\nHost: {self.host}:{self.port}\r\n"
        if body:
            head += f"Content-Type: application/json\r\nContent-Length: {len(body)}\r\n"
        return self.send_raw(head.encode("utf-8") + b"\r\n" + body)

    # ── Endpoints ───────────────────────────────────────────────────

    def index(self) -> Response:
        return self.request("GET", "/")

    def health(self) -> Response:
        return self.request("GET", "/health")

    def create_transaction(self, tx: Union[Transaction, Dict[str, Any]]) -> Response:
        if isinstance(tx, Transaction):
            body = tx.model_dump_json().encode("utf-8")
        else:
            body = json.dumps(tx).encode("utf-8")
        return self.request("POST", "/transactions", body)

    def get_transaction(self, transaction_id: str) -> Response:
        return self.request("GET", f"/transactions/{transaction_id}")
