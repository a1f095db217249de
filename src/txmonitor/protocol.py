"""Low-level wire protocol: bounded request reads, request parsing, response framing."""

import json
import socket
import time
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Dict, Optional

HEADER_TERMINATORS = (b"\r\n\r\n", b"\n\n")
READ_CHUNK = 4096


class ProtocolError(Exception):
    """The bytes on the wire do not form a request line we can classify."""


class RequestTooLarge(ProtocolError):
    """The client sent more than the configured maximum request size."""

    def __init__(self, limit: int):
        super().__init__(f"Request exceeds {limit} bytes")
        self.limit = limit


@dataclass
class Request:
    method: str
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""


@dataclass
class Response:
    status: int
    body: bytes = b""
    content_type: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def reason(self) -> str:
        try:
            return HTTPStatus(self.status).phrase
        except ValueError:
            return ""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.body.decode("utf-8"))

    def to_bytes(self) -> bytes:
        lines = [f"HTTP/1.1 {self.status} {self.reason}"]
        if self.content_type:
            lines.append(f"Content-Type: {self.content_type}")
        lines.append(f"Content-Length: {len(self.body)}")
        lines.append("Connection: close")
        head = "\r\n".join(lines) + "\r\n\r\n"
        return head.encode("ascii") + self.body


def _split_head(data: bytes) -> tuple[bytes, Optional[bytes]]:
    """Split at the first blank line. Body is None while headers are incomplete."""
    found = [(data.find(sep), sep) for sep in HEADER_TERMINATORS]
    found = [(index, sep) for index, sep in found if index != -1]
    if not found:
        return data, None
    index, sep = min(found)
    return data[:index], data[index + len(sep):]


def _content_length(head: bytes) -> Optional[int]:
    for line in head.decode("latin-1").splitlines()[1:]:
        name, _, value = line.partition(":")
        if name.strip().lower() == "content-length":
            try:
                return max(int(value.strip()), 0)
            except ValueError:
                return None
    return None


def set_deadline(sock: socket.socket, deadline: float) -> None:
    """Limit the next blocking call to the time left before ``deadline``."""
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise socket.timeout("Deadline exceeded")
    sock.settimeout(remaining)


def read_request(sock: socket.socket, max_size: int, deadline: Optional[float] = None) -> bytes:
    """Read one request off the socket.

    Reads until the header block is complete, then until ``Content-Length``
    body bytes have arrived when the header is present. Without it the body is
    whatever arrived together with the headers. Raises ``RequestTooLarge``
    once more than ``max_size`` bytes are buffered and ``EOFError`` if the
    peer closes before sending anything.

    ``deadline`` is a ``time.monotonic()`` value bounding the whole read;
    ``socket.timeout`` is raised once it passes, however the bytes trickle in.
    """
    buf = bytearray()
    while True:
        if deadline is not None:
            set_deadline(sock, deadline)
        chunk = sock.recv(READ_CHUNK)
        if not chunk:
            if not buf:
                raise EOFError("Socket closed before a request was received")
            return bytes(buf)
        buf.extend(chunk)
        if len(buf) > max_size:
            raise RequestTooLarge(max_size)

        head, body = _split_head(bytes(buf))
        if body is None:
            continue
        expected = _content_length(head)
        if expected is None or len(body) >= expected:
            return bytes(buf)
        if len(head) + expected > max_size:
            raise RequestTooLarge(max_size)


def parse_request(data: bytes) -> Request:
    """Turn raw request bytes into a ``Request``."""
    head, body = _split_head(data)
    lines = head.decode("utf-8", errors="replace").splitlines()
    if not lines or not lines[0].strip():
        raise ProtocolError("Empty request line")

    parts = lines[0].split()
    if len(parts) < 2:
        raise ProtocolError(f"Malformed request line: {lines[0]!r}")
    method, path = parts[0], parts[1]

    headers: Dict[str, str] = {}
    for line in lines[1:]:
        name, sep, value = line.partition(":")
        if sep:
            headers[name.strip().lower()] = value.strip()

    return Request(method=method, path=path, headers=headers, body=body or b"")


def parse_response(data: bytes) -> Response:
    """Parse a response written by ``Response.to_bytes`` (client side)."""
    head, body = _split_head(data)
    lines = head.decode("latin-1").splitlines()
    if not lines:
        raise ProtocolError("Empty response")
    parts = lines[0].split(None, 2)
    if len(parts) < 2 or not parts[1].isdigit():
        raise ProtocolError(f"Malformed status line: {lines[0]!r}")

    headers: Dict[str, str] = {}
    for line in lines[1:]:
        name, sep, value = line.partition(":")
        if sep:
            headers[name.strip().lower()] = value.strip()

    return Response(
        status=int(parts[1]),
        body=body or b"",
        content_type=headers.get("content-type"),
        headers=headers,
    )


def read_all(sock: socket.socket) -> bytes:
    chunks = []
    while True:
        chunk = sock.recv(READ_CHUNK)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)
