#!/usr/bin/env python3
"""Monitoring service: TCP listener with one worker thread per connection."""

import logging
import socket
import threading
import time
from typing import Optional

from .config import Settings
from .dispatcher import NOT_FOUND, Dispatcher
from .protocol import (
    ProtocolError,
    RequestTooLarge,
    Response,
    parse_request,
    read_request,
    set_deadline,
)
from .store import TransactionStore

logger = logging.getLogger(__name__)

ACCEPT_POLL_INTERVAL = 0.5
LISTEN_BACKLOG = 128


class TransactionServer:
    def __init__(self, settings: Optional[Settings] = None, store: Optional[TransactionStore] = None):
        self.settings = settings or Settings()
        self.store = store if store is not None else TransactionStore()
        self.dispatcher = Dispatcher(self.store, service_name=self.settings.service_name)
        self._sock: Optional[socket.socket] = None
        self._stopped = threading.Event()
        self._workers = threading.BoundedSemaphore(self.settings.max_connections)

    @property
    def address(self) -> tuple[str, int]:
        if not self._sock:
            raise RuntimeError("Server is not bound")
        return self._sock.getsockname()[:2]

    def bind(self) -> tuple[str, int]:
        server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            server.bind((self.settings.host, self.settings.port))
            server.listen(LISTEN_BACKLOG)
        except OSError:
            server.close()
            raise
        # accept() wakes up periodically so shutdown() is noticed
        server.settimeout(ACCEPT_POLL_INTERVAL)
        self._sock = server
        return self.address

    def handle_request(self, data: bytes) -> Response:
        try:
            request = parse_request(data)
        except ProtocolError as exc:
            logger.info("Unroutable request: %s", exc)
            return Response(404, NOT_FOUND)
        try:
            response = self.dispatcher.dispatch(request)
        except Exception:
            logger.exception("Handler failed for %s %s", request.method, request.path)
            return Response(500, b"Internal Server Error")
        logger.debug("%s %s -> %d", request.method, request.path, response.status)
        return response

    def handle_client(self, sock: socket.socket, peer: Optional[tuple] = None) -> None:
        # one deadline covers the whole exchange, read and write
        deadline = time.monotonic() + self.settings.io_timeout
        try:
            try:
                data = read_request(sock, self.settings.max_request_size, deadline)
            except RequestTooLarge as exc:
                logger.warning("Rejected request from %s: %s", peer, exc)
                response = Response(413, b"Request Too Large")
            except (EOFError, OSError) as exc:
                logger.warning("Failed to read from connection %s: %s", peer, exc)
                return
            else:
                response = self.handle_request(data)

            try:
                set_deadline(sock, deadline)
                sock.sendall(response.to_bytes())
            except OSError as exc:
                logger.warning("Failed to write response to %s: %s", peer, exc)
        finally:
            sock.close()

    def serve_forever(self) -> None:
        if not self._sock:
            self.bind()
        server = self._sock
        self._stopped.clear()
        try:
            while not self._stopped.is_set():
                # at most max_connections workers; further clients wait in the backlog
                if not self._workers.acquire(timeout=ACCEPT_POLL_INTERVAL):
                    continue
                try:
                    sock, peer = server.accept()
                except socket.timeout:
                    self._workers.release()
                    continue
                except OSError as exc:
                    self._workers.release()
                    if self._stopped.is_set():
                        break
                    logger.warning("Connection failed: %s", exc)
                    continue
                t = threading.Thread(target=self._run_worker, args=(sock, peer))
                t.daemon = True
                t.start()
        finally:
            server.close()
            self._sock = None

    def _run_worker(self, sock: socket.socket, peer: Optional[tuple]) -> None:
        try:
            self.handle_client(sock, peer)
        finally:
            self._workers.release()

    def shutdown(self) -> None:
        self._stopped.set()


def main() -> None:
    settings = Settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    server = TransactionServer(settings)
    host, port = server.bind()
    logger.info("%s listening on %s:%d", settings.service_name, host, port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("%s shutting down", settings.service_name)
        server.shutdown()


if __name__ == "__main__":
    main()
