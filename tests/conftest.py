"""Pytest fixtures for monitoring-service tests.

Provides a fresh store and dispatcher for socket-free tests, and a
``running_server`` fixture that binds a TransactionServer to an ephemeral
localhost port, serves it from a background thread, and yields the server.
The client factory creates TransactionClient instances pointed at it.
"""

import threading

import pytest

from txmonitor import Dispatcher, Settings, TransactionClient, TransactionServer, TransactionStore

TEST_HOST = "127.0.0.1"
TEST_IO_TIMEOUT = 1.0
TEST_MAX_REQUEST_SIZE = 8 * 1024


@pytest.fixture
def store() -> TransactionStore:
    return TransactionStore()


@pytest.fixture
def dispatcher(store: TransactionStore) -> Dispatcher:
    return Dispatcher(store, service_name="monitoring-service")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        host=TEST_HOST,
        port=0,
        io_timeout=TEST_IO_TIMEOUT,
        max_request_size=TEST_MAX_REQUEST_SIZE,
    )


@pytest.fixture
def running_server(settings: Settings, store: TransactionStore):
    """Start a server on an ephemeral port. Teardown stops the accept loop."""
    server = TransactionServer(settings, store=store)
    server.bind()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    yield server

    server.shutdown()
    thread.join(timeout=5)


@pytest.fixture
def client_factory(running_server: TransactionServer):
    """Factory that returns a client bound to the running server."""
    host, port = running_server.address

    def _make_client(timeout: float = 5.0) -> TransactionClient:
        return TransactionClient(host=host, port=port, timeout=timeout)

    return _make_client
