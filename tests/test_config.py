"""Settings tests — defaults and MONITORING_SERVICE_* overrides."""

import pytest
from pydantic import ValidationError

from txmonitor import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for name in ("PORT", "HOST", "LOG_LEVEL", "MAX_REQUEST_SIZE", "IO_TIMEOUT", "SERVICE_NAME", "MAX_CONNECTIONS"):
        monkeypatch.delenv(f"MONITORING_SERVICE_{name}", raising=False)
    # keep a stray .env in the working tree out of the picture
    monkeypatch.chdir(tmp_path)


def test_defaults():
    s = Settings()
    assert s.port == 8082
    assert s.host == "localhost"
    assert s.service_name == "monitoring-service"
    assert s.max_request_size > 0
    assert s.io_timeout > 0
    assert s.max_connections > 0


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("MONITORING_SERVICE_PORT", "9100")
    assert Settings().port == 9100


def test_invalid_port_rejected(monkeypatch):
    monkeypatch.setenv("MONITORING_SERVICE_PORT", "not-a-port")
    with pytest.raises(ValidationError):
        Settings()


def test_env_file(tmp_path):
    (tmp_path / ".env").write_text("MONITORING_SERVICE_PORT=9200\nMONITORING_SERVICE_IO_TIMEOUT=2.5\n")
    s = Settings()
    assert s.port == 9200
    assert s.io_timeout == 2.5
