import pytest
from pydantic import ValidationError

from ordermgt.app.core.config import Settings


def test_defaults():
    s = Settings()
    assert s.base_path == "/ordermgt"
    assert s.not_found_status == 200
    assert s.public_base_url is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ORDERMGT_PORT", "8181")
    monkeypatch.setenv("ORDERMGT_NOT_FOUND_STATUS", "404")
    s = Settings()
    assert s.port == 8181
    assert s.not_found_status == 404


def test_base_path_is_normalized():
    assert Settings(base_path="api/orders/").base_path == "/api/orders"


def test_not_found_status_validated():
    with pytest.raises(ValidationError):
        Settings(not_found_status=500)
