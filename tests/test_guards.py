import pytest

from modindex.guards import ADMIN_KEY_HEADER, admin_key_guard


@pytest.fixture
def admin_key(monkeypatch):
    monkeypatch.setenv("LABRINTH_ADMIN_KEY", "placeholder")
    return "placeholder"


def test_matching_key_is_admitted(admin_key):
    assert admin_key_guard({ADMIN_KEY_HEADER: admin_key}) is True


def test_header_name_is_case_insensitive(admin_key):
    assert admin_key_guard({ADMIN_KEY_HEADER.lower(): admin_key}) is True


def test_bytes_header_value(admin_key):
    assert admin_key_guard({ADMIN_KEY_HEADER: admin_key.encode()}) is True


def test_wrong_key_is_refused(admin_key):
    assert admin_key_guard({ADMIN_KEY_HEADER: admin_key + "x"}) is False


def test_missing_header_is_refused(admin_key):
    assert admin_key_guard({"Authorization": admin_key}) is False


def test_missing_configuration_raises(monkeypatch):
    monkeypatch.delenv("LABRINTH_ADMIN_KEY", raising=False)
    with pytest.raises(RuntimeError):
        admin_key_guard({ADMIN_KEY_HEADER: "placeholder"})