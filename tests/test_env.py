from modindex.env import parse_strings_from_var, parse_var


def test_parse_var_converts_value(monkeypatch):
    monkeypatch.setenv("MODINDEX_TEST_NUMBER", "42")
    assert parse_var("MODINDEX_TEST_NUMBER", int) == 42


def test_parse_var_missing_is_none(monkeypatch):
    monkeypatch.delenv("MODINDEX_TEST_MISSING", raising=False)
    assert parse_var("MODINDEX_TEST_MISSING", int) is None


def test_parse_var_unparsable_is_none(monkeypatch):
    monkeypatch.setenv("MODINDEX_TEST_NUMBER", "forty")
    assert parse_var("MODINDEX_TEST_NUMBER", int) is None


def test_parse_var_float(monkeypatch):
    monkeypatch.setenv("MODINDEX_TEST_FLOAT", "2.5")
    assert parse_var("MODINDEX_TEST_FLOAT", float) == 2.5


def test_parse_strings_from_var(monkeypatch):
    monkeypatch.setenv("MODINDEX_TEST_LIST", '["a", "b"]')
    assert parse_strings_from_var("MODINDEX_TEST_LIST") == ["a", "b"]


def test_parse_strings_rejects_non_strings(monkeypatch):
    monkeypatch.setenv("MODINDEX_TEST_LIST", "[1, 2]")
    assert parse_strings_from_var("MODINDEX_TEST_LIST") is None


def test_parse_strings_rejects_bad_json(monkeypatch):
    monkeypatch.setenv("MODINDEX_TEST_LIST", "[a, b")
    assert parse_strings_from_var("MODINDEX_TEST_LIST") is None


def test_parse_strings_rejects_object(monkeypatch):
    monkeypatch.setenv("MODINDEX_TEST_LIST", '{"a": "b"}')
    assert parse_strings_from_var("MODINDEX_TEST_LIST") is None


def test_parse_strings_missing(monkeypatch):
    monkeypatch.delenv("MODINDEX_TEST_LIST", raising=False)
    assert parse_strings_from_var("MODINDEX_TEST_LIST") is None