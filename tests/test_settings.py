from pathlib import Path

from spellcast.settings import Settings, EDITABLE_FIELDS, update_settings, get_editable_settings


def _fresh_settings() -> Settings:
    """Create a fresh Settings instance for testing."""
    return Settings()


def test_editable_fields_exist_on_settings():
    """All editable fields must be actual attributes on Settings."""
    cfg = _fresh_settings()
    for field_name in EDITABLE_FIELDS:
        assert hasattr(cfg, field_name), f"{field_name} not found on Settings"


def test_defaults():
    cfg = _fresh_settings()
    assert cfg.MIN_WORD_LENGTH == 3
    assert cfg.MAX_WORD_LENGTH == 20
    assert cfg.SEARCH_TIMEOUT_SECONDS == 3.0
    assert cfg.PRUNE_RATIO == 0.7
    assert cfg.DICTIONARY_PATH.name == "words.txt"
    assert cfg.DICTIONARY_PATH.exists()


def test_env_override(monkeypatch):
    monkeypatch.setenv("MAX_RESULTS", "12")
    monkeypatch.setenv("PRUNE_RATIO", "0.5")
    monkeypatch.setenv("DEBUG", "yes")
    monkeypatch.setenv("DICTIONARY_PATH", "/tmp/words.txt")
    cfg = _fresh_settings()
    assert cfg.MAX_RESULTS == 12
    assert cfg.PRUNE_RATIO == 0.5
    assert cfg.DEBUG is True
    assert cfg.DICTIONARY_PATH == Path("/tmp/words.txt")


def test_get_editable_settings():
    cfg = _fresh_settings()
    result = get_editable_settings(cfg)
    assert set(result.keys()) == set(EDITABLE_FIELDS.keys())
    assert result["MAX_RESULTS"] == cfg.MAX_RESULTS
    assert result["PRUNE_RATIO"] == cfg.PRUNE_RATIO


def test_update_int_field():
    cfg = _fresh_settings()
    errors = update_settings(cfg, MAX_RESULTS=7)
    assert errors == {}
    assert cfg.MAX_RESULTS == 7


def test_update_bool_from_string():
    cfg = _fresh_settings()
    errors = update_settings(cfg, DEBUG="true")
    assert errors == {}
    assert cfg.DEBUG is True

    errors = update_settings(cfg, DEBUG="false")
    assert errors == {}
    assert cfg.DEBUG is False


def test_update_float_field():
    cfg = _fresh_settings()
    errors = update_settings(cfg, SEARCH_TIMEOUT_SECONDS=1.5)
    assert errors == {}
    assert cfg.SEARCH_TIMEOUT_SECONDS == 1.5


def test_update_invalid_value():
    cfg = _fresh_settings()
    errors = update_settings(cfg, MAX_RESULTS="lots")
    assert "MAX_RESULTS" in errors
    assert cfg.MAX_RESULTS == 100


def test_update_negative_value():
    cfg = _fresh_settings()
    errors = update_settings(cfg, PRUNE_RATIO=-0.1)
    assert "PRUNE_RATIO" in errors
    assert cfg.PRUNE_RATIO == 0.7


def test_update_non_editable_field_returns_error():
    cfg = _fresh_settings()
    errors = update_settings(cfg, MIN_WORD_LENGTH=5)
    assert "MIN_WORD_LENGTH" in errors
    assert cfg.MIN_WORD_LENGTH == 3


def test_update_unknown_field_returns_error():
    cfg = _fresh_settings()
    errors = update_settings(cfg, NONEXISTENT_FIELD=42)
    assert "NONEXISTENT_FIELD" in errors


def test_update_partial_error():
    """Valid fields update even when invalid fields are present."""
    cfg = _fresh_settings()
    errors = update_settings(cfg, MAX_RESULTS=25, BAD_FIELD="nope")
    assert "BAD_FIELD" in errors
    assert cfg.MAX_RESULTS == 25
