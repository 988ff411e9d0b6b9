import pytest

from ingredient_engine.settings import Settings, validate_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("MATCH_THRESHOLD", "FUZZY_CHARS_PER_EDIT", "MIN_CONTAINS_LENGTH", "CATALOG_PATH"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_are_valid():
    cfg = Settings(CATALOG_PATH=None)
    assert cfg.MATCH_THRESHOLD == 50
    assert cfg.FUZZY_CHARS_PER_EDIT == 4
    validate_settings(cfg)


def test_threshold_out_of_range():
    with pytest.raises(RuntimeError, match="MATCH_THRESHOLD"):
        validate_settings(Settings(MATCH_THRESHOLD=0, CATALOG_PATH=None))


def test_all_problems_reported_together():
    cfg = Settings(MATCH_THRESHOLD=101, FUZZY_CHARS_PER_EDIT=0, CATALOG_PATH=None)
    with pytest.raises(RuntimeError) as exc:
        validate_settings(cfg)
    assert "MATCH_THRESHOLD" in str(exc.value)
    assert "FUZZY_CHARS_PER_EDIT" in str(exc.value)


def test_non_numeric_env_value(monkeypatch):
    monkeypatch.setenv("MATCH_THRESHOLD", "abc")
    with pytest.raises(RuntimeError, match="must be an integer"):
        validate_settings(Settings(CATALOG_PATH=None))


def test_missing_catalog_path(tmp_path):
    with pytest.raises(RuntimeError, match="missing file"):
        validate_settings(Settings(CATALOG_PATH=str(tmp_path / "nope.json")))
