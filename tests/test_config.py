from book_editor import config


def test_defaults(monkeypatch):
    for name in ("LOG_LEVEL", "LOG_FILE", "SAMPLE_COUNT", "PAGE_SIZE", "SKIP_MALFORMED", "SEED"):
        monkeypatch.delenv(f"BOOK_EDITOR_{name}", raising=False)
    settings = config.load()
    assert settings == config.Settings()
    assert settings.page_size == 25
    assert settings.seed is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("BOOK_EDITOR_LOG_LEVEL", "debug")
    monkeypatch.setenv("BOOK_EDITOR_PAGE_SIZE", "50")
    monkeypatch.setenv("BOOK_EDITOR_SAMPLE_COUNT", "200")
    monkeypatch.setenv("BOOK_EDITOR_SKIP_MALFORMED", "no")
    monkeypatch.setenv("BOOK_EDITOR_SEED", "42")
    settings = config.load()
    assert settings.log_level == "DEBUG"
    assert settings.page_size == 50
    assert settings.sample_count == 200
    assert settings.skip_malformed is False
    assert settings.seed == 42


def test_malformed_values_fall_back(monkeypatch):
    monkeypatch.setenv("BOOK_EDITOR_PAGE_SIZE", "30")
    monkeypatch.setenv("BOOK_EDITOR_SAMPLE_COUNT", "lots")
    monkeypatch.setenv("BOOK_EDITOR_SEED", "abc")
    settings = config.load()
    assert settings.page_size == 25
    assert settings.sample_count == 10000
    assert settings.seed is None
