from site_registry.core.config import Settings


def test_settings_defaults(monkeypatch):
    for name in ("DEFAULT_SITE_TYPE", "DEFAULT_SITE_TIMEZONE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.DEFAULT_SITE_TYPE == "website"
    assert settings.DEFAULT_SITE_TIMEZONE == "UTC"
    assert settings.LOG_LEVEL == "INFO"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./other.db")
    monkeypatch.setenv("DEFAULT_SITE_TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    settings = Settings(_env_file=None)
    assert settings.DATABASE_URL == "sqlite:///./other.db"
    assert settings.DEFAULT_SITE_TIMEZONE == "Europe/Berlin"
    assert settings.LOG_LEVEL == "DEBUG"
