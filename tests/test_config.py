from config import Settings


def test_defaults(monkeypatch):
    for name in ("POSTS_COLLECTION", "USERS_COLLECTION", "CORS_ORIGINS", "API_PREFIX",
                 "AUTH_CHECK_REVOKED", "AUTH_CLOCK_SKEW_SECONDS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.posts_collection == "posts"
    assert settings.users_collection == "users"
    assert settings.cors_origins == ["http://localhost:3000"]
    assert settings.auth_check_revoked is True
    assert settings.auth_clock_skew_seconds == 10


def test_overrides(monkeypatch):
    monkeypatch.setenv("POSTS_COLLECTION", "feed_posts")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("API_PREFIX", "/api/")
    monkeypatch.setenv("AUTH_CHECK_REVOKED", "false")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.posts_collection == "feed_posts"
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.api_prefix == "/api"
    assert settings.auth_check_revoked is False
    assert settings.log_level == "DEBUG"
