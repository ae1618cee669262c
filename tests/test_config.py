from app.core.config import Settings


def test_cors_origins_accept_comma_separated_string():
    settings = Settings(_env_file=None, CORS_ORIGIN_URLS="http://localhost:3000, https://example.com")

    assert settings.CORS_ORIGIN_URLS == ["http://localhost:3000", "https://example.com"]


def test_log_level_is_normalized():
    assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"


def test_projection_defaults():
    settings = Settings(_env_file=None)

    assert settings.MAX_PROJECTION_AGE == 120
    assert settings.SAFE_WITHDRAWAL_RATE == 4.0
    assert settings.FULL_RETIREMENT_AGE == 65
