# tests/test_settings.py
import pytest
from wish_merchant.config.settings import Settings

@pytest.fixture
def settings():
    s = Settings()
    s.WISH_ACCESS_TOKEN = "tok"
    s.WISH_SESSION_TYPE = "prod"
    s.WISH_TIMEOUT = 30
    s.WISH_MAX_ATTEMPTS = 3
    return s

def test_valid_settings(settings):
    settings.validate()

def test_missing_token(settings):
    settings.WISH_ACCESS_TOKEN = None
    with pytest.raises(ValueError, match="WISH_ACCESS_TOKEN"):
        settings.validate()

def test_unknown_session_type(settings):
    settings.WISH_SESSION_TYPE = "dev"
    with pytest.raises(ValueError, match="WISH_SESSION_TYPE"):
        settings.validate()

@pytest.mark.parametrize("name, value", [("WISH_TIMEOUT", 0), ("WISH_MAX_ATTEMPTS", 0)])
def test_non_positive_numbers(settings, name, value):
    setattr(settings, name, value)
    with pytest.raises(ValueError):
        settings.validate()
