import pytest
from pydantic import ValidationError

from conftest import make_settings


def test_comma_separated_lists_are_trimmed():
    settings = make_settings(
        ALLOWED_ORIGINS="https://a.example.com, https://b.example.com,",
        IP_WHITELIST=" 10.0.0.1 ,10.0.0.2",
    )

    assert settings.allowed_origins == ["https://a.example.com", "https://b.example.com"]
    assert settings.ip_allowlist == frozenset({"10.0.0.1", "10.0.0.2"})


@pytest.mark.parametrize("raw", ["", ",", " , ,"])
def test_empty_allowlist_is_the_empty_set(raw):
    settings = make_settings(IP_WHITELIST=raw, ALLOWED_ORIGINS=raw)

    assert settings.ip_allowlist == frozenset()
    assert "" not in settings.ip_allowlist
    assert settings.allowed_origins == []


def test_settings_are_immutable():
    settings = make_settings()

    with pytest.raises(ValidationError):
        settings.api_key = "changed"


def test_upload_limit_must_be_positive():
    with pytest.raises(ValidationError):
        make_settings(MAX_UPLOAD_BYTES=0)
