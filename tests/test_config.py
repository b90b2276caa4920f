"""Tests for reading settings from st.secrets-shaped mappings."""
import pytest

from courseadmin.config import DEFAULT_BASE_URL, ENTITY_KINDS, ConfigError, load_settings

APP_IDS = {k: f"id-{k}" for k in ENTITY_KINDS}


def test_defaults_apply_when_only_app_ids_given():
    settings = load_settings({"RECORDS_APP_IDS": APP_IDS})
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.app_ids == APP_IDS
    assert settings.cookies == {}
    assert settings.timeout == 30.0
    assert settings.timezone == "Europe/Berlin"
    assert settings.log_level == "INFO"


def test_overrides_are_read():
    settings = load_settings(
        {
            "RECORDS_APP_IDS": APP_IDS,
            "RECORDS_API_BASE_URL": "https://store.example.test/rest/",
            "RECORDS_API_COOKIES": {"sessionid": "abc"},
            "RECORDS_API_TIMEOUT": "12.5",
            "APP_TIMEZONE": "UTC",
        }
    )
    assert settings.base_url == "https://store.example.test/rest"
    assert settings.cookies == {"sessionid": "abc"}
    assert settings.timeout == 12.5
    assert settings.timezone == "UTC"


def test_missing_app_ids_are_named():
    partial = dict(APP_IDS)
    del partial["rooms"]
    with pytest.raises(ConfigError, match="rooms"):
        load_settings({"RECORDS_APP_IDS": partial})


def test_no_secrets_at_all():
    with pytest.raises(ConfigError):
        load_settings(None)


def test_bad_timeout():
    with pytest.raises(ConfigError):
        load_settings({"RECORDS_APP_IDS": APP_IDS, "RECORDS_API_TIMEOUT": "soon"})
