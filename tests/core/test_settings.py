# tests/core/test_settings.py
import pytest
from pydantic import ValidationError

from app.core.settings import Settings
from app.v1_0.helper.query import FUNCTIONS, QUERY_OPTIONS


def test_defaults_enable_everything():
    s = Settings(_env_file=None)
    assert s.QUERY_ALLOWED_OPTIONS_LIST == list(QUERY_OPTIONS)
    assert s.QUERY_ALLOWED_FUNCTIONS_LIST == list(FUNCTIONS)
    assert s.QUERY_MAX_TOP is None
    assert s.API_PREFIX == "/api"


def test_csv_lists_are_normalized():
    s = Settings(
        _env_file=None,
        QUERY_ALLOWED_OPTIONS=" select , filter,orderby ",
        QUERY_ALLOWED_FUNCTIONS="contains, tolower",
        CORS_ORIGINS="http://a.test, http://b.test",
        API_PREFIX="api/",
    )
    assert s.QUERY_ALLOWED_OPTIONS_LIST == ["select", "filter", "orderby"]
    assert s.QUERY_ALLOWED_FUNCTIONS_LIST == ["contains", "tolower"]
    assert s.CORS_ORIGINS_LIST == ["http://a.test", "http://b.test"]
    assert s.API_PREFIX == "/api"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("QUERY_MAX_TOP", "50")
    monkeypatch.setenv("APP_ENV", "prod")
    s = Settings(_env_file=None)
    assert s.QUERY_MAX_TOP == 50
    assert s.APP_ENV == "prod"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"QUERY_ALLOWED_OPTIONS": "select,expand"},
        {"QUERY_ALLOWED_FUNCTIONS": "contains,substringof"},
        {"QUERY_MAX_TOP": 0},
        {"QUERY_ALLOWED_OPTIONS": "select", "QUERY_MAX_TOP": 10},
    ],
)
def test_rejects_bad_values(kwargs):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **kwargs)
