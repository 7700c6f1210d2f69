import pytest

from talentvote.errors import NotFound, ValidationError
from talentvote.models import SystemSetting
from talentvote.services import settings as settings_service


def test_set_setting_creates_then_overwrites(db_session):
    settings_service.set_setting("results_refresh_seconds", 5)
    settings_service.set_setting("results_refresh_seconds", "10")

    assert SystemSetting.query.count() == 1
    assert settings_service.get_setting("results_refresh_seconds").value == "10"


def test_get_missing_setting(db_session):
    with pytest.raises(NotFound):
        settings_service.get_setting("missing")


def test_set_setting_requires_key_and_value(db_session):
    with pytest.raises(ValidationError) as excinfo:
        settings_service.set_setting(" ", None)
    assert set(excinfo.value.fields) == {"key", "value"}


def test_set_setting_rejects_non_text_key(db_session):
    with pytest.raises(ValidationError) as excinfo:
        settings_service.set_setting(7, "on")
    assert set(excinfo.value.fields) == {"key"}
