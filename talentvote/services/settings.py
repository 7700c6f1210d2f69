from sqlalchemy import func

from talentvote.errors import NotFound, ValidationError
from talentvote.extensions import db
from talentvote.models import SystemSetting


def get_setting(key):
    setting = SystemSetting.query.filter_by(key=key).first()
    if setting is None:
        raise NotFound("Setting not found")
    return setting


def set_setting(key, value):
    fields = {}
    key = key.strip() if isinstance(key, str) else ""
    if not key:
        fields["key"] = "Key is required."
    if value is None:
        fields["value"] = "Value is required."
    if fields:
        raise ValidationError(fields)

    setting = SystemSetting.query.filter_by(key=key).first()
    if setting is None:
        setting = SystemSetting(key=key, value=str(value))
        db.session.add(setting)
    else:
        setting.value = str(value)
        setting.updated_at = func.current_timestamp()

    db.session.commit()
    return setting
