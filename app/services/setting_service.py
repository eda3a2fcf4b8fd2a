import json
import structlog
from app.extensions import db, cache
from app.models.setting import Setting

log = structlog.get_logger()

CACHE_KEY = 'all_settings'


def _encode(value) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def get_all_settings_as_dict() -> dict:
    """
    Get all the settings from the DB, parse the JSON value and cache the result.
    """
    cached = cache.get(CACHE_KEY)
    if cached is not None:
        return cached
    settings_dict = {s.key: s.parsed_value for s in Setting.query.all()}
    cache.set(CACHE_KEY, settings_dict)
    return settings_dict


def get_setting(key: str):
    """Gets a single setting value from the database."""
    setting = Setting.query.filter_by(key=key).first()
    if not setting:
        return None
    return setting.parsed_value


def set_setting(key: str, value):
    """Creates or updates a single setting in the database."""
    if not key:
        raise ValueError("Missing key")
    setting = Setting.query.filter_by(key=key).first()
    if setting:
        setting.value = _encode(value)
    else:
        db.session.add(Setting(key=key, value=_encode(value)))

    db.session.commit()
    cache.delete(CACHE_KEY)
    log.info("setting.set", key=key, value=value)
    return get_setting(key)


def delete_setting(key: str) -> bool:
    """Deletes a single setting from the database."""
    setting = Setting.query.filter_by(key=key).first()
    if not setting:
        return False
    db.session.delete(setting)
    db.session.commit()
    cache.delete(CACHE_KEY)
    log.info("setting.deleted", key=key)
    return True
