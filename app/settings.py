import structlog
from app.services import setting_service

log = structlog.get_logger()

SUPPORTED_LANGUAGES = ("zh", "en")


class AppSettings:
    """
    A centralized, typed configuration object for the application.
    It defines default values and is then populated/overridden by
    settings from the database.
    """
    LANGUAGE: str = "zh"
    DEFAULT_PROMPT_VERSION: str = "1.0.0"

    def __init__(self):
        # Populated by `load()` from the app factory.
        for key in self.__class__.__annotations__:
            setattr(self, key, getattr(self.__class__, key))

    def load(self):
        """
        Loads all settings from the database. If a setting is not in the DB,
        the class default is used.
        """
        db_settings = setting_service.get_all_settings_as_dict()

        for key in self.__class__.__annotations__:
            value = db_settings.get(key, getattr(self.__class__, key))
            setattr(self, key, value)

        if self.LANGUAGE not in SUPPORTED_LANGUAGES:
            log.warning("settings.language.unsupported", language=self.LANGUAGE)
            self.LANGUAGE = self.__class__.LANGUAGE

        log.info("settings.loaded", source="database", language=self.LANGUAGE)

    def save(self, key: str, value):
        """Persist one setting and reload so the new value is visible process-wide."""
        if key not in self.__class__.__annotations__:
            raise KeyError(f"Unknown setting: {key}")
        if key == "LANGUAGE" and value not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {value}")
        setting_service.set_setting(key, value)
        self.load()
        return getattr(self, key)

    def as_dict(self) -> dict:
        return {key: getattr(self, key) for key in self.__class__.__annotations__}


# Singleton populated once when the application starts.
settings = AppSettings()
