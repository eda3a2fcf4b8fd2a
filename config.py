import os

basedir = os.path.abspath(os.path.dirname(__file__))


def _sqlite_url(filename):
    return "sqlite:///" + os.path.join(basedir, filename)


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "promptminder-dev-secret"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Settings dict and tag list are cached in-process; writes evict the key.
    CACHE_TYPE = os.environ.get("CACHE_TYPE", "SimpleCache")
    CACHE_DEFAULT_TIMEOUT = int(os.environ.get("CACHE_DEFAULT_TIMEOUT", "3600"))

    SWAGGER = {
        "title": "PromptMinder API",
        "description": "Public prompt collection, versioned prompts, tags and community contributions.",
        "uiversion": 3,
        "specs_route": "/api/docs/",
    }
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Holds prompts-cn.md and prompts-en.md
    PUBLIC_PROMPTS_DIR = os.environ.get("PUBLIC_PROMPTS_DIR") or os.path.join(basedir, "public")


class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get("DEV_DATABASE_URL") or _sqlite_url("promptminder-dev.db")


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL") or "sqlite://"
    LOG_LEVEL = "WARNING"


class ProductionConfig(Config):
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL") or _sqlite_url("promptminder.db")
    # Hosted Postgres drops idle connections
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}
