"""Configuration classes, selected by name in the application factory."""
import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or os.environ.get('SESSION_SECRET') or 'jelly-dev-key-please-change'

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # 'memory' or 'database'
    STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND') or ('database' if os.environ.get('DATABASE_URL') else 'memory')

    MASTER_CODE = os.environ.get('MASTER_CODE')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    SEED_SAMPLE_DATA = _env_flag('SEED_SAMPLE_DATA', False)
    SEED_OWNER_PASSWORD = os.environ.get('SEED_OWNER_PASSWORD', 'password123')

    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    ARTICLES_PER_PAGE = 9
    RECENT_ARTICLES_LIMIT = 6

    LANGUAGES = ['en']
    BABEL_DEFAULT_LOCALE = 'en'


class DevelopmentConfig(Config):
    DEBUG = True
    SEED_SAMPLE_DATA = _env_flag('SEED_SAMPLE_DATA', True)


class TestingConfig(Config):
    TESTING = True
    STORAGE_BACKEND = 'memory'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    MASTER_CODE = 'test-master-code'
    SEED_SAMPLE_DATA = False


class ProductionConfig(Config):
    SESSION_COOKIE_SECURE = True


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig,
}
