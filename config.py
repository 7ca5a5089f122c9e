"""
Configuration for the ScholarFlow fee tracker
"""
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
INSTANCE_PATH = os.path.join(BASE_DIR, 'instance')

# Slot name carries the schema version; a new schema starts from an empty slot
DEFAULT_STORAGE_KEY = 'scholarflow_data_v2'


def database_url(default):
    """Read DATABASE_URL, correcting the postgres:// scheme for SQLAlchemy"""
    url = os.environ.get('DATABASE_URL')
    if url and url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url or default


class Config:
    # Flask
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.environ.get('SECRET_KEY', 'your-secret-key-here')
    MAX_CONTENT_LENGTH = 5 * 1024 * 1024  # restore uploads

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Database
    SQLALCHEMY_DATABASE_URI = database_url(
        f"sqlite:///{os.path.join(INSTANCE_PATH, 'scholarflow.db')}"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Record store
    STORAGE_KEY = os.environ.get('STORAGE_KEY', DEFAULT_STORAGE_KEY)

    # Insight collaborator
    GROQ_API_KEY = os.environ.get('GROQ_API_KEY')
    INSIGHT_MODEL = os.environ.get('INSIGHT_MODEL', 'llama-3.3-70b-versatile')

    # CSRF
    WTF_CSRF_ENABLED = True


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    PREFERRED_URL_SCHEME = 'https'

    # Security
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_recycle': 1800,  # Recycle connections after 30 minutes
    }


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    STORAGE_KEY = DEFAULT_STORAGE_KEY
    GROQ_API_KEY = None
    WTF_CSRF_ENABLED = False


CONFIGS = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}


def get_config(name=None):
    """Pick a config class by name, falling back to FLASK_ENV"""
    name = name or os.environ.get('FLASK_ENV', 'production')
    return CONFIGS.get(name, ProductionConfig)
