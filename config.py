"""Configuration settings for the shift calendar service."""

import os
from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# LOCAL TEST CREDENTIALS (for development/testing only)
# =============================================================================
# With SEED_FIXTURES on, an empty database is seeded with:
#   jeffw387@gmail.com            (Admin)
#   Timothy.Baker@providence.org  (Supervisor)
# Both use SEED_PASSWORD (default: changeme123)
# =============================================================================


def _get_database_url():
    """Get and normalize the database URL."""
    url = os.environ.get('DATABASE_URL', 'sqlite:///sched.db')
    # Some hosts still hand out postgres:// but SQLAlchemy needs postgresql://
    if url and url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def _get_engine_options(db_url):
    """Get SQLAlchemy engine options based on database type."""
    if db_url and db_url.startswith('postgresql://'):
        return {
            'pool_pre_ping': True,  # Verify connections before use
            'pool_recycle': 300,
            'pool_size': 5,
            'max_overflow': 10,
        }
    return {}  # SQLite doesn't need pooling options


def _get_bool(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Database configuration
    SQLALCHEMY_DATABASE_URI = _get_database_url()
    SQLALCHEMY_ENGINE_OPTIONS = _get_engine_options(SQLALCHEMY_DATABASE_URI)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Calendar behaviour
    SCHED_TIMEZONE = os.environ.get('SCHED_TIMEZONE', 'UTC')  # zone used for day boundaries
    SHIFT_COMMIT_POLICY = os.environ.get('SHIFT_COMMIT_POLICY', 'fail')  # 'fail' or 'add'

    # Fixture seeding for empty databases
    SEED_FIXTURES = _get_bool('SEED_FIXTURES', True)
    SEED_PASSWORD = os.environ.get('SEED_PASSWORD', 'changeme123')

    # Base URL used by the remote store client
    SCHED_API_URL = os.environ.get('SCHED_API_URL', 'http://localhost:5000')

    # Session config
    SESSION_COOKIE_SECURE = os.environ.get('FLASK_ENV') == 'production'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    SESSION_COOKIE_SECURE = True
    SEED_FIXTURES = _get_bool('SEED_FIXTURES', False)


class TestingConfig(Config):
    """Test configuration: throwaway in-memory database."""
    TESTING = True
    SECRET_KEY = 'test'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SCHED_TIMEZONE = '-07:00'
    SHIFT_COMMIT_POLICY = 'fail'
    SEED_FIXTURES = True
    SEED_PASSWORD = 'changeme123'
    SESSION_COOKIE_SECURE = False
    BCRYPT_LOG_ROUNDS = 4  # fast hashing for tests


# Config selector
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config():
    """Get the appropriate configuration based on environment."""
    env = os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
