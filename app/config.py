import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

def _normalize_db_url(db_url, require_ssl=False):
    if not db_url:
        return db_url
    # Replace postgres:// with postgresql:// for SQLAlchemy compatibility
    db_url = db_url.replace('postgres://', 'postgresql://')
    if require_ssl and db_url.startswith('postgresql') and 'sslmode=' not in db_url:
        db_url = f"{db_url}{'?' if '?' not in db_url else '&'}sslmode=require"
    return db_url

class Config:
    SECRET_KEY = os.getenv('SECRET_KEY') or 'dev-key-for-testing'
    DEBUG = False
    TESTING = False
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = _normalize_db_url(os.environ.get('DATABASE_URL', ''), require_ssl=True)

    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY') or SECRET_KEY
    JWT_ALGORITHM = os.environ.get('JWT_ALGORITHM', 'HS256')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.environ.get('JWT_ACCESS_TOKEN_HOURS', 24)))
    JWT_TOKEN_LOCATION = ['headers']

    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:5173')

    STRIPE_SECRET_KEY = os.environ.get('STRIPE_SECRET_KEY')
    FRONTEND_URL = os.environ.get('FRONTEND_URL') or 'http://localhost:5173'

class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = _normalize_db_url(
        os.getenv('DEVELOPMENT_DATABASE_URL') or os.getenv('DATABASE_URL')
    ) or 'sqlite:///flexcrow.db'

class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = _normalize_db_url(os.getenv('TESTING_DATABASE_URL')) or 'sqlite://'
    JWT_SECRET_KEY = 'testing-secret-key-that-is-long-enough'
    JWT_ALGORITHM = 'HS256'
    STRIPE_SECRET_KEY = 'sk_test_dummy'
    FRONTEND_URL = 'http://frontend.test'

class ProductionConfig(Config):
    SQLALCHEMY_DATABASE_URI = _normalize_db_url(
        os.getenv('PRODUCTION_DATABASE_URL') or os.getenv('DATABASE_URL'), require_ssl=True
    )

class StagingConfig(Config):
    SQLALCHEMY_DATABASE_URI = _normalize_db_url(os.getenv('DATABASE_URL'), require_ssl=True)

config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'staging': StagingConfig,
    'default': DevelopmentConfig
}
