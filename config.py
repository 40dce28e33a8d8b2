"""
Application Configuration

All settings come from environment variables (optionally from a .env file).
"""
import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Runtime configuration read from the environment"""
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key')
    SITE_URL = os.getenv('SITE_URL', 'http://localhost:5000')

    # Stripe
    STRIPE_SECRET_KEY = os.getenv('STRIPE_SECRET_KEY')
    STRIPE_PRICE_ID = os.getenv('STRIPE_PRICE_ID')
    STRIPE_ADDON_PRICE_ID = os.getenv('STRIPE_ADDON_PRICE_ID')

    # Contact mail
    EMAIL_USER = os.getenv('EMAIL_USER')
    EMAIL_PASS = os.getenv('EMAIL_PASS')
    CONTACT_TO = os.getenv('CONTACT_TO', 'xatom_space@naver.com')
    SMTP_HOST = os.getenv('SMTP_HOST', 'smtp.gmail.com')
    SMTP_PORT = int(os.getenv('SMTP_PORT', '465'))
    MAIL_FALLBACK_TO = os.getenv('MAIL_FALLBACK_TO', 'hello@xatom.space')

    # Flask-Limiter
    RATELIMIT_ENABLED = True
    RATELIMIT_DEFAULT = os.getenv('RATELIMIT_DEFAULT', '100 per hour')
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')

    # Logging
    LOG_DIR = os.getenv('LOG_DIR', 'logs')
    LOG_TO_FILE = os.getenv('LOG_TO_FILE', 'true').lower() not in {'0', 'false', 'no'}


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SITE_URL = 'http://localhost:5000'
    STRIPE_SECRET_KEY = 'sk_test_dummy'
    STRIPE_PRICE_ID = None
    STRIPE_ADDON_PRICE_ID = None
    EMAIL_USER = None
    EMAIL_PASS = None
    RATELIMIT_ENABLED = False
    LOG_TO_FILE = False
