"""
Configuration read from environment variables.

Values are read when ``Config`` is instantiated, so ``create_app`` always
picks up the current environment. Anything passed to ``create_app(config=...)``
overrides these.
"""
import os


def _flag(name, default='false'):
    return os.getenv(name, default).lower() in {'1', 'true', 'yes'}


class Config:
    def __init__(self):
        self.PORT = int(os.getenv('PORT', '3000'))
        self.IP = os.getenv('IP', '0.0.0.0')
        self.SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-me')
        self.SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///yelpcamp.db')
        self.SQLALCHEMY_TRACK_MODIFICATIONS = False
        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
        # Wipe and reseed sample campgrounds on startup
        self.SEED_DB = _flag('SEED_DB')
        self.PASSWORD_HASH_METHOD = os.getenv('PASSWORD_HASH_METHOD', 'scrypt')

    def as_dict(self):
        return {k: v for k, v in vars(self).items() if k.isupper()}
