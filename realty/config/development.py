from .base import BaseConfig


class DevelopmentConfig(BaseConfig):
    """
    Development configuration.
    """

    DEBUG = True

    SECRET_KEY = BaseConfig.SECRET_KEY or "dev-secret-key"

    LOG_LEVEL = "DEBUG"
