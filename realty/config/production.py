from .base import BaseConfig, ConfigurationError


class ProductionConfig(BaseConfig):
    """
    Production configuration.
    """

    DEBUG = False
    ENVIRONMENT = "production"

    # MUST be set via environment variable in real production
    SECRET_KEY = BaseConfig.SECRET_KEY

    @classmethod
    def validate(cls):
        super().validate()
        if not cls.SECRET_KEY:
            raise ConfigurationError("SECRET_KEY is required in production")
        return cls
