"""Configuration settings for the CodePush CLI."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.constants import DEFAULT_API_BASE_URL, DEFAULT_APP, DEFAULT_LOG_DIR


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    This uses Pydantic Settings for environment variable loading; every field
    is read from the matching CODEPUSH_* variable (e.g. CODEPUSH_API_KEY).
    """

    model_config = SettingsConfigDict(env_prefix="CODEPUSH_", extra="ignore")

    # API settings
    API_BASE_URL: str = DEFAULT_API_BASE_URL
    API_KEY: str = ""

    # App the commands act on, as owner/appname
    APP: str = DEFAULT_APP

    # General settings
    VERBOSE: bool = False
    LOG_DIR: str = DEFAULT_LOG_DIR


# Create a singleton settings instance
settings = Settings()
