from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from dotenv import load_dotenv
from functools import lru_cache

# Load environment variables
load_dotenv()

class Settings(BaseSettings):
    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000
    ENVIRONMENT: str = "development"
    PLUGIN_NAME: str = "LinkedIn Publisher"

    # LinkedIn REST API
    LINKEDIN_API_BASE_URL: str = "https://api.linkedin.com/v2"
    LINKEDIN_API_VERSION: str = "202506"
    LINKEDIN_OAUTH_URL: str = "https://www.linkedin.com/oauth/v2/authorization"

    # Persisted plugin settings
    SETTINGS_PATH: str = "data/linkedin_settings.json"
    KEY_PATH: str = "data/.keys/fernet.key"
    ENCRYPTION_KEY: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE: str = "linkedin_publisher.log"
    LOG_DIR: str = "logs"

    def validate_environment(self) -> None:
        if self.ENVIRONMENT not in ["development", "production", "testing"]:
            raise ValueError(f"Invalid environment: {self.ENVIRONMENT}")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# Create cached settings instance
@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    settings.validate_environment()
    return settings
