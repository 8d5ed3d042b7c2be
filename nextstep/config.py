"""Configuration management"""
from pydantic_settings import BaseSettings


VALID_TONES = ("facts", "guided", "coach")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


class Settings(BaseSettings):
    """Application settings"""

    # NextStep defaults (used when a caller omits tone / encouragement)
    default_tone: str = "guided"
    encouragement: bool = True

    # Server
    server_url: str = "http://localhost:8000"

    # CORS - comma-separated list of allowed origins
    allowed_origins: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"
    log_pretty: bool = False  # Indented JSON, handy when tailing locally

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra environment variables

    def validate_settings(self) -> None:
        """Validate settings that would otherwise fail on the first request. Call during startup."""
        if self.default_tone.lower() not in VALID_TONES:
            raise ValueError(
                f"DEFAULT_TONE must be one of {', '.join(VALID_TONES)} "
                f"(got {self.default_tone!r})."
            )
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)} "
                f"(got {self.log_level!r})."
            )


settings = Settings()
