from pydantic_settings import BaseSettings
import logging

logger = logging.getLogger(__name__)

class Settings(BaseSettings):
    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    
    # Logging
    LOG_LEVEL: str = "INFO"

    # Validation
    DEFAULT_ATTRIBUTE_NAME: str = "content"
    MAX_TEMPLATE_SIZE: int = 1024 * 1024  # 1MB

    @property
    def log_level_value(self) -> int:
        """Get numeric logging level, falling back to INFO"""
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        if isinstance(level, int):
            return level
        logger.warning(f"⚠️ Unknown LOG_LEVEL '{self.LOG_LEVEL}', using INFO")
        return logging.INFO
        
    class Config:
        env_file = ".env"
        extra = "allow"

settings = Settings()
