import os
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Application configuration settings.
    """
    model_config = SettingsConfigDict(env_prefix="PERSONALIZATION_", env_file=".env", extra="ignore")

    # Service Info
    service_name: str = "personalization-engine"
    environment: str = "local"
    log_level: str = "INFO"
    
    # API 
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    
    # Durable store
    storage_backend: Literal["file", "memory"] = "file"
    storage_dir: str = os.path.join(os.getcwd(), ".personalization")
    storage_key: str = "medisync_interactions"
    
    # Write scheduling
    persist_mode: Literal["immediate", "debounced"] = "immediate"
    debounce_seconds: float = 0.5

settings = Settings()
