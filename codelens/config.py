from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    GEMINI_API_KEY: str = ""
    OLLAMA_URL: str = "http://127.0.0.1:11434"
    DEFAULT_PROVIDER: str = "gemini"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env")

@lru_cache
def get_settings():
    return Settings()
