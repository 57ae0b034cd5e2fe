from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache

# Pinned so schema-following behavior does not drift with provider aliases.
DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_OPENAI_MODEL = "gpt-4o"

BROWSER_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

class Settings(BaseSettings):
    LLM_PROVIDER: str = Field("anthropic", description="Generation provider: anthropic or openai")
    MODEL_ANTHROPIC: str = DEFAULT_ANTHROPIC_MODEL
    MODEL_OPENAI: str = DEFAULT_OPENAI_MODEL
    MAX_OUTPUT_TOKENS: int = 16000
    LOG_LEVEL: str = "INFO"

    # Retrieval
    FETCH_TIMEOUT: float = Field(10.0, description="Seconds before a page fetch is abandoned")
    USER_AGENT: str = BROWSER_USER_AGENT
    BODY_EXCERPT_CHARS: int = 5000

    # Pipeline
    PIPELINE_TIMEOUT: float = Field(60.0, description="Wall-clock ceiling for one analysis")
    JSON_REPAIR_ENABLED: bool = Field(False, description="Try one bracket-balancing pass on truncated output")
    RAW_OUTPUT_LOG_CHARS: int = 2000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def model_for(self, provider: str) -> str:
        if provider == "openai":
            return self.MODEL_OPENAI
        return self.MODEL_ANTHROPIC

@lru_cache()
def get_settings() -> Settings:
    return Settings()
