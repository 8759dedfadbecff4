from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    deepseek_api_key: str = ""
    deepseek_base_url: str = "https://api.deepseek.com/v1"
    model_name: str = "deepseek-chat"
    max_retries: int = 0  # fallbacks replace retries
    timeout: float = 90.0


class PipelineConfig(BaseSettings):
    max_file_chars: int = 10_000  # chars kept per fetched file
    preview_chars: int = 500  # chars per file shown to the analysis prompt
    min_selected_files: int = 10  # below this every file is analysed
    max_selected_files: int = 15
    fallback_file_count: int = 12
    prompt_char_limit: int = 2_000
    lyrics_char_limit: int = 3_000
    json_max_tokens: int = 1_000
    prompt_max_tokens: int = 3_000
    lyrics_max_tokens: int = 4_000
    style_max_tokens: int = 500


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    llm: LLMConfig = Field(default_factory=LLMConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    github_token: str | None = None
    github_api_base: str = "https://api.github.com"
    http_timeout: float = 30.0


@lru_cache
def get_config() -> Config:
    return Config()
