from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # OpenAI-compatible text provider (Perplexity by default)
    provider_api_key: str = ""
    provider_base_url: str = "https://api.perplexity.ai"
    provider_model: str = "sonar-pro"
    provider_max_tokens: int = 2000
    provider_temperature: float = 0.7
    provider_timeout_seconds: float = 60.0
    provider_system_prompt: str = ""  # empty -> prompt catalog default

    # Step pipeline
    step_max_attempts: int = 2  # per analysis step, final step never retried

    # Offline fallback when no API key is configured
    mock_fragment_delay_seconds: float = 0.0

    # App
    app_log_level: str = "INFO"
    noisy_log_level: str = "WARNING"
    log_dir: str = "logs"  # empty disables the file handler

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def has_provider_key(self) -> bool:
        key = self.provider_api_key.strip()
        if not key:
            return False
        # Placeholder values shipped in sample .env files.
        return not (key.startswith("your_") and key.endswith("_here"))


settings = Settings()
