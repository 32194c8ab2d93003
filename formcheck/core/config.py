from pydantic import Field
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Rules
    RULE_SEPARATOR: str = Field(default="||", min_length=1)
    TRIM_VALUES: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for machine-readable output (structured JSON), False for colored console
    SENSITIVE_KEYS: frozenset[str] = frozenset(
        {"password", "token", "secret", "authorization", "cookie", "value"}
    )

    class Config:
        env_prefix = "FORMCHECK_"
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
