"""
Runtime settings, read from the environment.
"""

import os
from dataclasses import dataclass, field


def _env(name: str, default: str) -> str:
    return os.getenv(name, default)


@dataclass
class Settings:
    # Redis
    redis_host: str = field(default_factory=lambda: _env("DYSCORRECT_REDIS_HOST", "localhost"))
    redis_port: int = field(default_factory=lambda: int(_env("DYSCORRECT_REDIS_PORT", "6379")))

    # Analysis service
    analysis_url: str = field(
        default_factory=lambda: _env("DYSCORRECT_ANALYSIS_URL", "http://localhost:8000/api/v1")
    )
    gateway_url: str = field(
        default_factory=lambda: _env("DYSCORRECT_GATEWAY_URL", "http://127.0.0.1:8000")
    )
    gateway_path: str = "/ai-recorrection-workbench/api/v1"
    analysis_timeout: float = 60.0
    health_timeout: float = 10.0
    analyzer: str = field(default_factory=lambda: _env("DYSCORRECT_ANALYZER", "http"))  # "http" or "openai"
    openai_model: str = "gpt-4o-mini"

    # CLI
    api_url: str = field(default_factory=lambda: _env("DYSCORRECT_API_URL", "http://localhost:8000/api"))

    # Logging
    log_level: str = field(default_factory=lambda: _env("DYSCORRECT_LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: _env("DYSCORRECT_LOG_FILE", ""))
    max_log_size: int = 10 * 1024 * 1024  # 10MB
    log_backup_count: int = 3

    # Sessions
    lock_timeout: float = 5.0
    lock_wait: float = field(default_factory=lambda: float(_env("DYSCORRECT_LOCK_WAIT", "1.0")))

    def __post_init__(self) -> None:
        if not 0 < self.redis_port < 65536:
            raise ValueError(f"redis_port out of range: {self.redis_port}")
        if self.analysis_timeout <= 0 or self.health_timeout <= 0:
            raise ValueError("timeouts must be positive")
        if self.lock_timeout <= 0 or self.lock_wait < 0:
            raise ValueError("lock_timeout must be positive and lock_wait non-negative")
        if self.analyzer not in {"http", "openai"}:
            raise ValueError(f"analyzer must be 'http' or 'openai', got '{self.analyzer}'")
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        self.log_level = self.log_level.upper()
        if self.log_level not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got '{self.log_level}'")

    @property
    def gateway_api(self) -> str:
        return self.gateway_url.rstrip("/") + self.gateway_path


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
