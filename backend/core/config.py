"""
Configuration management for the MilkShake Bar backend.

Values come from environment variables (or a local ``.env`` file). Missing
PINs do not stop the process: the endpoints that need them answer with a
500 and an explanatory message instead.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Database Configuration
    database_url: str = "sqlite:///./milkshakebar.db"
    database_name: str = "milkshakebar"
    log_sql_queries: bool = False

    # Static PINs for the admin panel and the staff ("clients") view
    admin_pin: str = ""
    clients_pin: str = ""

    # CORS (comma-separated)
    cors_origins: str = "*"

    # Environment Settings
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Loyalty Configuration
    points_currency_per_point: int = 10  # 10 PLN = 1 point
    loyalty_id_max_attempts: int = 80
    reward_code_max_attempts: int = 40

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    @property
    def cors_origin_list(self) -> List[str]:
        """Parse CORS origins from the comma-separated setting."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def admin_pin_configured(self) -> bool:
        return bool(self.admin_pin)

    @property
    def clients_pin_configured(self) -> bool:
        return bool(self.clients_pin)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Returns:
        Settings instance with environment variables loaded
    """
    return Settings()


settings = get_settings()
