"""
Configuration management for the vendor analytics engine
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "Vendor Analytics Engine"
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    log_dir: str = "logs"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Upstream marketplace API (analytics dashboard + raw bookings)
    analytics_api_base_url: str = "http://localhost:5000/api"
    upstream_timeout_seconds: float = 30.0

    # Range used when the dashboard does not send one
    default_range: str = "30d"

    # Spread summary views across buckets when upstream has no per-period series.
    # Output is flagged views_estimated; turn off to leave views at zero.
    enable_view_estimation: bool = True

    # Favorites/reviews lookups in degraded mode
    fetch_additional_metrics: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
