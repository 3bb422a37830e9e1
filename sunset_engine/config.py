from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "SUNSET_", "env_file": ".env", "extra": "ignore"}

    engine_host: str = "0.0.0.0"
    engine_port: int = 8322

    # Upstream services
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    geocode_url: str = "https://api.bigdatacloud.net/data/reverse-geocode-client"
    geocode_timeout: float = 10.0
    cache_path: str = ".cache/open_meteo"
    cache_expire_after: int = 1800  # 30min

    # Fallback location when none is given (Lausanne)
    default_latitude: float = 46.5197
    default_longitude: float = 6.6323

    # Query defaults and bounds
    forecast_days: int = 5
    min_forecast_days: int = 1
    max_forecast_days: int = 10
    window_minutes: int = 90
    min_window_minutes: int = 30
    max_window_minutes: int = 150

    # Optional parameter bundle imported at startup
    params_file: str = ""

    log_dir: str = str(Path.home() / ".sunset-engine" / "logs")
    log_level: str = "INFO"


settings = Settings()
