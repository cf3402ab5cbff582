from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Soroswap indexing backend
    soroswap_api_url: str = "https://api.soroswap.finance"
    soroswap_api_key: str = ""
    soroswap_api_timeout_sec: float = 10.0

    # Pair traversal: one pair after another, or a bounded all-or-nothing fan-out
    lp_traversal_mode: Literal["sequential", "parallel"] = "sequential"
    lp_max_concurrency: int = 8  # only used in parallel mode

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    json_logs: bool = False


settings = Settings()
