from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "RefLine Grid Generator"
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    default_unit: str = "mm"
    default_level: str = "full"
    dxf_version: str = "R2010"
    log_level: str = "INFO"
    max_input_length: int = 50_000  # characters of TOML accepted over HTTP

    class Config:
        env_prefix = "REFLINE_"


settings = Settings()
