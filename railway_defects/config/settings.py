# railway_defects/config/settings.py
import os
from typing import List, Mapping, Optional

from pydantic import BaseModel


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    # Base URL of the API server, without the /api suffix
    api_base_url: str = "http://localhost:4000"
    # Client request timeout in seconds
    request_timeout: float = 10.0
    cors_origins: List[str] = ["http://localhost:3000"]
    # No URI means the in-memory store is used
    mongodb_uri: Optional[str] = None
    mongodb_database: str = "railway_defects"
    seed_sample_data: bool = True
    cache_ttl: int = 300
    cache_size: int = 100
    port: int = 4000

    @property
    def api_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/api"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        values = {}
        if env.get("API_BASE_URL"):
            values["api_base_url"] = env["API_BASE_URL"]
        if env.get("API_TIMEOUT"):
            values["request_timeout"] = float(env["API_TIMEOUT"])
        if env.get("CORS_ORIGINS"):
            values["cors_origins"] = [origin.strip() for origin in env["CORS_ORIGINS"].split(",") if origin.strip()]
        if env.get("MONGODB_URI"):
            values["mongodb_uri"] = env["MONGODB_URI"]
        if env.get("MONGODB_DATABASE"):
            values["mongodb_database"] = env["MONGODB_DATABASE"]
        if env.get("SEED_SAMPLE_DATA"):
            values["seed_sample_data"] = _as_bool(env["SEED_SAMPLE_DATA"])
        if env.get("CACHE_TTL"):
            values["cache_ttl"] = int(env["CACHE_TTL"])
        if env.get("CACHE_SIZE"):
            values["cache_size"] = int(env["CACHE_SIZE"])
        if env.get("PORT"):
            values["port"] = int(env["PORT"])
        return cls(**values)
