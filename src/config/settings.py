from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "local"

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    # pacing of the simulated extraction, per record
    pacing_ms: float = Field(default=5, ge=0)
    # None -> a run is bounded only by the client connection
    run_timeout_seconds: float | None = Field(default=None, gt=0)

    allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
    )

    @property
    def pacing_seconds(self) -> float:
        return self.pacing_ms / 1000

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
