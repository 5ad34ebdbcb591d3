from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central config loaded from environment variables and optionally .env (local).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -------------------------
    # Curve geometry
    # -------------------------
    n_points: int = Field(20000, alias="CLES_N_POINTS", ge=2)
    max_points: int = Field(200000, alias="CLES_MAX_POINTS", ge=2)
    default_sd: float = Field(1.0, alias="CLES_DEFAULT_SD", gt=0)
    grid_span_sd: float = Field(3.0, alias="CLES_GRID_SPAN_SD", gt=0)

    # -------------------------
    # Charts
    # -------------------------
    chart_dpi: int = Field(100, alias="CLES_CHART_DPI", ge=10)

    # -------------------------
    # Logging
    # -------------------------
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # -------------------------
    # CORS
    # Pydantic parses a JSON list from the env; simplest is to keep ["*"] by default.
    # -------------------------
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"], alias="CORS_ALLOW_ORIGINS")

    def model_post_init(self, __context) -> None:
        """
        Keep the default resolution inside the HTTP cap so a request without
        n_points is never rejected by our own limit.
        """
        if self.n_points > self.max_points:
            self.max_points = self.n_points
        self.log_level = self.log_level.strip().upper() or "INFO"


settings = Settings()
