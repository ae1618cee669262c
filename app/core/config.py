from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "Retirement Projector API"
    API_V1_STR: str = "/api"

    @field_validator("CORS_ORIGIN_URLS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: str | list[str]) -> list[str] | str:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    CORS_ORIGIN_URLS: list[str] | str = []

    # Extra
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Projection
    # Surplus years are searched up to this age once life expectancy is reached
    MAX_PROJECTION_AGE: int = 120

    # Recommendation thresholds (rates in percent)
    MIN_CONTRIBUTION_RATIO: float = 0.10
    OPTIMISTIC_RETURN_RATE: float = 8.0
    FULL_RETIREMENT_AGE: int = 65
    SAFE_WITHDRAWAL_RATE: float = 4.0

    # Calculator defaults
    DEFAULT_CURRENT_AGE: int = 30
    DEFAULT_RETIREMENT_AGE: int = 65
    DEFAULT_LIFE_EXPECTANCY: int = 90
    DEFAULT_CURRENT_SAVINGS: float = 50000.0
    DEFAULT_ANNUAL_CONTRIBUTION: float = 6000.0
    DEFAULT_EXPECTED_RETURN_RATE: float = 7.0
    DEFAULT_INFLATION_RATE: float = 2.5
    DEFAULT_WITHDRAWAL_RATE: float = 4.0
    DEFAULT_SOCIAL_SECURITY_BENEFIT: float = 1500.0

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

settings = Settings()
