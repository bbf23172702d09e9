# src/emicalc/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # -----------------------------
    # Public gateway
    # -----------------------------
    GATEWAY_HOST: str = Field(default="0.0.0.0")
    GATEWAY_PORT: int = Field(default=5200)

    # -----------------------------
    # Calculation service
    # -----------------------------
    CALCULATOR_HOST: str = Field(default="0.0.0.0")
    CALCULATOR_PORT: int = Field(default=5300)

    # Where the gateway finds the calculation service
    CALCULATOR_URL: str = Field(default="http://localhost:5300")
    CALCULATOR_TIMEOUT_S: float = Field(default=10.0)

    # 0 means a failed call is reported straight away
    CALCULATOR_MAX_RETRIES: int = Field(default=0)
    CALCULATOR_BACKOFF_BASE_S: float = Field(default=0.5)

    model_config = SettingsConfigDict(
        env_prefix="EMICALC_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("GATEWAY_PORT", "CALCULATOR_PORT")
    @classmethod
    def _port_range(cls, v: int) -> int:
        if not (1 <= v <= 65535):
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator("CALCULATOR_URL", mode="before")
    @classmethod
    def _strip_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().rstrip("/")
            if not v:
                raise ValueError("CALCULATOR_URL must not be empty")
        return v

    @field_validator("CALCULATOR_TIMEOUT_S")
    @classmethod
    def _timeout_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("CALCULATOR_TIMEOUT_S must be > 0")
        return v

    @field_validator("CALCULATOR_MAX_RETRIES", "CALCULATOR_BACKOFF_BASE_S")
    @classmethod
    def _non_negative(cls, v: Any) -> Any:
        if v < 0:
            raise ValueError("retry settings must be non-negative")
        return v


config = AppConfig()
