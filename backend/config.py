"""App-wide settings read from the environment."""

from __future__ import annotations

import os
from typing import List, Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field


class Settings(BaseModel):
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"]
    )
    log_level: str = "INFO"

    # dashboard profile (yen)
    monthly_income: float = Field(160_000, ge=0)
    target_assets: float = Field(30_000_000, gt=0)
    monthly_savings_target: float = Field(40_000, ge=0)

    # simulator defaults
    simulation_horizon_months: int = Field(180, ge=1, le=600)
    default_annual_return: float = Field(4.5, ge=-100, le=100, allow_inf_nan=False)
    passive_income_year: float = 7

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        env_file: str = ".env",
    ) -> "Settings":
        """
        Build settings from env vars, leaving unset ones at their defaults.

        Without an explicit mapping, env_file is loaded into the process
        environment first (searched from the working directory upwards).
        Variables already set in the process win over the file.
        """
        if environ is None:
            path = find_dotenv(env_file, usecwd=True)
            if path:
                load_dotenv(path)
        env = os.environ if environ is None else environ
        mapping = {
            "gemini_api_key": "GEMINI_API_KEY",
            "gemini_model": "GEMINI_MODEL",
            "log_level": "LOG_LEVEL",
            "monthly_income": "MONTHLY_INCOME",
            "target_assets": "TARGET_ASSETS",
            "monthly_savings_target": "MONTHLY_SAVINGS_TARGET",
            "simulation_horizon_months": "SIMULATION_HORIZON_MONTHS",
            "default_annual_return": "DEFAULT_ANNUAL_RETURN",
            "passive_income_year": "PASSIVE_INCOME_YEAR",
        }
        values = {field: env[key] for field, key in mapping.items() if env.get(key)}

        origins = env.get("CORS_ORIGINS")
        if origins:
            values["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]

        return cls.model_validate(values)
