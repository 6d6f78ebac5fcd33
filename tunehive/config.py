from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, field_validator
from typing_extensions import Literal

ENV_PREFIX = "TUNEHIVE_"

IdPolicyName = Literal["length", "monotonic"]


class Settings(BaseModel):
    # "length" reproduces the original len+1 ids, "monotonic" never reuses one.
    id_policy: IdPolicyName = "length"
    search_genre: bool = False
    voice_enabled: bool = True
    log_level: str = "INFO"

    @field_validator("id_policy", mode="before")
    @classmethod
    def _normalize_policy(cls, value: str) -> str:
        return str(value).strip().lower()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unknown log level: {value}")
        return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build ``Settings`` from ``TUNEHIVE_*`` environment variables.

    Unset variables keep their defaults. Values are validated by pydantic,
    so ``TUNEHIVE_ID_POLICY=random`` raises a validation error.
    """
    env = os.environ if environ is None else environ
    raw = {}
    for name in Settings.model_fields:
        key = ENV_PREFIX + name.upper()
        if key in env:
            raw[name] = env[key]
    return Settings(**raw)
