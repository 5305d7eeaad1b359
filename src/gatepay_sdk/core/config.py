from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field
from typing import Any, Tuple

from dotenv import load_dotenv

DEFAULT_BASE_PATH = "https://api.gatepay.cloud"

API_TOKEN_ENV = "GATEPAY_API_TOKEN"
BASE_PATH_ENV = "GATEPAY_BASE_PATH"


@dataclass(frozen=True)
class Configuration:
    """
    Immutable {base path, access token} snapshot shared by the sub-clients.
    Never mutated: use replace() to derive a new value.
    """

    base_path: str
    access_token: str = field(repr=False)

    def __post_init__(self) -> None:
        base_path = (self.base_path or "").strip().rstrip("/")
        if not base_path:
            raise ValueError("base_path must be provided.")
        if not self.access_token:
            raise ValueError("access_token must be provided.")
        object.__setattr__(self, "base_path", base_path)

    def replace(self, **changes: Any) -> "Configuration":
        return dataclasses.replace(self, **changes)


def load_env_config(*, use_dotenv: bool = True) -> Tuple[str, str]:
    """Load Gatepay base path and API token from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    base_path = os.getenv(BASE_PATH_ENV, "").strip() or DEFAULT_BASE_PATH
    api_token = os.getenv(API_TOKEN_ENV, "").strip()
    return base_path, api_token


__all__ = [
    "Configuration",
    "DEFAULT_BASE_PATH",
    "API_TOKEN_ENV",
    "BASE_PATH_ENV",
    "load_env_config",
]
