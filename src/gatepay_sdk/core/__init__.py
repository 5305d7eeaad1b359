"""Configuration, errors and logging shared by the gatepay_sdk clients."""

from .config import (
    API_TOKEN_ENV,
    BASE_PATH_ENV,
    DEFAULT_BASE_PATH,
    Configuration,
    load_env_config,
)
from .errors import (
    GatepayClientError,
    GatepayHTTPError,
    GatepayModelValidationError,
    GatepayParseError,
    LinkCreationError,
    LinkCreationIncompleteError,
)
from .logging import LogfmtFormatter, setup_logging
from .observability import log_event

__all__ = [
    # Config
    "Configuration",
    "DEFAULT_BASE_PATH",
    "API_TOKEN_ENV",
    "BASE_PATH_ENV",
    "load_env_config",
    # Exceptions
    "GatepayClientError",
    "GatepayHTTPError",
    "GatepayParseError",
    "GatepayModelValidationError",
    "LinkCreationError",
    "LinkCreationIncompleteError",
    # Logging
    "LogfmtFormatter",
    "setup_logging",
    "log_event",
]
