"""gatepay_sdk package exports."""

from .apis import AccountApi, LinksApi, NetworksApi
from .client import GatepayClient, RetryConfig
from .core.config import DEFAULT_BASE_PATH, Configuration, load_env_config
from .core.errors import (
    GatepayClientError,
    GatepayHTTPError,
    GatepayModelValidationError,
    GatepayParseError,
    LinkCreationError,
    LinkCreationIncompleteError,
)
from .core.logging import setup_logging
from .gatepay import Gatepay
from .models import (
    Action,
    CallbackAction,
    CallbackActionData,
    CreateLinkOptions,
    FileResource,
    HtmlResource,
    HtmlResourceData,
    Link,
    LinkResource,
    Payment,
    PostLinksByLinkUuidTollsRequest,
    PostLinksRequest,
    ProxyResource,
    RedirectResource,
    Resource,
    Toll,
    TollPaymentRequirement,
    TunnelResource,
    UrlResourceData,
)
from .payments import watch_link_payments

__all__ = [
    # Facade
    "Gatepay",
    "Configuration",
    "DEFAULT_BASE_PATH",
    "load_env_config",
    # APIs
    "AccountApi",
    "LinksApi",
    "NetworksApi",
    # Transport
    "GatepayClient",
    "RetryConfig",
    # Exceptions
    "GatepayClientError",
    "GatepayHTTPError",
    "GatepayParseError",
    "GatepayModelValidationError",
    "LinkCreationError",
    "LinkCreationIncompleteError",
    # Models
    "CreateLinkOptions",
    "PostLinksRequest",
    "Link",
    "PostLinksByLinkUuidTollsRequest",
    "TollPaymentRequirement",
    "Toll",
    "RedirectResource",
    "HtmlResource",
    "FileResource",
    "LinkResource",
    "ProxyResource",
    "TunnelResource",
    "UrlResourceData",
    "HtmlResourceData",
    "Resource",
    "CallbackAction",
    "CallbackActionData",
    "Action",
    "Payment",
    # Helpers
    "watch_link_payments",
    "setup_logging",
]
