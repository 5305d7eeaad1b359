"""Resource-scoped API classes; each binds one Configuration."""

from .account import AccountApi
from .links import LinksApi
from .networks import NetworksApi

__all__ = ["AccountApi", "LinksApi", "NetworksApi"]
