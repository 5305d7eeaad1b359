from __future__ import annotations

from typing import Any, Dict, Optional


class GatepayClientError(Exception):
    """Base error for client failures."""


class GatepayHTTPError(GatepayClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        response_json: Optional[Dict[str, Any]] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(f"{status_code} {method} {url}: {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.message = message
        self.response_json = response_json
        self.response_text = response_text


class GatepayParseError(GatepayClientError):
    pass


class GatepayModelValidationError(GatepayClientError):
    pass


class LinkCreationError(GatepayClientError):
    """
    Raised by Gatepay.create_link when any step fails.

    The original exception is chained (``__cause__``) and kept on ``cause``.
    Nothing created before the failure is rolled back; ``link_uuid`` names
    the link left on the server, or is None if the link itself was not created.
    """

    def __init__(
        self,
        message: str,
        *,
        step: str,
        link_uuid: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(f"Failed to create link: {message}")
        self.step = step
        self.link_uuid = link_uuid
        self.cause = cause


class LinkCreationIncompleteError(LinkCreationError):
    """Link creation returned successfully but without a uuid."""

    def __init__(self) -> None:
        super().__init__("no UUID returned", step="link")


__all__ = [
    "GatepayClientError",
    "GatepayHTTPError",
    "GatepayParseError",
    "GatepayModelValidationError",
    "LinkCreationError",
    "LinkCreationIncompleteError",
]
