from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

import httpx

from .apis import AccountApi, LinksApi, NetworksApi
from .client import RetryConfig
from .core.config import DEFAULT_BASE_PATH, Configuration, load_env_config
from .core.errors import (
    GatepayClientError,
    LinkCreationError,
    LinkCreationIncompleteError,
)
from .core.observability import log_event
from .models import CreateLinkOptions, Link

logger = logging.getLogger("gatepay_sdk")


class Gatepay:
    """
    Entry point of the SDK.

    Exposes the account, links and networks APIs directly and adds
    create_link(), which builds a link together with its toll, resource and
    actions.

    Every sub-client is bound to the Configuration that was current when it
    was built. update_api_token() and update_base_path() build a new
    Configuration and new sub-clients; handles captured earlier keep the old
    values, and in-flight calls finish with what they started with.

    Example:
        async with Gatepay(api_token="...") as gatepay:
            link = await gatepay.create_link(
                {
                    "name": "Premium Content",
                    "toll": {
                        "tollPaymentRequirements": [
                            {
                                "assetNetwork": "base",
                                "amount": "1000000",
                                "assetAddress": "0x8335...",
                                "destinationAddress": "0x742d...",
                            }
                        ]
                    },
                    "resource": {
                        "type": "redirect",
                        "data": {"url": "https://example.com/premium"},
                    },
                }
            )
            print(link.url)
    """

    def __init__(
        self,
        *,
        api_token: str,
        base_path: Optional[str] = None,
        timeout_seconds: float = 10.0,
        retry: Optional[RetryConfig] = None,
        http: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._configuration = Configuration(
            base_path=base_path or DEFAULT_BASE_PATH,
            access_token=api_token,
        )
        self._transport_kwargs = {
            "timeout_seconds": timeout_seconds,
            "retry": retry,
            "logger": logger,
        }
        # One connection pool for every sub-client generation.
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=timeout_seconds)
        self._bind(self._configuration)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "Gatepay":
        """Build a client from GATEPAY_API_TOKEN / GATEPAY_BASE_PATH (optional .env)."""
        base_path, api_token = load_env_config()
        if not api_token:
            raise ValueError("Missing GATEPAY_API_TOKEN in environment.")
        kwargs.setdefault("base_path", base_path)
        return cls(api_token=api_token, **kwargs)

    def _bind(self, configuration: Configuration) -> None:
        self._configuration = configuration
        self._account = AccountApi(
            configuration, http=self._http, **self._transport_kwargs
        )
        self._links = LinksApi(configuration, http=self._http, **self._transport_kwargs)
        self._networks = NetworksApi(
            configuration, http=self._http, **self._transport_kwargs
        )

    @property
    def account(self) -> AccountApi:
        return self._account

    @property
    def links(self) -> LinksApi:
        return self._links

    @property
    def networks(self) -> NetworksApi:
        return self._networks

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "Gatepay":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --- Configuration ---

    def get_configuration(self) -> Configuration:
        return self._configuration

    def update_api_token(self, api_token: str) -> None:
        """Rebind all sub-clients to a copy of the configuration with a new token."""
        self._bind(self._configuration.replace(access_token=api_token))

    def update_base_path(self, base_path: str) -> None:
        """Rebind all sub-clients to a copy of the configuration with a new base path."""
        self._bind(self._configuration.replace(base_path=base_path))

    # --- Composite operations ---

    async def create_link(
        self, options: Union[CreateLinkOptions, Mapping[str, Any]]
    ) -> Link:
        """
        Create a link, then attach its toll, resource and actions in that
        order, and return the link as read back from the server.

        Steps run one after another and stop at the first failure, which is
        raised as LinkCreationError (the cause is chained). Nothing is rolled
        back: the link and any sub-resources created before the failure stay
        on the server, and the error's ``link_uuid`` points at them.
        """
        if not isinstance(options, CreateLinkOptions):
            options = CreateLinkOptions.model_validate(options)

        # Every step goes through the sub-client current at entry.
        links = self._links

        step = "link"
        link_uuid: Optional[str] = None
        try:
            created = await links.post_links(options.to_link_request())
            if not created.uuid:
                raise LinkCreationIncompleteError()
            link_uuid = created.uuid
            self._log_step(step, link_uuid)

            if options.toll is not None:
                step = "toll"
                await links.post_links_by_link_uuid_tolls(link_uuid, options.toll)
                self._log_step(step, link_uuid)

            if options.resource is not None:
                step = "resource"
                await links.post_links_by_link_uuid_resources(
                    link_uuid, options.resource
                )
                self._log_step(step, link_uuid)

            for index, action in enumerate(options.actions):
                step = "action"
                await links.post_links_by_link_uuid_actions(link_uuid, action)
                self._log_step(step, link_uuid, index=index)

            step = "fetch"
            return await links.get_links_by_uuid_or_alias(link_uuid)
        except LinkCreationError:
            raise
        except (GatepayClientError, ValueError) as exc:
            log_event(
                "link_create_failed",
                logger,
                level=logging.WARNING,
                step=step,
                link_uuid=link_uuid,
                error_type=type(exc).__name__,
            )
            raise LinkCreationError(
                str(exc), step=step, link_uuid=link_uuid, cause=exc
            ) from exc

    @staticmethod
    def _log_step(step: str, link_uuid: str, **fields: Any) -> None:
        log_event("link_create_step", logger, step=step, link_uuid=link_uuid, **fields)


__all__ = ["Gatepay"]
