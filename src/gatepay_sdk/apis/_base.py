"""
Shared plumbing for the per-resource API classes.
"""

from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from gatepay_sdk.client import GatepayClient, validate_model
from gatepay_sdk.core.config import Configuration

T = TypeVar("T", bound=BaseModel)


def collection_payload(payload: Any, key: str) -> Dict[str, Any]:
    """
    Normalize a list endpoint body into ``{key: [...], ...}``.
    The service may answer with a bare array or an object wrapping one.
    Raises ValueError if the expected structure is malformed.
    """
    if isinstance(payload, list):
        return {key: payload}
    items = payload.get(key, [])
    if items is None:
        items = []
    if not isinstance(items, list):
        raise ValueError(f"Expected '{key}' to be a list.")
    return {**payload, key: [i for i in items if isinstance(i, dict)]}


class BaseApi:
    """Binds one Configuration to its own GatepayClient; no retries, caching or business logic."""

    def __init__(
        self,
        configuration: Configuration,
        *,
        http: Optional[httpx.AsyncClient] = None,
        **transport_kwargs: Any,
    ):
        self.client = GatepayClient(
            configuration=configuration, http=http, **transport_kwargs
        )

    @property
    def configuration(self) -> Configuration:
        return self.client.configuration

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _get(
        self,
        model: Type[T],
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        operation: str,
        collection: Optional[str] = None,
    ) -> T:
        payload = await self.client.get(path, params=params, operation=operation)
        if collection is not None:
            payload = collection_payload(payload, collection)
        return validate_model(model, payload)

    async def _post(
        self, model: Type[T], path: str, *, body: Any, operation: str
    ) -> T:
        payload = await self.client.post(path, json=body, operation=operation)
        return validate_model(model, payload)


__all__ = ["BaseApi", "collection_payload"]
