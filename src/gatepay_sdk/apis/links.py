from __future__ import annotations

from typing import Any, Mapping, Optional, Union
from urllib.parse import quote

from gatepay_sdk.apis._base import BaseApi
from gatepay_sdk.models import (
    Action,
    Link,
    LinkList,
    PaymentList,
    PostLinksByLinkUuidTollsRequest,
    PostLinksRequest,
    Resource,
    Toll,
    action_request_adapter,
    resource_request_adapter,
)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def _clamp_limit(limit: int) -> int:
    """Clamp limit into a safe range to avoid huge payloads."""
    return max(1, min(limit, MAX_PAGE_SIZE))


def _segment(value: str) -> str:
    if not value:
        raise ValueError("path parameter must be a non-empty string")
    return quote(value, safe="")


class LinksApi(BaseApi):
    """Links and the tolls, resources, actions and payments scoped to them."""

    async def get_links(
        self, *, page: int = 1, limit: int = DEFAULT_PAGE_SIZE
    ) -> LinkList:
        if page < 1:
            raise ValueError("page must be >= 1")
        return await self._get(
            LinkList,
            "/links",
            params={"page": page, "limit": _clamp_limit(limit)},
            operation="get_links",
            collection="links",
        )

    async def post_links(
        self, request: Union[PostLinksRequest, Mapping[str, Any]]
    ) -> Link:
        if not isinstance(request, PostLinksRequest):
            request = PostLinksRequest.model_validate(request)
        return await self._post(
            Link, "/links", body=request.to_payload(), operation="post_links"
        )

    async def get_links_by_uuid_or_alias(self, uuid_or_alias: str) -> Link:
        return await self._get(
            Link,
            f"/links/{_segment(uuid_or_alias)}",
            operation="get_links_by_uuid_or_alias",
        )

    async def post_links_by_link_uuid_tolls(
        self,
        link_uuid: str,
        request: Union[PostLinksByLinkUuidTollsRequest, Mapping[str, Any]],
    ) -> Toll:
        if not isinstance(request, PostLinksByLinkUuidTollsRequest):
            request = PostLinksByLinkUuidTollsRequest.model_validate(request)
        return await self._post(
            Toll,
            f"/links/{_segment(link_uuid)}/tolls",
            body=request.to_payload(),
            operation="post_links_by_link_uuid_tolls",
        )

    async def post_links_by_link_uuid_resources(
        self, link_uuid: str, request: Any
    ) -> Resource:
        """
        Attach the resource served after payment. ``request`` is one of the
        resource models (RedirectResource, HtmlResource, ...) or a dict that
        validates into one by its ``type``.
        """
        resource = resource_request_adapter.validate_python(request)
        return await self._post(
            Resource,
            f"/links/{_segment(link_uuid)}/resources",
            body=resource.to_payload(),
            operation="post_links_by_link_uuid_resources",
        )

    async def post_links_by_link_uuid_actions(
        self, link_uuid: str, request: Any
    ) -> Action:
        action = action_request_adapter.validate_python(request)
        return await self._post(
            Action,
            f"/links/{_segment(link_uuid)}/actions",
            body=action.to_payload(),
            operation="post_links_by_link_uuid_actions",
        )

    async def get_links_by_link_uuid_payments(
        self,
        link_uuid: str,
        *,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        status: Optional[str] = None,
    ) -> PaymentList:
        if page < 1:
            raise ValueError("page must be >= 1")
        return await self._get(
            PaymentList,
            f"/links/{_segment(link_uuid)}/payments",
            params={"page": page, "limit": _clamp_limit(limit), "status": status},
            operation="get_links_by_link_uuid_payments",
            collection="payments",
        )
