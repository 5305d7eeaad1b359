from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
    model_validator,
)


class ApiModel(BaseModel):
    """Response model: tolerant of fields the service adds later."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _null_collections_as_empty(cls, data: Any) -> Any:
        # The service may send null where a list or object is expected.
        if not isinstance(data, dict):
            return data
        for name, field in cls.model_fields.items():
            if field.default_factory is None:
                continue
            for key in {name, field.alias or name}:
                if key in data and data[key] is None:
                    data = {k: v for k, v in data.items() if k != key}
        return data


class RequestModel(BaseModel):
    """Request model: unknown fields are a caller error."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# --- Shared ---


class Pagination(ApiModel):
    total: Optional[int] = None
    page: Optional[int] = None
    limit: Optional[int] = None


# --- Tolls ---


class TollPaymentRequirement(RequestModel):
    """
    One accepted way to pay. ``amount`` is an integer string in the asset's
    smallest unit (e.g. "1000000" is 1 USDC with 6 decimals); scaling is up
    to the caller.
    """

    asset_network: str = Field(alias="assetNetwork", min_length=1)
    asset_address: str = Field(alias="assetAddress", min_length=1)
    amount: str = Field(pattern=r"^[0-9]+$")
    destination_address: str = Field(alias="destinationAddress", min_length=1)

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_as_string(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class PostLinksByLinkUuidTollsRequest(RequestModel):
    toll_payment_requirements: List[TollPaymentRequirement] = Field(
        alias="tollPaymentRequirements", min_length=1
    )


class TollRequirement(ApiModel):
    asset_network: Optional[str] = Field(default=None, alias="assetNetwork")
    asset_address: Optional[str] = Field(default=None, alias="assetAddress")
    amount: Optional[str] = None
    destination_address: Optional[str] = Field(
        default=None, alias="destinationAddress"
    )


class Toll(ApiModel):
    uuid: Optional[str] = None
    link_uuid: Optional[str] = Field(default=None, alias="linkUuid")
    toll_payment_requirements: List[TollRequirement] = Field(
        default_factory=list, alias="tollPaymentRequirements"
    )


# --- Resources ---

ResourceType = Literal["redirect", "html", "file", "link", "proxy", "tunnel"]


class UrlResourceData(RequestModel):
    url: str = Field(min_length=1)
    description: Optional[str] = None


class HtmlResourceData(RequestModel):
    html: str = Field(min_length=1)
    description: Optional[str] = None


class RedirectResource(RequestModel):
    """Server answers with an HTTP redirect to ``data.url`` after payment."""

    type: Literal["redirect"] = "redirect"
    data: UrlResourceData


class FileResource(RequestModel):
    type: Literal["file"] = "file"
    data: UrlResourceData


class LinkResource(RequestModel):
    """The protected URL is handed to the payer after payment."""

    type: Literal["link"] = "link"
    data: UrlResourceData


class ProxyResource(RequestModel):
    """Requests are reverse-proxied to ``data.url`` after payment."""

    type: Literal["proxy"] = "proxy"
    data: UrlResourceData


class TunnelResource(RequestModel):
    """Like proxy, but ``data.url`` is a local service reached via a tunnel."""

    type: Literal["tunnel"] = "tunnel"
    data: UrlResourceData


class HtmlResource(RequestModel):
    """Static HTML served after payment."""

    type: Literal["html"] = "html"
    data: HtmlResourceData


PostLinksByLinkUuidResourcesRequest = Annotated[
    Union[
        RedirectResource,
        HtmlResource,
        FileResource,
        LinkResource,
        ProxyResource,
        TunnelResource,
    ],
    Field(discriminator="type"),
]

resource_request_adapter: TypeAdapter[Any] = TypeAdapter(
    PostLinksByLinkUuidResourcesRequest
)


class Resource(ApiModel):
    uuid: Optional[str] = None
    type: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)

    @property
    def url(self) -> Optional[str]:
        value = self.data.get("url")
        return value if isinstance(value, str) else None


# --- Actions ---

ACTION_TRIGGERS = ("payment_success", "link_accessed")


class CallbackActionData(RequestModel):
    url: str = Field(min_length=1)
    method: str = "POST"

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        return value.upper()


class CallbackAction(RequestModel):
    """Webhook called by the service when ``trigger`` fires."""

    type: Literal["callback"] = "callback"
    trigger: str = Field(min_length=1)
    data: CallbackActionData


# Only "callback" exists today; becomes a discriminated Union once a second type ships.
PostLinksByLinkUuidActionsRequest = CallbackAction

action_request_adapter: TypeAdapter[Any] = TypeAdapter(
    PostLinksByLinkUuidActionsRequest
)


class Action(ApiModel):
    uuid: Optional[str] = None
    type: Optional[str] = None
    trigger: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)


# --- Links ---


class PostLinksRequest(RequestModel):
    name: str = Field(min_length=1)
    alias: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    type: Optional[str] = None


class CreateLinkOptions(PostLinksRequest):
    """Link fields plus the optional sub-resources attached by Gatepay.create_link."""

    toll: Optional[PostLinksByLinkUuidTollsRequest] = None
    resource: Optional[PostLinksByLinkUuidResourcesRequest] = None
    actions: List[PostLinksByLinkUuidActionsRequest] = Field(default_factory=list)

    def to_link_request(self) -> PostLinksRequest:
        return PostLinksRequest.model_validate(
            self.model_dump(include=set(PostLinksRequest.model_fields))
        )


class Link(ApiModel):
    uuid: Optional[str] = None
    name: Optional[str] = None
    alias: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    type: Optional[str] = None
    url: Optional[str] = None
    toll: Optional[Toll] = None
    resource: Optional[Resource] = None
    actions: List[Action] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")


class LinkList(ApiModel):
    links: List[Link] = Field(default_factory=list)
    pagination: Optional[Pagination] = None


# --- Payments ---


class Payment(ApiModel):
    uuid: str
    amount: Optional[str] = None
    asset_address: Optional[str] = Field(default=None, alias="assetAddress")
    network: Optional[str] = None
    status: Optional[str] = None
    transaction_hash: Optional[str] = Field(default=None, alias="transactionHash")
    payer_address: Optional[str] = Field(default=None, alias="payerAddress")
    destination_address: Optional[str] = Field(
        default=None, alias="destinationAddress"
    )
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")


class PaymentList(ApiModel):
    payments: List[Payment] = Field(default_factory=list)
    pagination: Optional[Pagination] = None


# --- Account ---


class AccountBalance(ApiModel):
    """Balance shape is owned by the service; unknown fields are preserved."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class AccountToken(ApiModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    token: Optional[str] = None


class GetAccountTransactionsRequest(RequestModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1)


class Transaction(ApiModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    uuid: Optional[str] = None
    amount: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")


class TransactionList(ApiModel):
    transactions: List[Transaction] = Field(default_factory=list)
    pagination: Optional[Pagination] = None


# --- Networks ---


class Network(ApiModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: Optional[str] = None
    chain_id: Optional[int] = Field(default=None, alias="chainId")


class NetworkList(ApiModel):
    networks: List[Network] = Field(default_factory=list)
