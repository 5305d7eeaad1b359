from __future__ import annotations

from gatepay_sdk.apis._base import BaseApi
from gatepay_sdk.models import NetworkList


class NetworksApi(BaseApi):
    async def get_networks(self) -> NetworkList:
        """Networks (chains) on which tolls can be paid."""
        return await self._get(
            NetworkList, "/networks", operation="get_networks", collection="networks"
        )
