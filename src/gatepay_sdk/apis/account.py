from __future__ import annotations

from typing import Optional

from gatepay_sdk.apis._base import BaseApi
from gatepay_sdk.models import (
    AccountBalance,
    AccountToken,
    GetAccountTransactionsRequest,
    TransactionList,
)


class AccountApi(BaseApi):
    async def get_account_balance(self) -> AccountBalance:
        return await self._get(
            AccountBalance, "/account/balance", operation="get_account_balance"
        )

    async def get_account_token(self) -> AccountToken:
        return await self._get(
            AccountToken, "/account/token", operation="get_account_token"
        )

    async def get_account_transactions(
        self, request: Optional[GetAccountTransactionsRequest] = None
    ) -> TransactionList:
        """List account transactions, one page at a time (defaults: page 1, 20 items)."""
        request = request or GetAccountTransactionsRequest()
        return await self._get(
            TransactionList,
            "/account/transactions",
            params=request.to_payload(),
            operation="get_account_transactions",
            collection="transactions",
        )
