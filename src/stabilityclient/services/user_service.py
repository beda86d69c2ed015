"""Account and balance endpoints."""

from typing import TYPE_CHECKING

from stabilityclient.models.responses import AccountResponse, BalanceResponse

if TYPE_CHECKING:
    from stabilityclient.client import StabilityClient


class UserService:
    """Manage the account and view account/organization balances."""

    def __init__(self, client: "StabilityClient"):
        self.client = client

    async def account(self) -> AccountResponse:
        """Get the account associated with the API key."""
        return await self.client.get("/user/account", AccountResponse)

    async def balance(self) -> BalanceResponse:
        """Get the credit balance of the account/organization."""
        return await self.client.get("/user/balance", BalanceResponse)
