from typing import Protocol

from accounts.domain.entities import Account


class AccountStore(Protocol):
    async def get(self, account_id: str) -> Account | None: ...

    async def put(self, account: Account) -> None: ...
