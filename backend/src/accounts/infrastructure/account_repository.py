from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from accounts.domain.entities import Account, Tier
from accounts.infrastructure.models import AccountModel
from shared.infrastructure.timestamps import as_utc


class DbAccountRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def get(self, account_id: str) -> Account | None:
        async with self.session_factory() as session:
            model = await session.get(AccountModel, account_id)
            return _to_entity(model) if model else None

    async def put(self, account: Account) -> None:
        async with self.session_factory() as session:
            await session.merge(
                AccountModel(
                    id=account.id,
                    display_name=account.display_name,
                    email=account.email,
                    tier=account.tier.value,
                    edits_used=account.edits_used,
                    last_edit_reset=account.last_edit_reset,
                    auto_update_interval_days=account.auto_update_interval_days,
                )
            )
            await session.commit()


def _to_entity(model: AccountModel) -> Account:
    return Account(
        id=model.id,
        display_name=model.display_name,
        email=model.email,
        tier=Tier(model.tier),
        edits_used=model.edits_used,
        last_edit_reset=as_utc(model.last_edit_reset),
        auto_update_interval_days=model.auto_update_interval_days,
    )
