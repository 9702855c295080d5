import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from accounts.domain.entities import Account, Tier
from auth.domain.entities import Identity
from documents.application.sync_gateway import SyncGateway
from quota.domain.policy import DEFAULT_INTERVAL_DAYS, allowed_intervals
from shared.exceptions import PolicyViolationError

logger = logging.getLogger(__name__)

EDIT_WINDOW = timedelta(days=7)


def reconcile_edit_window(account: Account, now: datetime | None = None) -> Account:
    """Reset the manual edit counter once the weekly window has elapsed.

    Runs whenever an account is loaded, not on a timer. Returns the same object
    when nothing changes.
    """
    now = now or datetime.now(timezone.utc)
    if now - account.last_edit_reset >= EDIT_WINDOW:
        return replace(account, edits_used=0, last_edit_reset=now)
    return account


def default_account(identity: Identity, now: datetime | None = None) -> Account:
    return Account(
        id=identity.owner_id,
        display_name=identity.display_name,
        email=identity.email,
        tier=Tier.BASE,
        edits_used=0,
        last_edit_reset=now or datetime.now(timezone.utc),
        auto_update_interval_days=DEFAULT_INTERVAL_DAYS,
    )


async def load_account(
    gateway: SyncGateway, identity: Identity, now: datetime | None = None
) -> Account:
    account = await gateway.get_account(identity.owner_id)
    if account is None:
        logger.info("Creating account for %s", identity.owner_id)
        account = default_account(identity, now)
        await gateway.save_account(account)
        return account

    reconciled = reconcile_edit_window(account, now)
    if reconciled is not account:
        logger.info("Edit window reset for %s", account.id)
        await gateway.save_account(reconciled)
    return reconciled


async def change_tier(gateway: SyncGateway, account: Account, tier: Tier) -> Account:
    updated = replace(account, tier=tier, auto_update_interval_days=DEFAULT_INTERVAL_DAYS)
    await gateway.save_account(updated)
    return updated


async def set_auto_update_interval(gateway: SyncGateway, account: Account, days: int) -> Account:
    permitted = allowed_intervals(account.tier)
    if days not in permitted:
        raise PolicyViolationError(
            f"Auto-update every {days} days is not available on the {account.tier.value} tier; "
            f"choose one of {sorted(permitted)}"
        )
    updated = replace(account, auto_update_interval_days=days)
    await gateway.save_account(updated)
    return updated


async def record_manual_edit(gateway: SyncGateway, account: Account, edits_used: int) -> Account:
    # the local counter is authoritative; a failed remote save is not rolled back
    updated = replace(account, edits_used=edits_used)
    await gateway.save_account(updated)
    return updated
