from datetime import datetime, timedelta, timezone

import pytest

from accounts.application.services import (
    change_tier,
    load_account,
    reconcile_edit_window,
    record_manual_edit,
    set_auto_update_interval,
)
from accounts.domain.entities import Account, Tier
from auth.domain.entities import Identity
from conftest import OWNER_ID
from shared.exceptions import PolicyViolationError
from shared.infrastructure.local_cache import profile_key

NOW = datetime(2026, 5, 10, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def identity():
    return Identity(
        owner_id=OWNER_ID, display_name="Alice Smith", email="alice@example.com", email_verified=True
    )


def _account(**overrides) -> Account:
    values = dict(id=OWNER_ID, display_name="Alice", email="alice@example.com", last_edit_reset=NOW)
    values.update(overrides)
    return Account(**values)


def test_reconcile_resets_after_a_week():
    account = _account(edits_used=5, last_edit_reset=NOW - timedelta(days=8))

    reconciled = reconcile_edit_window(account, NOW)

    assert reconciled.edits_used == 0
    assert reconciled.last_edit_reset == NOW


def test_reconcile_within_window_is_unchanged():
    account = _account(edits_used=3, last_edit_reset=NOW - timedelta(days=6))
    assert reconcile_edit_window(account, NOW) is account


def test_reconcile_is_idempotent():
    account = _account(edits_used=5, last_edit_reset=NOW - timedelta(days=30))
    once = reconcile_edit_window(account, NOW)
    assert reconcile_edit_window(once, NOW) is once


async def test_load_account_creates_default(gateway, account_store, identity):
    account = await load_account(gateway, identity, NOW)

    assert account.tier == Tier.BASE
    assert account.edits_used == 0
    assert account.auto_update_interval_days == 14
    assert account.display_name == "Alice Smith"
    assert account_store.accounts[OWNER_ID] == account


async def test_load_account_resets_stale_window(gateway, account_store, identity):
    account_store.accounts[OWNER_ID] = _account(
        edits_used=5, last_edit_reset=NOW - timedelta(days=7)
    )

    account = await load_account(gateway, identity, NOW)

    assert account.edits_used == 0
    assert account_store.accounts[OWNER_ID].edits_used == 0


async def test_load_account_offline_uses_cache(gateway, connectivity, identity):
    await gateway.save_account(_account(tier=Tier.MID, edits_used=2))
    connectivity.set_online(False)

    account = await load_account(gateway, identity, NOW)

    assert account.tier == Tier.MID
    assert account.edits_used == 2


async def test_change_tier_resets_interval(gateway, cache):
    account = _account(tier=Tier.TOP, auto_update_interval_days=7)

    updated = await change_tier(gateway, account, Tier.MID)

    assert updated.tier == Tier.MID
    assert updated.auto_update_interval_days == 14
    assert cache.get(profile_key(OWNER_ID))["tier"] == "mid"


async def test_set_interval_allowed(gateway):
    updated = await set_auto_update_interval(gateway, _account(tier=Tier.MID), 30)
    assert updated.auto_update_interval_days == 30


async def test_set_interval_not_allowed_for_tier(gateway, account_store):
    with pytest.raises(PolicyViolationError):
        await set_auto_update_interval(gateway, _account(tier=Tier.BASE), 7)
    assert account_store.accounts == {}


async def test_record_manual_edit_survives_remote_failure(gateway, account_store, cache):
    account_store.error = ConnectionError("down")

    updated = await record_manual_edit(gateway, _account(edits_used=1), 2)

    assert updated.edits_used == 2
    assert cache.get(profile_key(OWNER_ID))["edits_used"] == 2
