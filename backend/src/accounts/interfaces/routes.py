from fastapi import APIRouter, Depends

from accounts.application.services import change_tier, set_auto_update_interval
from accounts.domain.entities import Account
from accounts.interfaces.schemas import (
    AccountResponse,
    AutoUpdateIntervalRequest,
    ChangeTierRequest,
)
from documents.application.sync_gateway import SyncGateway
from quota.domain.policy import limits_for, remaining_edits
from shared.dependencies import get_current_account, get_gateway

router = APIRouter(prefix="/api/account", tags=["account"])


def _response(account: Account) -> AccountResponse:
    limits = limits_for(account.tier)
    return AccountResponse(
        id=account.id,
        display_name=account.display_name,
        email=account.email,
        tier=account.tier,
        edits_used=account.edits_used,
        last_edit_reset=account.last_edit_reset,
        auto_update_interval_days=account.auto_update_interval_days,
        max_documents=limits.max_documents,
        max_edits=limits.max_edits,
        remaining_edits=remaining_edits(account),
        allowed_intervals=sorted(limits.intervals),
    )


@router.get("/", response_model=AccountResponse)
async def get_account(account: Account = Depends(get_current_account)):
    return _response(account)


@router.put("/tier", response_model=AccountResponse)
async def update_tier(
    body: ChangeTierRequest,
    account: Account = Depends(get_current_account),
    gateway: SyncGateway = Depends(get_gateway),
):
    return _response(await change_tier(gateway, account, body.tier))


@router.put("/auto-update-interval", response_model=AccountResponse)
async def update_auto_update_interval(
    body: AutoUpdateIntervalRequest,
    account: Account = Depends(get_current_account),
    gateway: SyncGateway = Depends(get_gateway),
):
    return _response(await set_auto_update_interval(gateway, account, body.days))
