from datetime import datetime

from pydantic import BaseModel

from accounts.domain.entities import Tier


class AccountResponse(BaseModel):
    id: str
    display_name: str
    email: str
    tier: Tier
    edits_used: int
    last_edit_reset: datetime
    auto_update_interval_days: int
    max_documents: int
    max_edits: int | None
    remaining_edits: int | None
    allowed_intervals: list[int]


class ChangeTierRequest(BaseModel):
    tier: Tier


class AutoUpdateIntervalRequest(BaseModel):
    days: int
