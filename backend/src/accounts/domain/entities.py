from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum


class Tier(StrEnum):
    BASE = "base"
    MID = "mid"
    TOP = "top"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Account:
    id: str
    display_name: str
    email: str
    tier: Tier = Tier.BASE
    edits_used: int = 0
    last_edit_reset: datetime = field(default_factory=_utcnow)
    auto_update_interval_days: int = 14
