"""Tier limits.

Pure lookups; nothing here touches storage or the clock.
"""

from dataclasses import dataclass

from accounts.domain.entities import Account, Tier

DEFAULT_INTERVAL_DAYS = 14


@dataclass(frozen=True)
class QuotaLimits:
    max_documents: int
    max_edits: int | None  # None means unbounded
    intervals: frozenset[int]


_LIMITS: dict[Tier, QuotaLimits] = {
    Tier.BASE: QuotaLimits(max_documents=5, max_edits=5, intervals=frozenset({14})),
    Tier.MID: QuotaLimits(max_documents=25, max_edits=15, intervals=frozenset({14, 30})),
    Tier.TOP: QuotaLimits(max_documents=50, max_edits=None, intervals=frozenset({7, 14, 30})),
}


def limits_for(tier: Tier) -> QuotaLimits:
    return _LIMITS[Tier(tier)]


def can_create_document(account: Account, current_count: int) -> bool:
    return current_count < limits_for(account.tier).max_documents


def can_edit(account: Account) -> bool:
    max_edits = limits_for(account.tier).max_edits
    return max_edits is None or account.edits_used < max_edits


def allowed_intervals(tier: Tier) -> frozenset[int]:
    return limits_for(tier).intervals


def remaining_edits(account: Account) -> int | None:
    max_edits = limits_for(account.tier).max_edits
    if max_edits is None:
        return None
    return max(max_edits - account.edits_used, 0)
