import pytest

from accounts.domain.entities import Account, Tier
from quota.domain.policy import (
    allowed_intervals,
    can_create_document,
    can_edit,
    limits_for,
    remaining_edits,
)


def _account(tier: Tier, edits_used: int = 0) -> Account:
    return Account(id="u", display_name="U", email="u@example.com", tier=tier, edits_used=edits_used)


@pytest.mark.parametrize(
    "tier,max_documents,max_edits",
    [(Tier.BASE, 5, 5), (Tier.MID, 25, 15), (Tier.TOP, 50, None)],
)
def test_limits_per_tier(tier, max_documents, max_edits):
    limits = limits_for(tier)
    assert limits.max_documents == max_documents
    assert limits.max_edits == max_edits


def test_limits_accept_tier_value():
    assert limits_for("mid") == limits_for(Tier.MID)


def test_document_limit_is_exclusive():
    account = _account(Tier.BASE)
    assert can_create_document(account, 4)
    assert not can_create_document(account, 5)


def test_edit_limit():
    assert can_edit(_account(Tier.BASE, edits_used=4))
    assert not can_edit(_account(Tier.BASE, edits_used=5))
    assert can_edit(_account(Tier.MID, edits_used=14))
    assert not can_edit(_account(Tier.MID, edits_used=15))


def test_top_tier_edits_unbounded():
    assert can_edit(_account(Tier.TOP, edits_used=10_000))
    assert remaining_edits(_account(Tier.TOP, edits_used=10_000)) is None


def test_remaining_edits_never_negative():
    assert remaining_edits(_account(Tier.BASE, edits_used=2)) == 3
    assert remaining_edits(_account(Tier.BASE, edits_used=9)) == 0


def test_allowed_intervals():
    assert allowed_intervals(Tier.BASE) == {14}
    assert allowed_intervals(Tier.MID) == {14, 30}
    assert allowed_intervals(Tier.TOP) == {7, 14, 30}
