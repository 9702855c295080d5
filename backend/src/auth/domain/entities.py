from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Authenticated user as asserted by the identity provider."""

    owner_id: str
    display_name: str
    email: str
    email_verified: bool = False
