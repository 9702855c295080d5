import jwt

from auth.domain.entities import Identity
from shared.config import settings
from shared.exceptions import AuthenticationError, AuthorizationError


def verify_token(token: str) -> Identity:
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
    except jwt.PyJWTError:
        raise AuthenticationError("Invalid or expired token")

    owner_id = payload.get("sub")
    if not owner_id:
        raise AuthenticationError("Token has no subject")

    return Identity(
        owner_id=str(owner_id),
        display_name=payload.get("name", ""),
        email=payload.get("email", ""),
        email_verified=bool(payload.get("email_verified", False)),
    )


def require_verified(identity: Identity) -> Identity:
    if not identity.email_verified:
        raise AuthorizationError("Email address not verified")
    return identity
