from pydantic import BaseModel


class IdentityResponse(BaseModel):
    owner_id: str
    display_name: str
    email: str
    email_verified: bool
