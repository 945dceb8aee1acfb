from datetime import datetime

from pydantic import BaseModel


class ProfilePublic(BaseModel):
    full_name: str | None = None
    age: int | None = None
    sport: str | None = None
    school: str | None = None

    class Config:
        from_attributes = True


class UserPublic(BaseModel):
    id: str
    email: str
    provider: str = "email"
    email_verified: bool = False
    created_at: datetime | None = None
    profile: ProfilePublic | None = None

    class Config:
        from_attributes = True


class UserEnvelope(BaseModel):
    user: UserPublic
