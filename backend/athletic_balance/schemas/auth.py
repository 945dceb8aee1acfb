from pydantic import BaseModel, EmailStr, Field


class SignInRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    full_name: str | None = Field(default=None, alias="fullName")

    class Config:
        populate_by_name = True
