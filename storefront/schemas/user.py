from pydantic import BaseModel, EmailStr, Field


class AdminLogin(BaseModel):
    email: EmailStr = Field(..., description="Valid email is required")
    password: str = Field(..., min_length=1, description="Password is required")


class AdminResponse(BaseModel):
    id: int
    email: str

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    access_token: str
    token_type: str
    user: AdminResponse
