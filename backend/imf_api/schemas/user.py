"""
User Schemas
Pydantic models for sign-up and sign-in payloads.
"""

from pydantic import BaseModel, Field

class Credentials(BaseModel):
    # Emails are matched case-sensitively, exactly as submitted
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)

class TokenResponse(BaseModel):
    token: str
