"""
Authentication module data models.
"""

from pydantic import BaseModel, Field


class TokenPayload(BaseModel):
    """Claims carried by an access token."""

    sub: str = Field(..., description="Subject (account ID)")
    username: str = Field(..., description="Username when the token was issued")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")


class AuthTokenResult(BaseModel):
    """Access token returned by register and login."""

    access_token: str = Field(..., description="Signed JWT")
    token_type: str = Field(default="bearer", description="Authorization scheme")
    expires_in: int = Field(..., description="Lifetime in seconds")
