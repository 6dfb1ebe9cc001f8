"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated caller.

    Populated from a validated access token and made available to route
    handlers via dependency injection.
    """

    id: str = Field(..., description="Account ID")
    username: str = Field(..., description="Username at the time the token was issued")
    issued_at: Optional[datetime] = Field(None, description="Token issue time")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }
